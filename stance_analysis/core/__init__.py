# Core components for stance classification

from .splitting import split_by_id
from .metrics import (
    accuracy_score,
    precision_score,
    recall_score,
    f1_score,
    f1_from_precision_recall,
    confusion_matrix,
    classification_report,
    compute_all_metrics,
)

__all__ = [
    "split_by_id",
    "accuracy_score",
    "precision_score",
    "recall_score",
    "f1_score",
    "f1_from_precision_recall",
    "confusion_matrix",
    "classification_report",
    "compute_all_metrics",
]
