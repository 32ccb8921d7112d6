#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Multi-class Performance Metrics

This module implements the classification metrics used to compare the stance
classifiers:
- Confusion Matrix (fixed label order, rows = true, columns = predicted)
- Accuracy
- Precision / Recall (per class, macro, micro, weighted)
- F1-Score
- Classification Report

Undefined values (a class with no predicted or no true members) are NaN
rather than errors. Macro averages skip NaN entries. The macro F1 is the
harmonic mean of macro precision and macro recall, not the mean of the
per-class F1 values.
"""

import numpy as np
from typing import Dict, List, Optional, Sequence, Union


def confusion_matrix(
    y_true: Sequence, y_pred: Sequence, labels: Optional[List] = None
) -> np.ndarray:
    """
    Compute confusion matrix.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        labels: List of labels to include in matrix (if None, use unique labels)

    Returns:
        Confusion matrix as 2D numpy array
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    if labels is None:
        labels = sorted(set(y_true) | set(y_pred))

    label_to_idx = {label: i for i, label in enumerate(labels)}
    cm = np.zeros((len(labels), len(labels)), dtype=int)

    for true_label, pred_label in zip(y_true, y_pred):
        if true_label not in label_to_idx or pred_label not in label_to_idx:
            raise ValueError(f"Label outside {list(labels)}: {true_label!r}/{pred_label!r}")
        cm[label_to_idx[true_label], label_to_idx[pred_label]] += 1

    return cm


def accuracy_score(y_true: Sequence, y_pred: Sequence) -> float:
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    if len(y_true) == 0:
        return 0.0

    return float(np.sum(y_true == y_pred) / len(y_true))


def _safe_ratio(num: np.ndarray, den: np.ndarray, zero_division: float) -> np.ndarray:
    num = num.astype(float)
    den = den.astype(float)
    out = np.full(num.shape, zero_division, dtype=float)
    np.divide(num, den, out=out, where=den > 0)
    return out


def nanmean(values: Sequence[float]) -> float:
    """Mean over the defined entries; NaN when none is defined."""
    values = np.asarray(values, dtype=float)
    defined = values[~np.isnan(values)]
    if defined.size == 0:
        return float("nan")
    return float(defined.mean())


def _average(
    per_class: np.ndarray, cm: np.ndarray, average: Optional[str], y_true, y_pred
) -> Union[float, np.ndarray]:
    if average == "macro":
        return nanmean(per_class)
    elif average == "micro":
        # single-label multiclass: micro precision = micro recall = accuracy
        return accuracy_score(y_true, y_pred)
    elif average == "weighted":
        support = np.sum(cm, axis=1).astype(float)
        mask = ~np.isnan(per_class) & (support > 0)
        if not mask.any():
            return float("nan")
        return float(np.average(per_class[mask], weights=support[mask]))
    elif average is None:
        return per_class
    else:
        raise ValueError(f"Unknown averaging strategy: {average}")


def precision_score(
    y_true: Sequence,
    y_pred: Sequence,
    average: Optional[str] = "macro",
    labels: Optional[List] = None,
    zero_division: float = np.nan,
) -> Union[float, np.ndarray]:
    """
    Precision (positive predictive value), TP / (TP + FP).

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        average: 'macro', 'micro', 'weighted' or None for per-class values
        labels: List of labels to include (if None, use unique labels)
        zero_division: Value for classes that were never predicted

    Returns:
        Precision score(s)
    """
    if labels is None:
        labels = sorted(set(np.asarray(y_true)) | set(np.asarray(y_pred)))

    cm = confusion_matrix(y_true, y_pred, labels)
    tp = np.diag(cm)
    precisions = _safe_ratio(tp, np.sum(cm, axis=0), zero_division)
    return _average(precisions, cm, average, y_true, y_pred)


def recall_score(
    y_true: Sequence,
    y_pred: Sequence,
    average: Optional[str] = "macro",
    labels: Optional[List] = None,
    zero_division: float = np.nan,
) -> Union[float, np.ndarray]:
    """
    Recall (sensitivity), TP / (TP + FN).

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        average: 'macro', 'micro', 'weighted' or None for per-class values
        labels: List of labels to include (if None, use unique labels)
        zero_division: Value for classes absent from y_true

    Returns:
        Recall score(s)
    """
    if labels is None:
        labels = sorted(set(np.asarray(y_true)) | set(np.asarray(y_pred)))

    cm = confusion_matrix(y_true, y_pred, labels)
    tp = np.diag(cm)
    recalls = _safe_ratio(tp, np.sum(cm, axis=1), zero_division)
    return _average(recalls, cm, average, y_true, y_pred)


def f1_from_precision_recall(precision: float, recall: float) -> float:
    """F1 = 2PR / (P + R); NaN when either input is undefined or both are zero."""
    if np.isnan(precision) or np.isnan(recall) or precision + recall == 0:
        return float("nan")
    return float(2 * precision * recall / (precision + recall))


def f1_score(
    y_true: Sequence,
    y_pred: Sequence,
    average: Optional[str] = "macro",
    labels: Optional[List] = None,
    zero_division: float = np.nan,
) -> Union[float, np.ndarray]:
    """
    F1 score.

    With ``average="macro"`` this is the harmonic mean of macro precision and
    macro recall. ``average=None`` gives the per-class harmonic means.
    """
    if labels is None:
        labels = sorted(set(np.asarray(y_true)) | set(np.asarray(y_pred)))

    if average == "macro":
        precision = precision_score(y_true, y_pred, "macro", labels, zero_division)
        recall = recall_score(y_true, y_pred, "macro", labels, zero_division)
        return f1_from_precision_recall(precision, recall)

    if average == "micro":
        return accuracy_score(y_true, y_pred)

    precisions = precision_score(y_true, y_pred, None, labels, zero_division)
    recalls = recall_score(y_true, y_pred, None, labels, zero_division)
    f1_scores = np.array(
        [f1_from_precision_recall(p, r) for p, r in zip(precisions, recalls)]
    )
    cm = confusion_matrix(y_true, y_pred, labels)
    return _average(f1_scores, cm, average, y_true, y_pred)


def classification_report(
    y_true: Sequence,
    y_pred: Sequence,
    labels: Optional[List] = None,
    digits: int = 2,
) -> str:
    """
    Generate a text classification report.

    Undefined cells are printed as ``nan``.
    """
    if labels is None:
        labels = sorted(set(np.asarray(y_true)) | set(np.asarray(y_pred)))
    target_names = [str(label) for label in labels]

    cm = confusion_matrix(y_true, y_pred, labels)
    precision = precision_score(y_true, y_pred, average=None, labels=labels)
    recall = recall_score(y_true, y_pred, average=None, labels=labels)
    f1 = f1_score(y_true, y_pred, average=None, labels=labels)
    support = np.sum(cm, axis=1)

    precision_macro = nanmean(precision)
    recall_macro = nanmean(recall)
    f1_macro = f1_from_precision_recall(precision_macro, recall_macro)

    width = max(max(len(name) for name in target_names), len("macro avg"))

    report = (
        f"{'':>{width}} {'precision':>9} {'recall':>9} {'f1-score':>9} {'support':>9}\n"
    )
    report += "\n"

    for name, p, r, f, s in zip(target_names, precision, recall, f1, support):
        report += f"{name:>{width}} {p:>9.{digits}f} {r:>9.{digits}f} {f:>9.{digits}f} {s:>9}\n"

    report += "\n"
    report += f"{'accuracy':>{width}} {'':>9} {'':>9} {accuracy_score(y_true, y_pred):>9.{digits}f} {np.sum(support):>9}\n"
    report += f"{'macro avg':>{width}} {precision_macro:>9.{digits}f} {recall_macro:>9.{digits}f} {f1_macro:>9.{digits}f} {np.sum(support):>9}\n"

    return report


def compute_all_metrics(
    y_true: Sequence, y_pred: Sequence, labels: Optional[List] = None
) -> Dict[str, object]:
    """
    Compute the metrics reported for each model.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        labels: Fixed label order (if None, use unique labels)

    Returns:
        Dictionary with accuracy, macro precision/recall, F1, per-class
        precision/recall and the confusion matrix
    """
    if labels is None:
        labels = sorted(set(np.asarray(y_true)) | set(np.asarray(y_pred)))

    per_precision = precision_score(y_true, y_pred, average=None, labels=labels)
    per_recall = recall_score(y_true, y_pred, average=None, labels=labels)
    precision = nanmean(per_precision)
    recall = nanmean(per_recall)

    return {
        "accuracy": accuracy_score(y_true, y_pred),
        "precision_macro": precision,
        "recall_macro": recall,
        "f1_macro": f1_from_precision_recall(precision, recall),
        "precision_per_class": {str(l): float(v) for l, v in zip(labels, per_precision)},
        "recall_per_class": {str(l): float(v) for l, v in zip(labels, per_recall)},
        "confusion_matrix": confusion_matrix(y_true, y_pred, labels).tolist(),
        "labels": [str(l) for l in labels],
    }
