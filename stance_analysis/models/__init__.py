# Model implementations for stance classification

from .base import StanceEstimator
from .svm_classifier import LinearSVMStance, create_svm_factory
from .knn_classifier import KNNStance, create_knn_factory
from .models_registry import MODEL_NAMES, MODEL_PARAMS, get_factory_and_params, resolve_model_key

__all__ = [
    "StanceEstimator",
    "LinearSVMStance",
    "create_svm_factory",
    "KNNStance",
    "create_knn_factory",
    "MODEL_NAMES",
    "MODEL_PARAMS",
    "get_factory_and_params",
    "resolve_model_key",
]
