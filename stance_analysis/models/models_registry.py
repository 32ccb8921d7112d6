# models_registry.py
from typing import Any, Callable, Dict, Tuple

from .svm_classifier import create_svm_factory
from .knn_classifier import create_knn_factory

MODEL_PARAMS: Dict[str, Dict[str, Any]] = {
    "svm": {"C": 1.0},
    "knn": {"n_neighbors": 3, "metric": "euclidean"},
}

MODEL_NAMES = {
    "svm": "SVM (linear kernel)",
    "knn": "KNN (k=3)",
}


def resolve_model_key(model: str) -> str:
    model = model.lower()
    if model in {"svm", "linear_svm", "svc"}:
        return "svm"
    if model in {"knn", "nearest_neighbors", "kneighbors"}:
        return "knn"
    raise ValueError(f"Unknown model: {model}")


def get_factory_and_params(model: str, random_state: int = 42) -> Tuple[Callable, Dict[str, Any]]:
    """
    返回 (factory, params)。factory: params(dict) -> estimator
    """
    key = resolve_model_key(model)
    if key == "svm":
        return create_svm_factory(), {**MODEL_PARAMS["svm"], "random_state": random_state}
    return create_knn_factory(), dict(MODEL_PARAMS["knn"])
