# Experimental components for stance classification

from .comparison import ModelComparison, select_better_model
from .pipeline import StancePipeline

__all__ = [
    "ModelComparison",
    "select_better_model",
    "StancePipeline",
]
