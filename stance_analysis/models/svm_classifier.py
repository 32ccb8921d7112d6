# svm_classifier.py
from typing import Any, Dict

from sklearn.svm import SVC

from .base import StanceEstimator


class LinearSVMStance(StanceEstimator):
    """Linear-kernel support vector classifier on term counts.

    params:
      - C: regularization cost
      - random_state: seed passed to libsvm
    """

    name = "SVM"

    def _build(self):
        return SVC(
            kernel="linear",
            C=self.p.get("C", 1.0),
            random_state=self.p.get("random_state", 42),
        )


def create_svm_factory():
    def factory(params: Dict[str, Any]):
        return LinearSVMStance(**params)

    return factory
