# knn_classifier.py
from typing import Any, Dict

from sklearn.neighbors import KNeighborsClassifier

from .base import StanceEstimator


class KNNStance(StanceEstimator):
    """k-nearest-neighbours majority vote over term-count vectors.

    Fitting only stores the reference rows. Search is brute force, so the
    neighbour set does not depend on a tree build; equidistant neighbours
    follow scikit-learn's brute-force ordering. A tied vote goes to the first
    class in sorted order (Favorable < Neutral < Oppose).

    params:
      - n_neighbors: k (default 3)
      - metric: distance metric (default euclidean)
    """

    name = "KNN"

    def _build(self):
        return KNeighborsClassifier(
            n_neighbors=self.p.get("n_neighbors", 3),
            weights="uniform",
            algorithm="brute",
            metric=self.p.get("metric", "euclidean"),
        )


def create_knn_factory():
    def factory(params: Dict[str, Any]):
        return KNNStance(**params)

    return factory
