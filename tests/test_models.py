import numpy as np
import pytest
from scipy import sparse

from stance_analysis.models import (
    KNNStance,
    LinearSVMStance,
    get_factory_and_params,
    resolve_model_key,
)


def _toy_data():
    X = sparse.csr_matrix(
        np.array(
            [
                [3, 0, 0],
                [2, 0, 0],
                [4, 1, 0],
                [0, 3, 0],
                [0, 2, 1],
                [0, 4, 0],
            ]
        )
    )
    y = np.array(["Favorable"] * 3 + ["Oppose"] * 3)
    return X, y


@pytest.mark.parametrize("model", ["svm", "knn"])
def test_shared_fit_predict_contract(model):
    X, y = _toy_data()
    factory, params = get_factory_and_params(model, random_state=0)
    est = factory(params)
    assert est.fit(X, y) is est
    pred = est.predict(sparse.csr_matrix([[5, 0, 0], [0, 5, 0]]))
    assert list(pred) == ["Favorable", "Oppose"]


def test_predict_before_fit_raises():
    with pytest.raises(ValueError):
        KNNStance().predict(np.zeros((1, 3)))


def test_registry_params():
    _, svm_params = get_factory_and_params("svm", random_state=5)
    assert svm_params == {"C": 1.0, "random_state": 5}
    _, knn_params = get_factory_and_params("KNN")
    assert knn_params["n_neighbors"] == 3


def test_registry_aliases_and_unknown():
    assert resolve_model_key("linear_svm") == "svm"
    assert resolve_model_key("nearest_neighbors") == "knn"
    with pytest.raises(ValueError):
        get_factory_and_params("random_forest")


def test_svm_is_linear_kernel():
    X, y = _toy_data()
    est = LinearSVMStance(C=1.0, random_state=0).fit(X, y)
    assert est.model.kernel == "linear"


def test_knn_vote_tie_goes_to_first_sorted_class():
    # k=2 with one neighbour from each class: tie, Favorable sorts first
    X = np.array([[0.0], [2.0]])
    y = np.array(["Oppose", "Favorable"])
    est = KNNStance(n_neighbors=2).fit(X, y)
    assert list(est.predict(np.array([[1.0]]))) == ["Favorable"]


def test_knn_majority_of_three():
    X = np.array([[0.0], [0.1], [0.2], [5.0], [5.1]])
    y = np.array(["Oppose", "Oppose", "Favorable", "Favorable", "Favorable"])
    est = KNNStance().fit(X, y)
    assert list(est.predict(np.array([[0.05]]))) == ["Oppose"]
