# base.py
from typing import Any, Dict

import numpy as np


class StanceEstimator:
    """sklearn 风格的 fit/predict 封装，子类只需实现 _build()。

    params 原样保存在 self.p 中，由子类读取。
    """

    name = "estimator"

    def __init__(self, **params: Dict[str, Any]):
        self.p = params
        self.model = None

    def _build(self):
        raise NotImplementedError

    def fit(self, X, y):
        self.model = self._build()
        self.model.fit(X, np.asarray(y))
        return self

    def predict(self, X) -> np.ndarray:
        if self.model is None:
            raise ValueError(f"{self.name} must be fitted before predict()")
        return np.asarray(self.model.predict(X))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.p})"
