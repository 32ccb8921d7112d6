#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Held-out Evaluation and Model Selection for the Stance Classifiers
"""

from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from ..core.metrics import compute_all_metrics
from ..features import FeatureMatrix
from ..models.models_registry import MODEL_NAMES, get_factory_and_params, resolve_model_key
from ..prepare_dataset import STANCE_LABELS


def select_better_model(first: Dict[str, Any], second: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pick between two evaluated models.

    ``first`` is chosen only if both its accuracy and its F1 are strictly
    greater than those of ``second``; in every other case (including ties and
    NaN metrics) ``second`` is chosen. The rule is not symmetric.
    """
    first_acc, first_f1 = first["test_metrics"]["accuracy"], first["test_metrics"]["f1_macro"]
    second_acc, second_f1 = second["test_metrics"]["accuracy"], second["test_metrics"]["f1_macro"]
    if first_acc > second_acc and first_f1 > second_f1:
        return first
    return second


def format_confusion_matrix(cm: Sequence[Sequence[int]], labels: Sequence[str]) -> pd.DataFrame:
    return pd.DataFrame(
        np.asarray(cm),
        index=[f"true:{l}" for l in labels],
        columns=[f"pred:{l}" for l in labels],
    )


class ModelComparison:
    def __init__(self, labels: Sequence[str] = STANCE_LABELS, random_state: int = 42):
        """
        Initialize the comparison.

        Args:
            labels: Fixed stance order used for every confusion matrix
            random_state: Seed forwarded to models that take one
        """
        self.labels = list(labels)
        self.random_state = random_state

    def evaluate_model(
        self, model: str, train: FeatureMatrix, test: FeatureMatrix
    ) -> Dict[str, Any]:
        """
        Fit one model on the train partition and score it on the test partition.

        Args:
            model: Registry key ('svm' or 'knn')
            train: Train rows of the feature matrix
            test: Test rows of the feature matrix

        Returns:
            Dictionary with test metrics and predictions
        """
        key = resolve_model_key(model)
        model_name = MODEL_NAMES[key]

        print(f"\n{'='*60}")
        print(f"Evaluating {model_name} on Test Set")
        print(f"{'='*60}")

        factory, params = get_factory_and_params(key, random_state=self.random_state)
        print(f"Params: {params}")

        print("Training model...")
        estimator = factory(params)
        estimator.fit(train.X, train.labels)

        print("Making predictions...")
        y_pred = estimator.predict(test.X)

        test_metrics = compute_all_metrics(test.labels, y_pred, labels=self.labels)

        results = {
            "model_key": key,
            "model_name": model_name,
            "params": params,
            "test_metrics": test_metrics,
            "predictions": [str(p) for p in y_pred],
            "test_size": len(test),
            "train_size": len(train),
        }

        self.print_results(results)
        return results

    def print_results(self, results: Dict[str, Any]) -> None:
        m = results["test_metrics"]
        print("\nConfusion Matrix:")
        print(format_confusion_matrix(m["confusion_matrix"], m["labels"]))

        print("\nPer-class:")
        for label in m["labels"]:
            print(
                f"  {label:<10} precision={m['precision_per_class'][label]:.4f}  "
                f"recall={m['recall_per_class'][label]:.4f}"
            )

        print(f"\nTest Set Results:")
        print(f"  Accuracy:  {m['accuracy']:.4f}")
        print(f"  Precision: {m['precision_macro']:.4f}")
        print(f"  Recall:    {m['recall_macro']:.4f}")
        print(f"  F1-Score:  {m['f1_macro']:.4f}")

        undefined = [l for l in m["labels"] if np.isnan(m["precision_per_class"][l])]
        if undefined:
            print(f"\nNote: precision undefined (never predicted) for {undefined}")

    def evaluate_all(
        self, models: Sequence[str], train: FeatureMatrix, test: FeatureMatrix
    ) -> Dict[str, Dict[str, Any]]:
        return {resolve_model_key(m): self.evaluate_model(m, train, test) for m in models}

    def create_comparison_table(self, test_results: Dict[str, Any]) -> pd.DataFrame:
        """
        Create a comparison table of test results.

        Args:
            test_results: Results from evaluate_all

        Returns:
            DataFrame with one row per model
        """
        comparison_data: List[Dict[str, Any]] = []

        for results in test_results.values():
            test_metrics = results["test_metrics"]
            comparison_data.append(
                {
                    "Model": results["model_name"],
                    "Accuracy": test_metrics["accuracy"],
                    "Precision": test_metrics["precision_macro"],
                    "Recall": test_metrics["recall_macro"],
                    "F1": test_metrics["f1_macro"],
                    "Test_Size": results["test_size"],
                    "Train_Size": results["train_size"],
                }
            )

        return pd.DataFrame(comparison_data)
