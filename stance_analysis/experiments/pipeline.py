#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Main Pipeline for Comment Stance Classification

This module runs the full analysis once, front to back:
1. Data loading, stance labelling and stratified sampling
2. Text normalization and term-count features
3. Train/test split keyed by comment id
4. Training and held-out evaluation of the SVM and KNN classifiers
5. Model selection and snapshot export
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

import pandas as pd

from ..core.splitting import split_by_id
from ..features import DEFAULT_MIN_DF, FeatureMatrix, build_feature_matrix, save_vocabulary
from ..models.models_registry import resolve_model_key
from ..prepare_dataset import prepare_dataset
from .comparison import ModelComparison, select_better_model
from .visualization import export_summary_table, plot_confusion_matrices

DEFAULT_SAMPLE_SIZE = 5000
DEFAULT_TEST_SIZE = 0.2
DEFAULT_MODELS = ("svm", "knn")


class StancePipeline:
    """
    Stance classification pipeline.

    Every stage returns new objects; nothing upstream is modified in place.
    """

    def __init__(
        self,
        data_path: str,
        results_dir: str = "results",
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        test_size: float = DEFAULT_TEST_SIZE,
        random_state: int = 42,
        min_df: float = DEFAULT_MIN_DF,
        models: Sequence[str] = DEFAULT_MODELS,
        make_plots: bool = False,
        stop_words: Optional[Iterable[str]] = None,
        lemmatizer=None,
    ):
        """
        Initialize the pipeline.

        Args:
            data_path: Path to the raw comment CSV
            results_dir: Directory for snapshots and summaries
            sample_size: Target size of the stratified sample
            test_size: Fraction of the sample held out for testing
            random_state: Random seed for sampling, splitting and the SVM
            min_df: Minimum document frequency for a term to be kept
            models: Model keys, evaluated in order; the first is the challenger
            make_plots: Whether to save a confusion-matrix figure
            stop_words: Stopword set (NLTK English list if None)
            lemmatizer: Lemmatizer with ``lemmatize(token)`` (WordNet if None)
        """
        self.data_path = Path(data_path)
        self.results_dir = Path(results_dir)
        self.sample_size = sample_size
        self.test_size = test_size
        self.random_state = random_state
        self.min_df = min_df
        self.models = list(dict.fromkeys(resolve_model_key(m) for m in models))
        self.make_plots = make_plots
        self.stop_words = stop_words
        self.lemmatizer = lemmatizer
        self.comparison_table: Optional[pd.DataFrame] = None
        self.results_dir.mkdir(parents=True, exist_ok=True)

    def load_and_prepare_data(self) -> pd.DataFrame:
        print("=" * 60)
        print("STEP 1: Loading, Labelling and Sampling")
        print("=" * 60)

        sample, meta = prepare_dataset(
            src_path=self.data_path,
            outdir=self.results_dir,
            sample_size=self.sample_size,
            random_state=self.random_state,
        )
        print(f"[info] Loaded {meta['final_rows']} rows, dropped {meta['dropped_rows']} rows")
        print(f"[info] Class balance (full): {meta['class_balance_full']}")
        print(f"[info] Class balance (sample): {meta['class_balance_sample']}")
        print(f"[info] Sample snapshot: {meta['out_sample']}")

        print("\nSample data:")
        print(sample.head())
        return sample

    def build_features(self, sample: pd.DataFrame) -> FeatureMatrix:
        print("\n" + "=" * 60)
        print("STEP 2: Text Normalization and Term Counts")
        print("=" * 60)

        features, vectorizer = build_feature_matrix(
            sample,
            min_df=self.min_df,
            stop_words=self.stop_words,
            lemmatizer=self.lemmatizer,
        )
        vocab_path = save_vocabulary(vectorizer, self.results_dir)
        print(f"[features] {len(features.vocabulary)} terms kept → {vocab_path}")
        return features

    def split_data(self, sample: pd.DataFrame, features: FeatureMatrix):
        print("\n" + "=" * 60)
        print("STEP 3: Train/Test Split")
        print("=" * 60)

        train_ids, test_ids = split_by_id(
            features.ids, test_size=self.test_size, random_state=self.random_state
        )
        train, test = features.subset(train_ids), features.subset(test_ids)

        test_rows = sample.set_index("comment_id").loc[test_ids].reset_index()
        test_path = self.results_dir / "test_subset.csv"
        test_rows[["comment_id", "comment", "score", "stance"]].to_csv(
            test_path, index=False, encoding="utf-8"
        )
        print(f"[info] Test subset snapshot: {test_path}")
        print(f"Train class balance: {pd.Series(train.labels).value_counts().to_dict()}")
        print(f"Test class balance: {pd.Series(test.labels).value_counts().to_dict()}")
        return train, test

    def train_and_evaluate(self, train: FeatureMatrix, test: FeatureMatrix) -> Dict[str, Any]:
        print("\n" + "=" * 60)
        print("STEP 4: Training and Evaluation")
        print("=" * 60)

        comparison = ModelComparison(random_state=self.random_state)
        test_results = comparison.evaluate_all(self.models, train, test)
        self.comparison_table = comparison.create_comparison_table(test_results)
        return test_results

    def select_model(self, test_results: Dict[str, Any]) -> Dict[str, Any]:
        print("\n" + "=" * 60)
        print("STEP 5: Model Selection")
        print("=" * 60)

        ordered = [test_results[m] for m in self.models]
        best = ordered[0]
        for other in ordered[1:]:
            best = select_better_model(best, other)

        print(self.comparison_table.round(4).to_string(index=False))
        m = best["test_metrics"]
        print(
            f"\nSelected model: {best['model_name']} "
            f"(accuracy={m['accuracy']:.4f}, F1={m['f1_macro']:.4f})"
        )
        if len(ordered) > 1:
            print(
                f"[info] {ordered[0]['model_name']} is kept only when both its accuracy "
                "and F1 are strictly higher; otherwise the later model is selected."
            )
        return best

    def save_outputs(
        self,
        sample: pd.DataFrame,
        test: FeatureMatrix,
        test_results: Dict[str, Any],
        best: Dict[str, Any],
    ) -> Dict[str, str]:
        print("\n" + "=" * 60)
        print("STEP 6: Saving Outputs")
        print("=" * 60)

        paths = {}

        audit_path = self.results_dir / "stance_audit.csv"
        sample[["comment_id", "comment", "stance"]].to_csv(audit_path, index=False, encoding="utf-8")
        paths["audit"] = str(audit_path)

        predictions = pd.DataFrame({"comment_id": test.ids, "stance": test.labels})
        for key, res in test_results.items():
            predictions[f"pred_{key}"] = res["predictions"]
        pred_path = self.results_dir / "test_predictions.csv"
        predictions.to_csv(pred_path, index=False, encoding="utf-8")
        paths["predictions"] = str(pred_path)

        export_summary_table(self.comparison_table, self.results_dir)
        paths["summary_table"] = str(self.results_dir / "model_summary.csv")

        if self.make_plots:
            paths["confusion_matrices"] = str(
                plot_confusion_matrices(test_results, self.results_dir)
            )

        summary = {
            "timestamp": datetime.now().isoformat(timespec="seconds"),
            "config": {
                "data_path": str(self.data_path),
                "sample_size": self.sample_size,
                "test_size": self.test_size,
                "random_state": self.random_state,
                "min_df": self.min_df,
                "models": self.models,
            },
            "results": {
                key: {k: v for k, v in res.items() if k != "predictions"}
                for key, res in test_results.items()
            },
            "selected_model": best["model_key"],
        }
        summary_path = self.results_dir / "experiment_summary.json"
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary, f, ensure_ascii=False, indent=2, default=str)
        paths["summary"] = str(summary_path)

        for name, path in paths.items():
            print(f"[info] {name}: {path}")
        return paths

    def run(self) -> Dict[str, Any]:
        """Run every stage once and return the collected results."""
        sample = self.load_and_prepare_data()
        features = self.build_features(sample)
        train, test = self.split_data(sample, features)
        test_results = self.train_and_evaluate(train, test)
        best = self.select_model(test_results)
        paths = self.save_outputs(sample, test, test_results, best)
        return {
            "train_ids": train.ids,
            "test_ids": test.ids,
            "test_results": test_results,
            "selected_model": best["model_key"],
            "outputs": paths,
        }


def main(argv: Optional[Sequence[str]] = None) -> None:
    import argparse

    ap = argparse.ArgumentParser(description="Compare SVM and KNN stance classifiers on a comment corpus")
    ap.add_argument("--csv", type=Path, required=True, help="Comment CSV (comment_id,comment,score)")
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    ap.add_argument("--sample-size", type=int, default=DEFAULT_SAMPLE_SIZE)
    ap.add_argument("--test-size", type=float, default=DEFAULT_TEST_SIZE)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--min-df", type=float, default=DEFAULT_MIN_DF)
    ap.add_argument("--models", nargs="+", default=list(DEFAULT_MODELS), help="Model keys in comparison order")
    ap.add_argument("--plots", action="store_true", help="Save confusion matrix figure")

    args = ap.parse_args(argv)

    pipeline = StancePipeline(
        data_path=args.csv,
        results_dir=args.results_dir,
        sample_size=args.sample_size,
        test_size=args.test_size,
        random_state=args.seed,
        min_df=args.min_df,
        models=args.models,
        make_plots=args.plots,
    )
    pipeline.run()


if __name__ == "__main__":
    main()
