"""
This package contains the stance analysis of a social-media comment corpus:
comments are labelled Favorable / Neutral / Oppose from their score, sampled
per class, turned into term counts, and used to compare a linear SVM with a
k-nearest-neighbours classifier on a held-out split.

Key modules:
- prepare_dataset: Loading, stance labelling and stratified sampling
- features: Text normalization and the frozen term-count matrix
- core.splitting: Train/test split keyed by comment id
- core.metrics: Confusion matrix and NaN-aware macro metrics
- models: SVM and KNN estimators behind a factory registry
- experiments: Evaluation, model selection and the end-to-end pipeline
"""

__version__ = "0.1.0"
