# features.py
"""
Text normalization and bag-of-words features for the stance corpus.

Each comment is lowercased, stripped of digits and punctuation, split on
whitespace, filtered against a stopword list and lemmatized. The cleaned
token lists are turned into a sparse term-count matrix; terms that occur in
fewer than ``min_df`` of the documents are dropped and the vocabulary is
frozen, so every later row is projected onto the same columns.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import nltk
import numpy as np
import pandas as pd
from nltk.corpus import stopwords
from nltk.stem import WordNetLemmatizer
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer

DIGIT_RE = re.compile(r"\d+")
PUNCT_RE = re.compile(r"[^\w\s]|_")
SPACE_RE = re.compile(r"\s+")

DEFAULT_MIN_DF = 0.01


def _ensure_nltk_resource(path: str, package: str) -> None:
    try:
        nltk.data.find(path)
    except LookupError:
        nltk.download(package, quiet=True)


def load_stop_words(language: str = "english") -> frozenset:
    _ensure_nltk_resource("corpora/stopwords", "stopwords")
    return frozenset(stopwords.words(language))


def load_lemmatizer() -> WordNetLemmatizer:
    _ensure_nltk_resource("corpora/wordnet", "wordnet")
    _ensure_nltk_resource("corpora/omw-1.4", "omw-1.4")
    return WordNetLemmatizer()


def normalize_comment(text, stop_words: Iterable[str], lemmatizer) -> List[str]:
    """
    Clean one comment into a list of lemmas.

    Order: lowercase, strip digits, strip punctuation, drop stopwords,
    lemmatize. Missing values come back as an empty list.
    """
    if not isinstance(text, str):
        return []
    s = text.lower()
    s = DIGIT_RE.sub("", s)
    s = PUNCT_RE.sub(" ", s)
    s = SPACE_RE.sub(" ", s).strip()
    return [lemmatizer.lemmatize(tok) for tok in s.split() if tok not in stop_words]


def _token_analyzer(tokens):
    # documents are already tokenized by normalize_comment
    return tokens


@dataclass(frozen=True)
class FeatureMatrix:
    """Term counts for a set of comments, with ids and stance labels alongside."""

    ids: np.ndarray
    labels: np.ndarray
    X: sparse.csr_matrix
    vocabulary: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.ids)

    def subset(self, ids: Sequence) -> "FeatureMatrix":
        positions = pd.Index(self.ids).get_indexer(list(ids))
        if (positions < 0).any():
            unknown = [i for i, p in zip(ids, positions) if p < 0]
            raise KeyError(f"Unknown comment ids: {unknown[:5]}")
        return FeatureMatrix(
            ids=self.ids[positions],
            labels=self.labels[positions],
            X=self.X[positions],
            vocabulary=self.vocabulary,
        )


def vectorize_documents(vectorizer: CountVectorizer, token_docs: Sequence[List[str]]) -> sparse.csr_matrix:
    """Project token lists onto the fitted vocabulary; unseen terms are dropped."""
    return vectorizer.transform(token_docs).tocsr()


def build_feature_matrix(
    frame: pd.DataFrame,
    min_df: float = DEFAULT_MIN_DF,
    stop_words: Optional[Iterable[str]] = None,
    lemmatizer=None,
    text_col: str = "comment",
    id_col: str = "comment_id",
    label_col: str = "stance",
) -> Tuple[FeatureMatrix, CountVectorizer]:
    """
    Normalize the comments and fit a term-count matrix over them.

    Args:
        frame: Sampled corpus with id, comment and stance columns
        min_df: Minimum document frequency (fraction) for a term to be kept
        stop_words: Stopword set (NLTK English list if None)
        lemmatizer: Object with a ``lemmatize(token)`` method (WordNet if None)

    Returns:
        (FeatureMatrix, fitted CountVectorizer)
    """
    if stop_words is None:
        stop_words = load_stop_words()
    if lemmatizer is None:
        lemmatizer = load_lemmatizer()
    stop_words = frozenset(stop_words)

    print(f"[features] Normalizing {len(frame)} comments…")
    token_docs = [normalize_comment(t, stop_words, lemmatizer) for t in frame[text_col]]
    empty = sum(1 for d in token_docs if not d)
    if empty:
        print(f"[features] {empty} comments have no tokens left after cleaning")

    vectorizer = CountVectorizer(analyzer=_token_analyzer, min_df=min_df)
    X = vectorizer.fit_transform(token_docs).tocsr()

    features = FeatureMatrix(
        ids=frame[id_col].to_numpy(),
        labels=frame[label_col].astype(str).to_numpy(),
        X=X,
        vocabulary=tuple(vectorizer.get_feature_names_out()),
    )
    print(f"[features] Done: {X.shape} count matrix, min_df={min_df}")
    return features, vectorizer


def save_vocabulary(vectorizer: CountVectorizer, out_dir: str | Path) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    # numpy.int64 -> int for JSON
    vocab = {str(k): int(v) for k, v in sorted(vectorizer.vocabulary_.items())}
    path = out_dir / "vocabulary.json"
    path.write_text(json.dumps(vocab, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
