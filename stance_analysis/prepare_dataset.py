#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Prepare the comment corpus (CSV with comment_id, comment, score):
- Drop rows without a numeric score and duplicate comment ids
- Derive the stance label from the score sign
  (score > 0 -> Favorable, score < 0 -> Oppose, score == 0 -> Neutral)
- Draw a class-proportional sample and save it to <outdir>/stance_sample.csv

This module provides functions to prepare the dataset programmatically.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Tuple
import numpy as np
import pandas as pd

FAVORABLE = "Favorable"
NEUTRAL = "Neutral"
OPPOSE = "Oppose"
STANCE_LABELS = (FAVORABLE, NEUTRAL, OPPOSE)

REQUIRED_COLUMNS = ("comment_id", "comment", "score")

# sampled classes below this size are reported, their metrics may be undefined
SMALL_CLASS_WARNING = 10


def label_stance(score: float) -> str:
    if score > 0:
        return FAVORABLE
    if score < 0:
        return OPPOSE
    return NEUTRAL


def assign_stance(df: pd.DataFrame, score_col: str = "score") -> pd.DataFrame:
    """Return a copy of ``df`` with a ``stance`` column derived from the score sign."""
    score = df[score_col].astype(float)
    stance = np.select([score > 0, score < 0], [FAVORABLE, OPPOSE], default=NEUTRAL)
    return df.assign(stance=stance)


def clean_comments(df: pd.DataFrame, source: str = "comments") -> pd.DataFrame:
    """
    Validate a raw comment table and keep the rows that can be labelled.

    Args:
        df: Raw table with at least comment_id, comment, score
        source: Name used in error messages

    Returns:
        DataFrame with numeric scores and unique ids
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{source} is missing required columns: {missing}")

    before = len(df)
    df = df.assign(score=pd.to_numeric(df["score"], errors="coerce"))
    df = df.dropna(subset=["score"])
    no_score = before - len(df)

    df = df.drop_duplicates(subset=["comment_id"], keep="first")
    duplicates = before - no_score - len(df)

    if no_score or duplicates:
        print(
            f"[info] Dropped {no_score} rows without a numeric score, "
            f"{duplicates} duplicate comment ids"
        )
    if df.empty:
        raise ValueError(f"{source} has no comments with a numeric score")
    return df.reset_index(drop=True)


def load_comments(src_path: str | Path) -> pd.DataFrame:
    """Read the raw comment CSV and clean it with ``clean_comments``."""
    src = Path(src_path)
    if not src.exists():
        raise FileNotFoundError(f"Comment file not found: {src}")
    return clean_comments(pd.read_csv(src), source=str(src))


def allocate_stratified_counts(class_counts: pd.Series, n: int) -> pd.Series:
    """
    Split a sample size across classes in proportion to their population.

    Each class gets floor(n * p_i), every populated class keeps at least one
    row when n allows it, and leftover rows go to the largest remaining
    shortfalls (exact share minus rows already given). The result sums to
    min(n, population).
    """
    present = class_counts[class_counts > 0].sort_index()
    total = int(present.sum())
    n = min(int(n), total)
    if total == 0 or n <= 0:
        return pd.Series(0, index=present.index, dtype=int)

    exact = present * n / total
    alloc = np.floor(exact).astype(int)
    if n >= len(present):
        alloc = alloc.clip(lower=1)

    remainder = n - int(alloc.sum())
    if remainder > 0:
        shortfall = exact - alloc
        shortfall = shortfall[shortfall > 0].sort_values(ascending=False, kind="mergesort")
        for label in shortfall.index[:remainder]:
            alloc[label] += 1
    while remainder < 0:
        alloc[alloc.idxmax()] -= 1
        remainder += 1
    return alloc


def stratified_sample(
    df: pd.DataFrame,
    label_col: str,
    n: int,
    random_state: int = 42,
) -> pd.DataFrame:
    counts = allocate_stratified_counts(df[label_col].value_counts(), n)
    parts = []
    for label, g in df.groupby(label_col, sort=True):
        k = int(counts.get(label, 0))
        if k == 0:
            continue
        if k < SMALL_CLASS_WARNING:
            print(
                f"[warn] class '{label}' contributes only {k} rows to the sample; "
                "its precision/recall may be undefined on the test split"
            )
        parts.append(g.sample(n=k, random_state=random_state))
    if not parts:
        return df.iloc[0:0].reset_index(drop=True)
    return (
        pd.concat(parts)
        .sample(frac=1.0, random_state=random_state)
        .reset_index(drop=True)
    )


def prepare_dataset(
    src_path: str | Path,
    outdir: str | Path = "results",
    sample_size: int = 5000,
    random_state: int = 42,
) -> Tuple[pd.DataFrame, dict]:
    """
    Prepare the stance sample from a raw comment CSV.

    Args:
        src_path: Path to raw comment CSV (comment_id, comment, score)
        outdir: Output directory for the sample snapshot
        sample_size: Target number of sampled comments
        random_state: Random seed for reproducibility

    Returns:
        (sampled DataFrame, dictionary with metadata about the processing)
    """
    src = Path(src_path)
    if not src.exists():
        raise FileNotFoundError(f"Comment file not found: {src}")
    if sample_size <= 0:
        raise ValueError(f"sample_size must be positive, got {sample_size}")
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    raw = pd.read_csv(src)
    df = assign_stance(clean_comments(raw, source=str(src)))

    sample = stratified_sample(df, "stance", n=sample_size, random_state=random_state)

    sample_path = outdir / "stance_sample.csv"
    sample[["comment_id", "comment", "score", "stance"]].to_csv(
        sample_path, index=False, encoding="utf-8"
    )

    meta = {
        "src": str(src),
        "out_sample": str(sample_path),
        "dropped_rows": len(raw) - len(df),
        "final_rows": int(len(df)),
        "sample_rows": int(len(sample)),
        "class_balance_full": df["stance"].value_counts().to_dict(),
        "class_balance_sample": sample["stance"].value_counts().to_dict(),
    }

    return sample, meta


def main():
    """CLI for preparing the sample on its own."""
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--src", required=True, help="Path to comment CSV (comment_id,comment,score)"
    )
    parser.add_argument("--outdir", default="results", help="Output directory")
    parser.add_argument("--sample-size", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=42)

    args = parser.parse_args()

    _, meta = prepare_dataset(
        src_path=args.src,
        outdir=args.outdir,
        sample_size=args.sample_size,
        random_state=args.seed,
    )

    print(json.dumps(meta, ensure_ascii=False, indent=2, default=int))


if __name__ == "__main__":
    main()
