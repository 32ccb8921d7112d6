#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Runner for the comment stance analysis.

- Run from project root.
- Loads the comment CSV, samples it, builds term counts, trains the SVM and
  KNN classifiers and writes every snapshot under --results-dir.

Example:
    python run_experiment.py --csv data/comments.csv --sample-size 5000 --plots
"""

from stance_analysis.experiments.pipeline import main


if __name__ == "__main__":
    main()
