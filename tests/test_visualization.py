import matplotlib

matplotlib.use("Agg")

import pandas as pd

from stance_analysis.experiments.visualization import export_summary_table, plot_confusion_matrices


def test_export_summary_table(tmp_path):
    table = pd.DataFrame(
        [{"Model": "SVM (linear kernel)", "Accuracy": 0.9, "F1": 0.8}]
    )
    export_summary_table(table, tmp_path)
    assert pd.read_csv(tmp_path / "model_summary.csv")["Model"].tolist() == ["SVM (linear kernel)"]
    assert "0.9000" in (tmp_path / "model_summary.md").read_text(encoding="utf-8")


def test_plot_confusion_matrices(tmp_path):
    labels = ["Favorable", "Neutral", "Oppose"]
    results = {
        key: {
            "model_name": key.upper(),
            "test_metrics": {"labels": labels, "confusion_matrix": [[3, 0, 1], [0, 0, 1], [0, 0, 2]]},
        }
        for key in ("svm", "knn")
    }
    path = plot_confusion_matrices(results, tmp_path)
    assert path.exists()


def test_plot_confusion_matrices_without_models(tmp_path):
    assert plot_confusion_matrices({}, tmp_path) is None
    assert not (tmp_path / "confusion_matrices.png").exists()
