# visualization.py
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
from typing import Optional


def plot_confusion_matrices(test_results: dict, save_dir: Path) -> Optional[Path]:
    """Plot the test confusion matrix of every model side by side"""
    save_dir = Path(save_dir)
    n_models = len(test_results)
    if n_models == 0:
        return None

    fig, axes = plt.subplots(1, n_models, figsize=(5 * n_models, 4))
    if n_models == 1:
        axes = [axes]

    for ax, res in zip(axes, test_results.values()):
        m = res["test_metrics"]
        sns.heatmap(
            np.asarray(m["confusion_matrix"]),
            annot=True,
            fmt="d",
            cmap="Blues",
            ax=ax,
            cbar=True,
            square=True,
            xticklabels=m["labels"],
            yticklabels=m["labels"],
        )
        ax.set_title(f"{res['model_name']}\nConfusion Matrix")
        ax.set_xlabel("Predicted")
        ax.set_ylabel("Actual")

    plt.tight_layout()
    out_path = save_dir / "confusion_matrices.png"
    plt.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    print(f"✓ Confusion matrices saved to {out_path}")
    return out_path


def export_summary_table(table: pd.DataFrame, save_dir: Path):
    save_dir = Path(save_dir)
    table.to_csv(save_dir / "model_summary.csv", index=False)
    (save_dir / "model_summary.md").write_text(
        table.to_markdown(index=False, floatfmt=".4f"), encoding="utf-8"
    )
