"""
Plotting script for training metrics.
Generates score / reward learning curves and a text summary per algorithm.
"""

import os
import argparse
from typing import Dict, Optional

import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load the metrics CSV written by MetricsCallback."""
    for csv_path in (os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
                     os.path.join(log_dir, f"{algo}_metrics.csv")):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50) -> str:
    """Reward, score, level reached and lives lost against timesteps."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "score", "Game Score", "orange"),
        (axes[1, 0], "level", "Difficulty Level Reached", "green"),
        (axes[1, 1], "lives_lost", "Lives Lost", "red"),
    ]
    for ax, column, label, color in panels:
        if column not in df.columns:
            ax.axis("off")
            continue
        values = smooth(df[column].values.astype(float), window)
        ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def summary_report(data: Dict[str, pd.DataFrame], last_n: int = 100) -> str:
    """Text summary of every algorithm's final performance."""
    lines = ["=" * 60, "TRAINING SUMMARY", "=" * 60]
    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        final = df.tail(last_n)
        lines.append(f"\n{algo.upper()} Results:")
        lines.append("-" * 40)
        lines.append(f"  Total Episodes: {len(df)}")
        lines.append(f"  Total Timesteps: {df['timestep'].max():,}")
        lines.append(f"  Best Score: {df['score'].max()}")
        lines.append(f"  Final Mean Score (last {last_n}): {final['score'].mean():.1f} ± {final['score'].std():.1f}")
        lines.append(f"  Final Mean Reward (last {last_n}): {final['reward'].mean():.2f}")
        lines.append(f"  Final Mean Level (last {last_n}): {final['level'].mean():.2f}")
    lines.append("\n" + "=" * 60)
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Plot training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument("--algos", nargs="+", default=["ppo", "dqn"], help="Algorithms to plot")
    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")
    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        print(f"  {algo}: {len(df)} episodes" if df is not None else f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.output_dir, args.window)

    report = summary_report(data)
    print(report)
    os.makedirs(args.output_dir, exist_ok=True)
    with open(os.path.join(args.output_dir, "training_summary.txt"), "w") as f:
        f.write(report)


if __name__ == "__main__":
    main()
