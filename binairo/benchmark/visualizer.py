"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for configuration benchmark results.

    Creates charts comparing heuristic configurations across various metrics.
    """

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _configurations(self) -> List[str]:
        """Configuration labels ordered by average node count, best first."""
        labels = set(r.configuration for r in self.results)
        return sorted(labels, key=lambda label: np.mean(
            [r.nodes_explored for r in self.results if r.configuration == label]
        ))

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_nodes_comparison(),
            self.plot_accuracy_by_size(),
        ]

    def _barh(self, values: List[float], labels: List[str], xlabel: str, title: str,
              filename: str, fmt: str, log_scale: bool = False) -> str:
        fig, ax = plt.subplots(figsize=(10, max(4, len(labels) * 0.35)))
        colors = sns.color_palette("viridis", len(labels))

        bars = ax.barh(labels, values, color=colors, edgecolor='black', linewidth=0.5)
        for bar, value in zip(bars, values):
            ax.annotate(fmt.format(value),
                        xy=(bar.get_width(), bar.get_y() + bar.get_height() / 2),
                        xytext=(3, 0),
                        textcoords="offset points",
                        ha='left', va='center', fontsize=8)

        ax.set_xlabel(xlabel, fontsize=12)
        ax.set_ylabel('Configuration', fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.invert_yaxis()
        if log_scale:
            ax.set_xscale('log')

        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        labels = self._configurations()
        avg_times = [
            np.mean([r.time_seconds for r in self.results if r.configuration == label]) * 1000
            for label in labels
        ]
        return self._barh(avg_times, labels, 'Average Time (ms)',
                          'Average Solve Time by Configuration', "time_comparison.png", '{:.2f}ms')

    def plot_nodes_comparison(self) -> str:
        """Create bar chart comparing search nodes explored."""
        labels = self._configurations()
        avg_nodes = [
            np.mean([r.nodes_explored for r in self.results if r.configuration == label])
            for label in labels
        ]
        # Node counts can vary by several orders of magnitude
        return self._barh(avg_nodes, labels, 'Average Nodes Explored (Log Scale)',
                          'Search Nodes by Configuration', "nodes_comparison.png", '{:,.0f}',
                          log_scale=True)

    def plot_accuracy_by_size(self) -> str:
        """Create a heatmap of solve accuracy per configuration and grid size."""
        labels = self._configurations()
        sizes = sorted(set(r.size for r in self.results))

        accuracy = np.zeros((len(labels), len(sizes)))
        for i, label in enumerate(labels):
            for j, size in enumerate(sizes):
                rows = [r for r in self.results if r.configuration == label and r.size == size]
                accuracy[i, j] = (sum(r.solved for r in rows) / len(rows)) * 100 if rows else 0

        fig, ax = plt.subplots(figsize=(4 + len(sizes) * 1.2, max(4, len(labels) * 0.35)))
        sns.heatmap(accuracy, annot=True, fmt=".0f", cmap="RdYlGn", vmin=0, vmax=100,
                    xticklabels=[f"{s}x{s}" for s in sizes], yticklabels=labels,
                    cbar_kws={'label': 'Accuracy (%)'}, ax=ax)

        ax.set_xlabel('Grid Size', fontsize=12)
        ax.set_ylabel('Configuration', fontsize=12)
        ax.set_title('Solve Accuracy by Configuration and Size', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "accuracy_by_size.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Configuration | Accuracy | Avg Time | Avg Nodes | Avg Backtracks |",
            "|---------------|----------|----------|-----------|----------------|"
        ]

        for label in self._configurations():
            rows = [r for r in self.results if r.configuration == label]

            solved = sum(1 for r in rows if r.solved)
            accuracy = (solved / len(rows)) * 100 if rows else 0

            avg_time = np.mean([r.time_seconds for r in rows])
            avg_nodes = np.mean([r.nodes_explored for r in rows])
            avg_backtracks = np.mean([r.backtracks for r in rows])

            lines.append(
                f"| {label} | {accuracy:.1f}% | {avg_time * 1000:.2f}ms | {int(avg_nodes):,} | {int(avg_backtracks):,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
