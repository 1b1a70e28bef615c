"""Matplotlib analysis charts — autopilot clear times, score curves, hit edges."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from breaker.types import GameConfig
from sim.autoplay import compute_stats, run_batch, single_life_config


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _new_chart(title, figsize=(8, 5)):
    fig, ax = plt.subplots(figsize=figsize)
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, title)
    return fig, ax


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_clear_time_vs_speed(seeds=range(5), speeds=(200, 300, 400, 500), save_path=None):
    """Chart 1: average time to clear the board for several ball speeds."""
    means = []
    spreads = []
    for speed in speeds:
        results = run_batch(seeds, GameConfig(base_speed=speed))
        times = np.array([r.sim_time for r in results if r.cleared])
        means.append(times.mean() if times.size else np.nan)
        spreads.append(times.std() if times.size else 0.0)

    fig, ax = _new_chart("Time to Clear vs Ball Speed")
    ax.errorbar(speeds, means, yerr=spreads, color="#4ecdc4", marker="o",
                linewidth=2, markersize=8, capsize=4)
    ax.set_xlabel("Ball speed (px/s)")
    ax.set_ylabel("Time to clear (s)")
    ax.grid(True, alpha=0.15)
    return _save(fig, save_path)


def chart_score_timeline(seed=0, save_path=None):
    """Chart 2: score against brick index for a single run, by row destroyed."""
    result = run_batch([seed])[0]
    rows = np.array([h.row for h in result.hits])
    scores = np.cumsum([h.brick.score for h in result.hits])

    fig, ax = _new_chart(f"Score Progression (seed {seed})")
    if scores.size:
        ax.step(np.arange(1, scores.size + 1), scores, where="post", color="#e94560", linewidth=2)
        ax.scatter(np.arange(1, scores.size + 1), scores, c=rows, cmap="viridis", s=14, zorder=3)
    ax.set_xlabel("Bricks destroyed")
    ax.set_ylabel("Score")
    ax.grid(True, alpha=0.15)
    return _save(fig, save_path)


def chart_hit_edges(seeds=range(5), save_path=None):
    """Chart 3: which brick edge the ball struck, summed over runs."""
    stats = compute_stats(run_batch(seeds))
    labels = ["top", "bottom", "left", "right"]
    counts = [stats["hit_edges"].get(k, 0) for k in labels]

    fig, ax = _new_chart("Brick Edge Hits")
    bars = ax.bar(labels, counts, color=["#ffc107", "#28a745", "#dc3545", "#4ecdc4"], alpha=0.85)
    for bar, n in zip(bars, counts):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height() + 0.3,
                str(n), ha="center", va="bottom", fontsize=8, color="#aaa")
    ax.set_ylabel("Hits")
    ax.grid(True, alpha=0.15, axis="y")
    return _save(fig, save_path)


def chart_skill_survival(seeds=range(10), skills=(0.2, 0.5, 0.8, 1.0), save_path=None):
    """Chart 4: single-life clear rate and score by autopilot skill."""
    rates = []
    scores = []
    for skill in skills:
        results = run_batch(seeds, single_life_config(), skill=skill, max_time=120.0)
        stats = compute_stats(results)
        rates.append(stats["clear_rate"])
        scores.append(stats["avg_score"])

    fig, ax = _new_chart("Single-Life Runs by Autopilot Skill")
    x = np.arange(len(skills))
    ax.bar(x, scores, 0.5, color="#e94560", alpha=0.85, label="Avg score")
    ax.set_xticks(x)
    ax.set_xticklabels([f"{s:.0%}" for s in skills])
    ax.set_xlabel("Autopilot skill")
    ax.set_ylabel("Average score")
    ax2 = ax.twinx()
    ax2.plot(x, rates, color="#4ecdc4", marker="D", linewidth=2, label="Clear rate")
    ax2.set_ylabel("Clear rate (%)", color="#aaaaaa")
    ax2.set_ylim(0, 105)
    ax2.tick_params(colors="#888888", labelsize=9)
    return _save(fig, save_path)


def generate_all_charts(output_dir="output"):
    """Render every chart to PNG files. Returns the written paths."""
    os.makedirs(output_dir, exist_ok=True)
    charts = [
        ("clear_time_vs_speed.png", chart_clear_time_vs_speed),
        ("score_timeline.png", chart_score_timeline),
        ("hit_edges.png", chart_hit_edges),
        ("skill_survival.png", chart_skill_survival),
    ]
    paths = []
    for name, fn in charts:
        path = os.path.join(output_dir, name)
        fig = fn(save_path=path)
        plt.close(fig)
        print(f"  Saved {path}")
        paths.append(path)
    return paths
