# charts/plots.py
# ------------------------------------------------------------
# Plotting utilities for causeway design results.
#
# Design principles
# -----------------
# - No imports from the causeway package; caller supplies plain data
#   (score mappings, cost shares, swept parameters and margins).
# - Pure matplotlib.
# - Functions return a matplotlib Figure for UI layers to render
#   (e.g., Streamlit st.pyplot(fig)).
#
# Usage (example in Streamlit)
# ----------------------------
#   from charts.plots import plot_health_scores, plot_margin_sweep
#   fig = plot_health_scores(health.scores.as_dict(), overall=health.overall)
#   st.pyplot(fig)
#
from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union

import matplotlib.pyplot as plt


Number = Union[int, float]


def _validate_xy(x: Sequence[Number], y: Sequence[Number], name: str = "") -> None:
    if x is None or y is None:
        raise ValueError(f"{name}: x and y must be provided.")
    if len(x) != len(y):
        raise ValueError(f"{name}: x and y must be the same length (got {len(x)} vs {len(y)}).")
    if len(x) < 2:
        raise ValueError(f"{name}: need at least 2 points to plot (got {len(x)}).")


def plot_health_scores(
    scores: Mapping[str, Number],
    *,
    overall: Optional[Number] = None,
    title: str = "Design health score",
) -> plt.Figure:
    """
    Horizontal bars of the four sub-scores (0-100), with the overall score
    drawn as a dashed reference line when given.

    Parameters
    ----------
    scores  : mapping like {"safety": 95, "economy": 80, ...}
    overall : overall score (optional)
    title   : figure title

    Returns
    -------
    matplotlib.figure.Figure
    """
    if not scores:
        raise ValueError("scores is empty.")

    names = [name.capitalize() for name in scores]
    values = list(scores.values())

    fig, ax = plt.subplots()
    ax.barh(names, values)
    for i, value in enumerate(values):
        ax.text(value + 1, i, f"{value:.0f}", va="center")
    if overall is not None:
        ax.axvline(overall, linestyle="--", linewidth=1, label=f"Overall ({overall:.0f})")
        ax.legend(loc="lower right")

    ax.set_xlim(0, 105)
    ax.set_xlabel("Score (0-100)")
    ax.invert_yaxis()
    ax.grid(True, axis="x", alpha=0.35)
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_cost_breakdown(
    breakdown: Mapping[str, Number],
    *,
    title: str = "Cost breakdown",
) -> plt.Figure:
    """
    Pie chart of each cost line's share of the total (percent values).
    """
    shares = {name: value for name, value in breakdown.items() if value > 0}
    if not shares:
        raise ValueError("breakdown has no positive shares.")

    fig, ax = plt.subplots()
    ax.pie(
        list(shares.values()),
        labels=[name.capitalize() for name in shares],
        autopct="%1.1f%%",
        startangle=90,
    )
    ax.axis("equal")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_margin_sweep(
    parameter_values: Sequence[Number],
    safety_margins: Sequence[Number],
    *,
    safety_factor: Number,
    parameter_label: str = "Length L (m)",
    title: str = "Safety margin vs length",
) -> plt.Figure:
    """
    Plot the foundation safety margin across a swept design parameter.

    Parameters
    ----------
    parameter_values : swept values (e.g. lengths) [m]
    safety_margins   : safety margin at each value
    safety_factor    : required factor, drawn as the acceptance line
    parameter_label  : x-axis label
    title            : figure title

    Returns
    -------
    matplotlib.figure.Figure
    """
    _validate_xy(parameter_values, safety_margins, "plot_margin_sweep")

    fig, ax = plt.subplots()
    ax.plot(parameter_values, safety_margins, linewidth=2)
    ax.axhline(safety_factor, linestyle="--", linewidth=1, label=f"Required SF ({safety_factor:g})")
    ax.axhline(1.5 * safety_factor, linestyle=":", linewidth=1, label="Balanced band upper edge")

    ax.set_xlabel(parameter_label)
    ax.set_ylabel("Safety margin (≥ SF is OK)")
    ax.grid(True, which="both", alpha=0.35)
    ax.legend()
    ax.set_title(title)
    fig.tight_layout()
    return fig


__all__ = [
    "plot_health_scores",
    "plot_cost_breakdown",
    "plot_margin_sweep",
]
