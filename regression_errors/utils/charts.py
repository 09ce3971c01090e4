"""
Static diagnostic charts for a fitted simple regression (matplotlib).

Every builder returns a new Figure and never calls show(); the caller decides
whether to display, save or embed it.
"""
from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from regression_errors.utils.analysis import Analysis
from regression_errors.utils.config import DEFAULTS
from regression_errors.utils.glossary import SEGMENT_COLORS
from regression_errors.utils.insights import SEGMENT_TYPES, DegenerateInputError, predict

LONGDASH = (0, (8, 4))


def _settings(cfg: dict | None) -> tuple[dict, dict]:
    cfg = cfg or DEFAULTS
    labels = {**DEFAULTS["labels"], **cfg.get("labels", {})}
    charts = {**DEFAULTS["charts"], **cfg.get("charts", {})}
    return labels, charts


def _axis_titles(analysis: Analysis, labels: dict) -> tuple[str, str]:
    return labels.get(analysis.predictor, analysis.predictor), labels.get(analysis.response, analysis.response)


def _x_limits(analysis: Analysis, charts: dict, x: np.ndarray) -> tuple[float, float]:
    """Configured limits for this predictor, else the data range padded by 5%."""
    limits = (charts.get("x_limits") or {}).get(analysis.predictor)
    if limits is not None:
        return float(limits[0]), float(limits[1])
    pad = 0.05 * float(x.max() - x.min()) or 0.5
    return float(x.min()) - pad, float(x.max()) + pad


def _histogram_edges(squared: np.ndarray, binwidth: float, max_bins: int) -> np.ndarray:
    """Bins of `binwidth` from 0; widened so there are never more than `max_bins`."""
    top = float(squared.max())
    n_bins = max(1, int(np.ceil(top / binwidth)))
    if n_bins > max_bins:
        return np.linspace(0.0, top, max_bins + 1)
    return np.arange(n_bins + 1) * binwidth


def _columns(analysis: Analysis):
    df = analysis.frame
    if df.empty:
        raise DegenerateInputError("empty", "Nothing to plot: no observations")
    x = df[analysis.predictor].astype(float).to_numpy()
    y = df[analysis.response].astype(float).to_numpy()
    return x, y, df["fitted"].to_numpy(), df["residual"].to_numpy()


def _fit_line(analysis: Analysis, x: np.ndarray):
    line_x = np.array([x.min(), x.max()])
    return line_x, predict(analysis.fit.beta, line_x)


def decomposition_chart(analysis: Analysis, cfg: dict | None = None) -> Figure:
    """Scatter + fitted line with SST, SSR and SSE segments for every observation."""
    labels, charts = _settings(cfg)
    x, y, fitted, _ = _columns(analysis)
    mean = analysis.metrics.mean

    fig, ax = plt.subplots(figsize=charts["figsize"])
    point_colors = [SEGMENT_COLORS[s] for s in analysis.frame["segment_type"]]
    ax.scatter(x, y, c=point_colors, edgecolors="black", zorder=3)
    ax.plot(*_fit_line(analysis, x), color="black")

    ax.vlines(x, y, mean, colors=SEGMENT_COLORS["SST"], linestyles="solid", label="SST")
    ax.vlines(x, mean, fitted, colors=SEGMENT_COLORS["SSR"], linestyles="dotted", label="SSR")
    ax.vlines(x, fitted, y, colors=SEGMENT_COLORS["SSE"], linestyles="dashed", label="SSE")

    error_legend = ax.legend(title="Error Type", loc="upper left", bbox_to_anchor=(1.02, 1.0))
    ax.add_artist(error_legend)
    present = [s for s in SEGMENT_TYPES if s in set(analysis.frame["segment_type"])]
    handles = [
        Line2D([], [], marker="o", linestyle="", markerfacecolor=SEGMENT_COLORS[s],
               markeredgecolor="black", label=s)
        for s in present
    ]
    ax.legend(handles=handles, title="Segment", loc="lower left", bbox_to_anchor=(1.02, 0.0))

    x_title, y_title = _axis_titles(analysis, labels)
    ax.set_title("SST, SSR, and SSE in Linear Regression")
    ax.set_xlabel(x_title)
    ax.set_ylabel(y_title)
    fig.tight_layout()
    return fig


def segment_panels(analysis: Analysis, cfg: dict | None = None) -> Figure:
    """SSE, SSR and SST stacked on a shared x-range with shared outer axis titles."""
    labels, charts = _settings(cfg)
    x, y, fitted, _ = _columns(analysis)
    mean = analysis.metrics.mean
    line_x, line_y = _fit_line(analysis, x)
    x_limits = _x_limits(analysis, charts, x)

    panels = [
        ("SSE", fitted, y, "darkgreen", "dashed"),
        ("SSR", np.full_like(y, mean), fitted, "blue", "dashed"),
        ("SST", y, np.full_like(y, mean), "red", "solid"),
    ]
    fig, axes = plt.subplots(len(panels), 1, sharex=True, figsize=charts["panels_figsize"])
    for ax, (title, start, end, color, style) in zip(axes, panels):
        ax.scatter(x, y, color="black", s=15, zorder=3)
        ax.plot(line_x, line_y, color="gray")
        ax.vlines(x, start, end, colors=color, linestyles=style)
        if title == "SST":
            ax.axhline(mean, color="purple", linestyle=LONGDASH, linewidth=1)
        ax.set_title(title)
        ax.set_xlim(*x_limits)

    x_title, y_title = _axis_titles(analysis, labels)
    fig.supxlabel(x_title, fontsize=15)
    fig.supylabel(y_title, fontsize=15)
    fig.tight_layout()
    return fig


def residual_chart(analysis: Analysis, cfg: dict | None = None, mad: float | None = None) -> Figure:
    """Residuals vs fitted values with a zero line, plus a MAD line when `mad` is given."""
    _, charts = _settings(cfg)
    _, _, fitted, resid = _columns(analysis)

    fig, ax = plt.subplots(figsize=charts["figsize"])
    ax.scatter(fitted, resid, color="black", s=15)
    ax.axhline(0, color="red", linestyle="dashed", label="Zero")
    title = "Residual Plot"
    if mad is not None:
        ax.axhline(mad, color="blue", linestyle="dotted", label=f"MAD = {mad:.3f}")
        ax.legend(loc="best")
        title = "Residual Plot with MAD Line"
    ax.set_title(title)
    ax.set_xlabel("Fitted Values")
    ax.set_ylabel("Residuals")
    ax.grid(True, linewidth=0.5, alpha=0.5)
    fig.tight_layout()
    return fig


def squared_error_histogram(analysis: Analysis, cfg: dict | None = None) -> Figure:
    """Distribution of squared residuals with the MSE marked."""
    _, charts = _settings(cfg)
    _, _, _, resid = _columns(analysis)
    squared = resid ** 2
    edges = _histogram_edges(squared, float(charts["histogram_binwidth"]), int(charts["histogram_max_bins"]))

    fig, ax = plt.subplots(figsize=charts["figsize"])
    ax.hist(squared, bins=edges, color="skyblue", edgecolor="black", alpha=0.7)
    ax.axvline(analysis.metrics.mse, color="red", linestyle="dashed", linewidth=1,
               label=f"MSE = {analysis.metrics.mse:.3f}")
    ax.legend(loc="best")
    ax.set_title("Distribution of Squared Errors (SSE) and MSE")
    ax.set_xlabel("Squared Error")
    ax.set_ylabel("Frequency")
    ax.grid(True, linewidth=0.5, alpha=0.5)
    fig.tight_layout()
    return fig


def build_catalog(analysis: Analysis, cfg: dict | None = None) -> dict[str, Figure]:
    """All five charts, in display order."""
    return {
        "decomposition": decomposition_chart(analysis, cfg),
        "segment_panels": segment_panels(analysis, cfg),
        "residuals": residual_chart(analysis, cfg),
        "residuals_mad": residual_chart(analysis, cfg, mad=analysis.metrics.mad),
        "squared_errors": squared_error_histogram(analysis, cfg),
    }


def save_catalog(figures: dict[str, Figure], out_dir: str | Path) -> list[Path]:
    """Write each figure as <key>.png and close it."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, fig in figures.items():
        out = out_dir / f"{name}.png"
        fig.savefig(out)
        plt.close(fig)
        written.append(out)
    return written
