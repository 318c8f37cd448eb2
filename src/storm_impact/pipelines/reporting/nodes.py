"""Reporting nodes: event-type aggregation, top-N selection and charts.

Architecture:
    summarize  → single groupby on EVTYPE
    select     → top-N event types per metric (health, economic)
    render     → two bar-chart PNGs with value labels
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd

matplotlib.use("Agg")  # non-interactive backend for CI / headless runs

logger = logging.getLogger(__name__)

HEALTH_METRICS: list[str] = ["INJURIES", "FATALITIES"]
ECONOMIC_METRICS: list[str] = ["PROPDMGVALUE", "CROPDMGVALUE"]

_METRIC_LABELS: dict[str, str] = {
    "INJURIES": "Injuries",
    "FATALITIES": "Fatalities",
    "PROPDMGVALUE": "Property damage (billion USD)",
    "CROPDMGVALUE": "Crop damage (billion USD)",
}

_TOP_EVENT_COLUMNS: list[str] = ["metric", "rank", "EVTYPE", "value"]


# ── Node 1: Event-type aggregation ───────────────────────────────
def summarize_by_event_type(df: pd.DataFrame) -> pd.DataFrame:
    """Sum health and economic impact per event type.

    EVTYPE is used exactly as recorded: "TSTM WIND" and "THUNDERSTORM
    WIND" stay separate categories.

    Args:
        df: Valued event table from damage_valuation.

    Returns:
        One row per EVTYPE, sorted by EVTYPE.
    """
    summary = df.groupby("EVTYPE", as_index=False, sort=True).agg(
        INJURIES=("INJURIES", "sum"),
        FATALITIES=("FATALITIES", "sum"),
        PROPDMGVALUE=("PROPDMGVALUE", "sum"),
        CROPDMGVALUE=("CROPDMGVALUE", "sum"),
    )

    logger.info(
        "Aggregated %s events into %s event types",
        f"{len(df):,}",
        f"{len(summary):,}",
    )
    return summary


def _top_n(summary: pd.DataFrame, metric: str, top_n: int) -> pd.DataFrame:
    """Top ``top_n`` event types for one metric, largest first.

    The sort is stable, so equal sums keep the summary's EVTYPE order.
    """
    ranked = (
        summary[["EVTYPE", metric]]
        .sort_values(metric, ascending=False, kind="mergesort")
        .head(top_n)
        .rename(columns={metric: "value"})
        .reset_index(drop=True)
    )
    ranked.insert(0, "rank", range(1, len(ranked) + 1))
    ranked.insert(0, "metric", metric)
    return ranked


def _top_events_table(
    summary: pd.DataFrame, metrics: list[str], top_n: int
) -> pd.DataFrame:
    frames = [_top_n(summary, metric, top_n) for metric in metrics]
    table = pd.concat(frames, ignore_index=True)
    return table[_TOP_EVENT_COLUMNS]


# ── Node 2: Top-N selection ──────────────────────────────────────
def select_top_events(
    summary: pd.DataFrame,
    top_n: int,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Pick the top-N event types for each health and economic metric.

    Returns two long-format tables (metric, rank, EVTYPE, value):
    - health_impact_top: INJURIES and FATALITIES
    - economic_impact_top: PROPDMGVALUE and CROPDMGVALUE
    """
    if top_n < 1:
        raise ValueError(f"top_n must be a positive integer, got {top_n}")

    health = _top_events_table(summary, HEALTH_METRICS, top_n)
    economic = _top_events_table(summary, ECONOMIC_METRICS, top_n)

    for metric in HEALTH_METRICS + ECONOMIC_METRICS:
        table = health if metric in HEALTH_METRICS else economic
        logger.info(
            "Top %d by %s: %s",
            top_n,
            metric,
            table.loc[table["metric"] == metric, "EVTYPE"].tolist(),
        )
    return health, economic


def _plot_metric_bars(
    ax: plt.Axes,
    rows: pd.DataFrame,
    metric: str,
    scale: float,
    value_format: str,
) -> None:
    values = rows["value"] / scale
    bars = ax.bar(rows["EVTYPE"], values, color="steelblue")
    ax.bar_label(bars, labels=[format(v, value_format) for v in values], padding=2)
    ax.set_title(f"Top {len(rows)} event types by {_METRIC_LABELS[metric].lower()}")
    ax.set_ylabel(_METRIC_LABELS[metric])
    ax.tick_params(axis="x", labelrotation=45)
    for label in ax.get_xticklabels():
        label.set_horizontalalignment("right")
    ax.margins(y=0.15)


def _save_chart(
    table: pd.DataFrame,
    metrics: list[str],
    title: str,
    path: Path,
    scale: float,
    value_format: str,
    dpi: int,
) -> None:
    fig, axes = plt.subplots(1, len(metrics), figsize=(6 * len(metrics), 5))
    for ax, metric in zip(axes, metrics):
        rows = table[table["metric"] == metric]
        _plot_metric_bars(ax, rows, metric, scale, value_format)
    fig.suptitle(title)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)


# ── Node 3: Rendering ────────────────────────────────────────────
def render_impact_charts(
    health_impact_top: pd.DataFrame,
    economic_impact_top: pd.DataFrame,
    parameters: dict[str, Any],
) -> dict[str, str]:
    """Render the health and economic impact bar charts to PNG files.

    Args:
        health_impact_top: Top-N table for INJURIES and FATALITIES.
        economic_impact_top: Top-N table for PROPDMGVALUE and CROPDMGVALUE.
        parameters: ``reporting`` block of parameters.yml
            (``output_dir``, ``dpi``).

    Returns:
        Mapping of chart name → PNG path.
    """
    output_dir = Path(parameters["output_dir"])
    output_dir.mkdir(parents=True, exist_ok=True)
    dpi = parameters.get("dpi", 150)

    charts = {
        "health_impact": output_dir / "health_impact.png",
        "economic_impact": output_dir / "economic_impact.png",
    }

    _save_chart(
        health_impact_top,
        HEALTH_METRICS,
        "Most harmful event types to population health",
        charts["health_impact"],
        scale=1.0,
        value_format=",.0f",
        dpi=dpi,
    )
    _save_chart(
        economic_impact_top,
        ECONOMIC_METRICS,
        "Event types with the greatest economic consequences",
        charts["economic_impact"],
        scale=1e9,
        value_format=",.2f",
        dpi=dpi,
    )

    for name, path in charts.items():
        logger.info("Saved %s chart to %s", name, path)
    return {name: str(path) for name, path in charts.items()}
