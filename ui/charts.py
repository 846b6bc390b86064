"""Plotly figures for the balance sheet composition view."""
from __future__ import annotations

import html
from typing import Dict, List, Mapping, Sequence

import plotly.graph_objects as go

from formatting import AMOUNT_UNIT, format_amount, format_percentage
from models import (
    ASSETS_CATEGORY,
    BUCKET_LABELS,
    LIABILITIES_CATEGORY,
    CompositionBar,
    YearComposition,
)
from theme import BUCKET_COLORS, LABEL_TEXT_COLOR

CHART_HEIGHT = 450
CHART_MARGIN: Dict[str, int] = {"t": 20, "r": 30, "b": 20, "l": 20}
# Vertical space taken by category ticks and the horizontal legend.
AXIS_AND_LEGEND_HEIGHT = 70
MIN_LABEL_HEIGHT_PX = 15

# Trace order equals stacking order, bottom to top.
TRACE_ORDER: Sequence[str] = (
    "fixed_assets",
    "current_assets",
    "equity",
    "fixed_liabilities",
    "current_liabilities",
)

TOOLTIP_ORDER: Mapping[str, Sequence[str]] = {
    ASSETS_CATEGORY: ("current_assets", "fixed_assets"),
    LIABILITIES_CATEGORY: ("current_liabilities", "fixed_liabilities", "equity"),
}

PLOTLY_DOWNLOAD_OPTIONS = {
    "format": "png",
    "height": 600,
    "width": 800,
    "scale": 2,
}


def plotly_download_config(name: str) -> Dict[str, object]:
    """Ensure every Plotly chart exposes an image download button."""

    return {
        "displaylogo": False,
        "toImageButtonOptions": {"filename": name, **PLOTLY_DOWNLOAD_OPTIONS},
    }


def plot_area_height(chart_height: int = CHART_HEIGHT) -> int:
    return chart_height - CHART_MARGIN["t"] - CHART_MARGIN["b"] - AXIS_AND_LEGEND_HEIGHT


def segment_label(name: str, value: float, *, plot_height: float) -> str:
    """Return the in-bar label, or an empty string for short segments."""

    if value == 0 or value / 100 * plot_height < MIN_LABEL_HEIGHT_PX:
        return ""
    return f"{name} ({format_percentage(value)})"


def tooltip_text(bar: CompositionBar, colors: Mapping[str, str] | None = None) -> str:
    """Return the hover text listing every line item of *bar*'s buckets."""

    colors = colors or BUCKET_COLORS
    lines: List[str] = []
    for bucket in TOOLTIP_ORDER[bar.category]:
        items = bar.details.get(bucket, [])
        if not items:
            continue
        lines.append(f"<span style='color:{colors[bucket]}'><b>{BUCKET_LABELS[bucket]}</b></span>")
        for item in items:
            lines.append(
                f"  {html.escape(item.name)}: {format_amount(item.value)} ({AMOUNT_UNIT})"
                f" - {format_percentage(item.percentage)}"
            )
    if not lines:
        return ""
    return "<br>".join([f"<b>{html.escape(bar.category)} 内訳</b>", *lines])


def build_composition_figure(
    composition: YearComposition,
    *,
    colors: Mapping[str, str] | None = None,
    chart_height: int = CHART_HEIGHT,
) -> go.Figure:
    """Build the 100% stacked bar chart for a single fiscal year."""

    colors = colors or BUCKET_COLORS
    plot_height = plot_area_height(chart_height)
    categories = [bar.category for bar in composition.bars]
    tooltips = [tooltip_text(bar, colors) for bar in composition.bars]

    fig = go.Figure()
    for bucket in TRACE_ORDER:
        label = BUCKET_LABELS[bucket]
        values = [bar.percentages[bucket] for bar in composition.bars]
        fig.add_trace(
            go.Bar(
                name=label,
                x=categories,
                y=values,
                marker=dict(color=colors[bucket]),
                text=[segment_label(label, value, plot_height=plot_height) for value in values],
                textposition="inside",
                insidetextanchor="middle",
                textangle=0,
                textfont=dict(size=10, color=LABEL_TEXT_COLOR),
                customdata=[
                    tooltip or f"{label}: {format_percentage(value)}"
                    for tooltip, value in zip(tooltips, values)
                ],
                hovertemplate="%{customdata}<extra></extra>",
            )
        )
    fig.update_layout(
        barmode="stack",
        bargap=0,
        height=chart_height,
        margin=CHART_MARGIN,
        template="plotly_white",
        legend=dict(orientation="h", traceorder="normal", y=-0.08, x=0.5, xanchor="center"),
        hoverlabel=dict(bgcolor="white", align="left", font=dict(color=LABEL_TEXT_COLOR)),
        xaxis=dict(type="category", title=None),
        yaxis=dict(
            range=[0, 100],
            showticklabels=False,
            ticks="",
            zeroline=False,
            griddash="dash",
            fixedrange=True,
        ),
    )
    return fig


__all__ = [
    "CHART_HEIGHT",
    "MIN_LABEL_HEIGHT_PX",
    "TRACE_ORDER",
    "build_composition_figure",
    "plot_area_height",
    "plotly_download_config",
    "segment_label",
    "tooltip_text",
]
