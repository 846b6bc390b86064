"""Reusable UI helpers for metric cards and message callouts."""
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Sequence

import streamlit as st


@dataclass(frozen=True)
class MetricCard:
    label: str
    value: str
    description: str | None = None


def render_metric_cards(cards: Sequence[MetricCard], *, grid_aria_label: str | None = None) -> None:
    """Render metric cards in a responsive grid."""

    if not cards:
        return
    blocks: list[str] = []
    for card in cards:
        description_html = (
            f"<p class='metric-card__description'>{html.escape(card.description)}</p>"
            if card.description
            else ""
        )
        blocks.append(
            "<section role='group' class='metric-card'>"
            f"<span class='metric-card__label'>{html.escape(card.label)}</span>"
            f"<p class='metric-card__value'>{html.escape(card.value)}</p>{description_html}"
            "</section>"
        )
    region_attrs = ""
    if grid_aria_label:
        region_attrs = f" role='region' aria-label='{html.escape(grid_aria_label)}'"
    st.markdown(
        f"<div class='responsive-card-grid'{region_attrs}>" + "".join(blocks) + "</div>",
        unsafe_allow_html=True,
    )


def render_callout(*, icon: str, title: str, body: str, tone: str = "neutral") -> None:
    st.markdown(
        """
        <div class="callout callout--{tone}" role="alert">
            <span class="callout__icon">{icon}</span>
            <div class="callout__body">
                <strong class="callout__title">{title}</strong>
                <p>{body}</p>
            </div>
        </div>
        """.format(
            tone=html.escape(tone),
            icon=html.escape(icon),
            title=html.escape(title),
            body=html.escape(body),
        ),
        unsafe_allow_html=True,
    )


__all__ = ["MetricCard", "render_callout", "render_metric_cards"]
