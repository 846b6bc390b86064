"""Streamlit view: upload a balance sheet and chart its composition per year."""
from __future__ import annotations

import html
import logging
from typing import List

import pandas as pd
import streamlit as st

from calc import build_compositions, composition_frame
from config import BUNDLED_SAMPLE_NAME, asset_url
from formatting import format_amount_with_unit, format_ratio
from models import YearComposition
from services.parsing import ParseError, dataframe_to_rows, parse_upload
from services.sample import SampleFetchError, load_sample_table, sample_file_name
from state import (
    COLOR_BLIND_KEY,
    ERROR_KEY,
    FILE_NAME_KEY,
    INTAKE_ERROR_KEY,
    SAMPLE_LOADED_KEY,
    TABLE_KEY,
    UPLOAD_SIGNATURE_KEY,
    clear_upload_selection,
    start_new_upload,
    store_error,
    store_table,
)
from theme import active_bucket_colors
from ui.charts import build_composition_figure, plotly_download_config
from ui.components import MetricCard, render_callout, render_metric_cards
from ui.streamlit_compat import stretch_width_kwargs
from validators import ALLOWED_EXTENSIONS, collect_error_messages, validate_upload

logger = logging.getLogger(__name__)

PREVIEW_ROWS = 10
LOADING_MESSAGE = "データを読み込み中..."
NO_CHART_MESSAGE = "グラフを表示するためのデータが不足しているか、形式が正しくありません。"


@st.cache_data(show_spinner=False)
def _parse_cached(data: bytes, kind: str) -> pd.DataFrame:
    return parse_upload(data, kind)  # type: ignore[arg-type]


@st.cache_data(show_spinner=False)
def _compositions_for(table: pd.DataFrame) -> List[YearComposition]:
    return build_compositions(dataframe_to_rows(table))


def _upload_signature(upload) -> str:
    file_id = getattr(upload, "file_id", None)
    if file_id:
        return str(file_id)
    return f"{upload.name}:{getattr(upload, 'size', 0)}"


def _load_sample_once() -> None:
    """Load the bundled sample on the first run of a session."""

    if st.session_state[SAMPLE_LOADED_KEY]:
        return
    st.session_state[SAMPLE_LOADED_KEY] = True
    with st.spinner(LOADING_MESSAGE):
        try:
            file_name, table = load_sample_table()
        except (SampleFetchError, ParseError) as exc:
            logger.warning("Sample data could not be loaded: %s", exc)
            st.session_state[FILE_NAME_KEY] = sample_file_name()
            store_error(str(exc))
            return
    st.session_state[FILE_NAME_KEY] = file_name
    store_table(table)


def _handle_upload(upload) -> None:
    signature = _upload_signature(upload)
    if signature == st.session_state[UPLOAD_SIGNATURE_KEY]:
        return
    st.session_state[SAMPLE_LOADED_KEY] = True

    kind, issues = validate_upload(upload.name, getattr(upload, "type", None), getattr(upload, "size", None))
    if issues:
        logger.info("Rejected upload %s: %s", upload.name, [issue.field for issue in issues])
        st.session_state[UPLOAD_SIGNATURE_KEY] = signature
        st.session_state[INTAKE_ERROR_KEY] = collect_error_messages(issues)
        return

    start_new_upload(upload.name, signature)
    with st.spinner(LOADING_MESSAGE):
        try:
            table = _parse_cached(upload.getvalue(), kind)
        except ParseError as exc:
            logger.warning("Failed to parse %s: %s", upload.name, exc)
            store_error(str(exc))
            return
    logger.info("Loaded %s (%d rows)", upload.name, len(table))
    store_table(table)


def _render_sidebar() -> None:
    st.sidebar.header("表示設定")
    st.sidebar.toggle(
        "色覚サポート",
        key=COLOR_BLIND_KEY,
        help="色覚特性に配慮した配色に切り替えます。",
    )
    st.sidebar.markdown(
        f"[サンプルCSVをダウンロード]({asset_url(f'app/static/{BUNDLED_SAMPLE_NAME}')})"
    )


def _render_preview(table: pd.DataFrame) -> None:
    if table.empty:
        st.info("表示するデータがありません。")
        return
    st.dataframe(table.head(PREVIEW_ROWS), hide_index=True, **stretch_width_kwargs(st.dataframe))
    if len(table) > PREVIEW_ROWS:
        st.caption(f"...他 {len(table) - PREVIEW_ROWS} 行 (最初の{PREVIEW_ROWS}行のみ表示)")


def _year_cards(composition: YearComposition) -> List[MetricCard]:
    return [
        MetricCard(label="資産合計", value=format_amount_with_unit(composition.total_assets)),
        MetricCard(label="純資産", value=format_amount_with_unit(composition.equity)),
        MetricCard(label="自己資本比率", value=format_ratio(composition.equity_ratio)),
    ]


def _render_charts(table: pd.DataFrame, file_name: str) -> None:
    compositions = _compositions_for(table)
    if not compositions:
        st.info(NO_CHART_MESSAGE)
        return

    st.markdown(f"### 貸借対照表 構成比 (ファイル: {file_name or 'N/A'})")
    colors = active_bucket_colors()
    for column, composition in zip(st.columns(len(compositions)), compositions):
        with column:
            st.markdown(
                f"<div class='year-heading'>{html.escape(composition.year)}</div>",
                unsafe_allow_html=True,
            )
            render_metric_cards(_year_cards(composition), grid_aria_label=f"{composition.year} の主要指標")
            st.plotly_chart(
                build_composition_figure(composition, colors=colors),
                config=plotly_download_config(f"bs_composition_{composition.year}"),
                **stretch_width_kwargs(st.plotly_chart),
            )

    summary = composition_frame(compositions)
    with st.expander("構成比データ", expanded=False):
        st.dataframe(summary, hide_index=True, **stretch_width_kwargs(st.dataframe))
        st.download_button(
            "CSVダウンロード",
            data=summary.to_csv(index=False).encode("utf-8-sig"),
            file_name="bs_composition.csv",
            mime="text/csv",
        )


def render_dashboard_page() -> None:
    """Render the upload form, the data preview and the composition charts."""

    _render_sidebar()

    st.title("データ可視化ダッシュボード")
    st.caption("CSVまたはExcelファイルをアップロードしてデータをグラフ化します。")

    upload = st.file_uploader(
        "ファイルを選択 (CSV or Excel):",
        type=list(ALLOWED_EXTENSIONS),
        key="bs_file_input",
    )
    if upload is not None:
        _handle_upload(upload)
    else:
        clear_upload_selection()
        _load_sample_once()

    intake_error = st.session_state[INTAKE_ERROR_KEY]
    if intake_error:
        st.error(intake_error)
    elif upload is not None and st.session_state[FILE_NAME_KEY]:
        st.success(f"選択されたファイル: {st.session_state[FILE_NAME_KEY]}")

    error = st.session_state[ERROR_KEY]
    file_name = st.session_state[FILE_NAME_KEY]
    table = st.session_state[TABLE_KEY]
    if error:
        render_callout(icon="⚠️", title="エラー:", body=error, tone="negative")
        return
    if not file_name or table is None:
        return

    st.markdown(f"## 読み込みデータ: {file_name}")
    _render_preview(table)
    if not table.empty:
        _render_charts(table, file_name)


__all__ = ["render_dashboard_page"]
