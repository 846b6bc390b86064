"""Utilities for managing Streamlit session state defaults and resets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping

import pandas as pd
import streamlit as st

StateFactory = Callable[[], Any]
TypeHint = type | tuple[type, ...] | None

TABLE_KEY = "bs_table"
FILE_NAME_KEY = "bs_file_name"
ERROR_KEY = "bs_error"
INTAKE_ERROR_KEY = "bs_intake_error"
SAMPLE_LOADED_KEY = "bs_sample_loaded"
UPLOAD_SIGNATURE_KEY = "bs_upload_signature"
COLOR_BLIND_KEY = "ui_color_blind"

# Keys cleared whenever a new file is selected.
UPLOAD_RESULT_KEYS = (TABLE_KEY, FILE_NAME_KEY, ERROR_KEY, INTAKE_ERROR_KEY)


@dataclass(frozen=True)
class StateSpec:
    """Definition of a session state entry."""

    default_factory: StateFactory
    type_hint: TypeHint
    description: str

    def create_default(self) -> Any:
        """Return a new default value for the state entry."""
        return self.default_factory()

    def is_valid(self, value: Any) -> bool:
        """Check whether *value* matches the declared type hint."""
        if self.type_hint is None:
            return True
        hints = self.type_hint if isinstance(self.type_hint, tuple) else (self.type_hint,)
        return isinstance(value, hints)


STATE_SPECS: Dict[str, StateSpec] = {
    TABLE_KEY: StateSpec(lambda: None, (pd.DataFrame, type(None)), "読み込んだ表データ"),
    FILE_NAME_KEY: StateSpec(lambda: "", str, "表示中のファイル名"),
    ERROR_KEY: StateSpec(lambda: "", str, "読み込み・解析エラーの表示文"),
    INTAKE_ERROR_KEY: StateSpec(lambda: "", str, "ファイル選択時のエラー表示文"),
    SAMPLE_LOADED_KEY: StateSpec(lambda: False, bool, "サンプルデータを読み込み済みか"),
    UPLOAD_SIGNATURE_KEY: StateSpec(lambda: "", str, "処理済みアップロードの識別子"),
    COLOR_BLIND_KEY: StateSpec(lambda: False, bool, "色覚サポート配色の切り替え"),
}


def ensure_session_defaults(overrides: Mapping[str, Any] | None = None) -> None:
    """Populate :mod:`st.session_state` with defaults and type-validate entries."""

    overrides = overrides or {}
    for key, spec in STATE_SPECS.items():
        if key in overrides:
            st.session_state[key] = overrides[key]
            continue
        if key not in st.session_state or not spec.is_valid(st.session_state[key]):
            st.session_state[key] = spec.create_default()


def reset_session_keys(keys: Iterable[str] | None = None) -> None:
    """Reset selected state keys to their default values."""

    target_keys = list(keys) if keys is not None else list(STATE_SPECS.keys())
    for key in target_keys:
        if key in STATE_SPECS:
            st.session_state[key] = STATE_SPECS[key].create_default()
        elif key in st.session_state:
            del st.session_state[key]


def start_new_upload(file_name: str, signature: str) -> None:
    """Discard the previous result before a newly selected file is processed."""

    reset_session_keys(UPLOAD_RESULT_KEYS)
    st.session_state[FILE_NAME_KEY] = file_name
    st.session_state[UPLOAD_SIGNATURE_KEY] = signature


def clear_upload_selection() -> None:
    """Forget the rejected or processed file once the uploader is emptied."""

    reset_session_keys((INTAKE_ERROR_KEY, UPLOAD_SIGNATURE_KEY))


def store_table(table: pd.DataFrame) -> None:
    st.session_state[TABLE_KEY] = table
    st.session_state[ERROR_KEY] = ""


def store_error(message: str) -> None:
    st.session_state[TABLE_KEY] = None
    st.session_state[ERROR_KEY] = message


__all__ = [
    "COLOR_BLIND_KEY",
    "ERROR_KEY",
    "FILE_NAME_KEY",
    "INTAKE_ERROR_KEY",
    "SAMPLE_LOADED_KEY",
    "STATE_SPECS",
    "StateSpec",
    "TABLE_KEY",
    "UPLOAD_RESULT_KEYS",
    "UPLOAD_SIGNATURE_KEY",
    "clear_upload_selection",
    "ensure_session_defaults",
    "reset_session_keys",
    "start_new_upload",
    "store_error",
    "store_table",
]
