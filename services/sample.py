"""Loading of the bundled sample balance sheet shown on first visit."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import pandas as pd
import requests

import config
from services.parsing import parse_csv

logger = logging.getLogger(__name__)


class SampleFetchError(RuntimeError):
    """Raised when the sample file cannot be retrieved."""


def _fetch_remote(url: str, timeout: float) -> bytes:
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise SampleFetchError(f"サンプルデータの取得に失敗しました: {exc}") from exc
    if not response.ok:
        raise SampleFetchError(
            f"サンプルデータの取得に失敗しました (HTTP {response.status_code}): {response.text}"
        )
    return response.content


def _read_local(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SampleFetchError(f"サンプルデータを読み込めませんでした: {path.name}") from exc


def sample_file_name(url: str | None = None, path: Path | None = None) -> str:
    url = config.SAMPLE_DATA_URL if url is None else url
    if url:
        return url.rstrip("/").rsplit("/", 1)[-1] or "sample.csv"
    return (path or config.SAMPLE_DATA_PATH).name


def load_sample_table(
    *,
    url: str | None = None,
    path: Path | None = None,
    timeout: float | None = None,
) -> Tuple[str, pd.DataFrame]:
    """Return ``(file_name, table)`` for the configured sample CSV.

    A configured ``SAMPLE_DATA_URL`` takes precedence over the bundled file.
    """

    url = config.SAMPLE_DATA_URL if url is None else url
    path = config.SAMPLE_DATA_PATH if path is None else path
    timeout = config.SAMPLE_FETCH_TIMEOUT if timeout is None else timeout

    if url:
        data = _fetch_remote(url, timeout)
        logger.info("Fetched sample data from %s (%d bytes)", url, len(data))
    else:
        data = _read_local(path)
        logger.info("Loaded bundled sample data from %s", path)
    return sample_file_name(url, path), parse_csv(data)


__all__ = ["SampleFetchError", "load_sample_table", "sample_file_name"]
