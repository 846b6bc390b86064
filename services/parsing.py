"""Parse uploaded CSV / Excel files into row mappings."""
from __future__ import annotations

import io
import logging
from typing import Dict, Iterable, List

import pandas as pd

from validators import FileKind

logger = logging.getLogger(__name__)

TRIAL_ENCODINGS = ("utf-8-sig", "cp932")


class ParseError(ValueError):
    """Raised when a file cannot be turned into a table."""


def _normalise_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(column).strip() for column in df.columns]
    return df


def parse_csv(data: bytes, encodings: Iterable[str] = TRIAL_ENCODINGS) -> pd.DataFrame:
    """Read CSV bytes with the header row as keys and numeric type inference."""

    last_error: Exception | None = None
    for encoding in encodings:
        try:
            df = pd.read_csv(
                io.BytesIO(data),
                encoding=encoding,
                thousands=",",
                skip_blank_lines=True,
            )
        except UnicodeDecodeError as exc:
            last_error = exc
            continue
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as exc:
            raise ParseError(f"CSVパースエラー: {exc}") from exc
        logger.debug("Parsed CSV with encoding %s (%d rows)", encoding, len(df))
        return _normalise_columns(df)
    raise ParseError(f"CSVパースエラー: 文字コードを判定できませんでした ({last_error})")


def parse_excel(data: bytes) -> pd.DataFrame:
    """Read the first sheet of an .xlsx workbook with its first row as keys."""

    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=0, engine="openpyxl")
    except Exception as exc:
        message = str(exc) or "Excelパース中に不明なエラーが発生しました。"
        raise ParseError(f"Excelパースエラー: {message}") from exc
    df = df.dropna(how="all")
    logger.debug("Parsed workbook first sheet (%d rows)", len(df))
    return _normalise_columns(df)


_PARSERS = {
    "csv": parse_csv,
    "xlsx": parse_excel,
}


def parse_upload(data: bytes, kind: FileKind) -> pd.DataFrame:
    """Parse *data* according to *kind* (``csv`` or ``xlsx``)."""

    parser = _PARSERS.get(kind)
    if parser is None:
        raise ParseError("サポートされていないファイル形式です。CSVまたはExcelファイルを選択してください。")
    return parser(data)


def dataframe_to_rows(df: pd.DataFrame) -> List[Dict[str, object]]:
    """Return the table as ordered row mappings; missing cells become ``None``."""

    if df.empty:
        return []
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")


__all__ = [
    "ParseError",
    "TRIAL_ENCODINGS",
    "dataframe_to_rows",
    "parse_csv",
    "parse_excel",
    "parse_upload",
]
