"""Validation helpers for user supplied balance sheet files."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable, List, Literal, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from config import MAX_UPLOAD_BYTES

FileKind = Literal["csv", "xlsx"]

EXTENSION_KINDS: dict[str, FileKind] = {
    ".csv": "csv",
    ".xlsx": "xlsx",
}
MIME_KINDS: dict[str, FileKind] = {
    "text/csv": "csv",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
}
ALLOWED_EXTENSIONS = tuple(ext.lstrip(".") for ext in EXTENSION_KINDS)

UNSUPPORTED_FILE_MESSAGE = "CSVまたはExcelファイルを選択してください。"


@dataclass(frozen=True)
class UploadIssue:
    """Represents a problem that prevents a file from being parsed."""

    field: str
    message: str


class UploadedFileInfo(BaseModel):
    """Metadata of a file chosen in the uploader."""

    name: str = Field(min_length=1)
    mime_type: str = ""
    size: int = Field(default=0, ge=0)

    @field_validator("mime_type", mode="before")
    @classmethod
    def _normalise_mime(cls, value: str | None) -> str:
        return (value or "").split(";")[0].strip().lower()


def _issues_from_error(error: ValidationError) -> List[UploadIssue]:
    issues: List[UploadIssue] = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail.get("loc", ()))
        issues.append(UploadIssue(field=f"file.{path}" if path else "file", message=detail.get("msg", "不正な値です。")))
    return issues


def detect_file_kind(name: str, mime_type: str | None = None) -> FileKind | None:
    """Return the file kind judged from the extension, then the MIME type."""

    extension = PurePath(str(name)).suffix.lower()
    if extension in EXTENSION_KINDS:
        return EXTENSION_KINDS[extension]
    mime = (mime_type or "").split(";")[0].strip().lower()
    return MIME_KINDS.get(mime)


def validate_upload(
    name: str,
    mime_type: str | None = None,
    size: int | None = None,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> Tuple[FileKind | None, List[UploadIssue]]:
    """Check a chosen file before it is handed to a parser."""

    try:
        info = UploadedFileInfo(name=name or "", mime_type=mime_type, size=size or 0)
    except ValidationError as exc:
        return None, _issues_from_error(exc)

    kind = detect_file_kind(info.name, info.mime_type)
    if kind is None:
        return None, [UploadIssue(field="file.type", message=UNSUPPORTED_FILE_MESSAGE)]
    if info.size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        return None, [
            UploadIssue(
                field="file.size",
                message=f"アップロードできるファイルサイズは{limit_mb:g}MBまでです。",
            )
        ]
    return kind, []


def collect_error_messages(issues: Iterable[UploadIssue]) -> str:
    return "\n".join(issue.message for issue in issues)


__all__ = [
    "ALLOWED_EXTENSIONS",
    "FileKind",
    "UNSUPPORTED_FILE_MESSAGE",
    "UploadIssue",
    "UploadedFileInfo",
    "collect_error_messages",
    "detect_file_kind",
    "validate_upload",
]
