# reader_publish/models/summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

CONTENT_TYPES: Tuple[str, ...] = ("article", "podcast", "guideline", "digest")
REQUIRED_FIELDS: Tuple[str, ...] = ("recordId", "contentType", "title", "summaryHtml", "date")

OBJECT_NAME = "summary.json"
OBJECT_CONTENT_TYPE = "application/json; charset=utf-8"
OBJECT_CACHE_CONTROL = "public, max-age=86400"  # 24 hours
OBJECT_CONTENT_LABEL = "reader-summary"


def is_present(value: Any) -> bool:
    """Empty string, None, False and 0 count as absent; empty lists and dicts do not."""
    return value not in (None, "", False)


def _first_present(*values: Any) -> Any:
    for value in values:
        if is_present(value):
            return value
    return None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


# Incoming publish record, as sent by the caller
@dataclass(frozen=True)
class PublishRequest:
    record_id: str
    content_type: str
    title: str
    summary_html: str
    date: str
    full_html: Optional[str] = None          # translationHtml wins over fullHtml
    source_name: Optional[str] = None
    source_url: Optional[str] = None
    original_title: Optional[str] = None
    original_url: Optional[str] = None
    authors: Any = None                      # opaque, passed through verbatim

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "PublishRequest":
        """Map a camelCase request body to a PublishRequest. Expects a validated body."""
        return cls(
            record_id=body["recordId"],
            content_type=body["contentType"],
            title=body["title"],
            summary_html=body["summaryHtml"],
            date=body["date"],
            full_html=_first_present(body.get("translationHtml"), body.get("fullHtml")),
            source_name=_first_present(body.get("sourceName")),
            source_url=_first_present(body.get("sourceUrl")),
            original_title=_first_present(body.get("originalTitle")),
            original_url=_first_present(body.get("originalUrl")),
            authors=_first_present(body.get("authors")),
        )


__all__ = [
    "CONTENT_TYPES",
    "REQUIRED_FIELDS",
    "OBJECT_NAME",
    "OBJECT_CONTENT_TYPE",
    "OBJECT_CACHE_CONTROL",
    "OBJECT_CONTENT_LABEL",
    "is_present",
    "ValidationResult",
    "PublishRequest",
]
