# reader_publish/services/blob_builder.py
"""
Compact storage representation of a published summary.

    t     title
    s     summary html
    y     content type (article/podcast/guideline/digest)
    d     date (YYYY-MM-DD)
    r     record id
    f     full/translation html          (optional)
    src   {"n": source name, "u": url}   (optional, needs a name)
    orig  {"t": original title, "u": url} (optional, needs a title)
    a     authors, verbatim              (optional)
"""
import json
from typing import Any, Dict

from reader_publish.models.summary import OBJECT_NAME, PublishRequest


def build_blob(request: PublishRequest) -> Dict[str, Any]:
    blob: Dict[str, Any] = {
        "t": request.title,
        "s": request.summary_html,
        "y": request.content_type,
        "d": request.date,
        "r": request.record_id,
    }

    if request.full_html is not None:
        blob["f"] = request.full_html

    # a url without its name/title is dropped
    if request.source_name is not None:
        blob["src"] = {"n": request.source_name}
        if request.source_url is not None:
            blob["src"]["u"] = request.source_url

    if request.original_title is not None:
        blob["orig"] = {"t": request.original_title}
        if request.original_url is not None:
            blob["orig"]["u"] = request.original_url

    if request.authors is not None:
        blob["a"] = request.authors

    return blob


def serialize_blob(blob: Dict[str, Any]) -> bytes:
    """UTF-8 JSON, no whitespace, keys in insertion order."""
    return json.dumps(blob, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def object_key(record_id: str) -> str:
    return f"{record_id}/{OBJECT_NAME}"


__all__ = ["build_blob", "serialize_blob", "object_key"]
