# reader_publish/services/validator.py
from typing import Any, Dict

from reader_publish.models.summary import CONTENT_TYPES, REQUIRED_FIELDS, ValidationResult, is_present


# Record ids become the first path segment of the storage key and of the CDN url
_UNSAFE_RECORD_ID_CHARS = set("/\\?#%")


def _is_safe_record_id(record_id: Any) -> bool:
    text = str(record_id)
    if _UNSAFE_RECORD_ID_CHARS.intersection(text):
        return False
    return text not in (".", "..")


def validate(body: Dict[str, Any]) -> ValidationResult:
    """
    Check presence of the required fields and the shape of contentType/recordId.
    Optional fields are accepted as-is.
    """
    missing = [name for name in REQUIRED_FIELDS if not is_present(body.get(name))]
    if missing:
        return ValidationResult(False, f"Missing required fields: {', '.join(missing)}")

    if body["contentType"] not in CONTENT_TYPES:
        return ValidationResult(False, f"Invalid contentType. Must be one of: {', '.join(CONTENT_TYPES)}")

    if not _is_safe_record_id(body["recordId"]):
        return ValidationResult(
            False,
            "Invalid recordId. Must not contain path separators, ?, # or % or be a relative path segment",
        )

    return ValidationResult(True)


__all__ = ["validate"]
