import re
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from image_toolkit.core.errors import InvalidUploadError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def ensure_image(upload: UploadFile, allowed_types: str) -> None:
    """Check that both the extension and the content type name an allowed image type."""
    pattern = re.compile(allowed_types, re.IGNORECASE)
    extension = Path(upload.filename or "").suffix.lower()
    content_type = (upload.content_type or "").lower()
    if not (extension and pattern.search(extension) and pattern.search(content_type)):
        raise InvalidUploadError("Only images are allowed!")


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the leading integer of a request value.

    Leading whitespace and a sign are accepted and trailing characters are
    ignored ("100px" -> 100, "10.5" -> 10). Returns None when there is no
    leading integer at all.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))
