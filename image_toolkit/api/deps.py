from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from fastapi import File, Request, UploadFile

from image_toolkit.core.config import get_settings
from image_toolkit.core.errors import InvalidUploadError, MissingFileError
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import StoredFile
from image_toolkit.storage.local import LocalStorage
from image_toolkit.utils.file_utils import ensure_image

settings = get_settings()
logger = configure_logging()
storage = LocalStorage()

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def resolve(query: Optional[Mapping[str, Any]], body: Optional[Mapping[str, Any]], key: str, default: Any = None) -> Any:
    """Read ``key`` from the query string first, then the form body; empty values count as absent."""
    for source in (query, body):
        if not source:
            continue
        value = source.get(key)
        if isinstance(value, str) and value != "":
            return value
    return default


@dataclass
class RequestParams:
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return resolve(self.query, self.body, key, default)


async def request_params(request: Request) -> RequestParams:
    content_type = request.headers.get("content-type", "").lower()
    body: Mapping[str, Any] = {}
    if content_type.startswith(_FORM_TYPES):
        # already parsed for the upload field; starlette caches the form
        body = await request.form()
    return RequestParams(query=request.query_params, body=body)


async def stored_upload(image: Optional[UploadFile] = File(None)) -> StoredFile:
    """Validate and store the multipart ``image`` field, returning its descriptor."""
    if image is None or not image.filename:
        raise MissingFileError("Please upload an image")

    ensure_image(image, settings.allowed_image_types)

    path = storage.save_upload(image)
    size_bytes = path.stat().st_size
    if size_bytes > settings.max_upload_bytes:
        storage.discard(path)
        limit_mb = settings.max_upload_bytes // (1024 * 1024)
        raise InvalidUploadError(f"File size should not exceed {limit_mb}MB", error="File too large")

    logger.info("Stored upload %s as %s (%s bytes)", image.filename, path.name, size_bytes)
    return StoredFile(path=path, filename=path.name, original_name=image.filename, size_bytes=size_bytes)
