import random
import shutil
import time
from pathlib import Path
from typing import IO, Optional
from uuid import uuid4

from fastapi import UploadFile

from image_toolkit.core.config import get_settings
from image_toolkit.core.logging import configure_logging

logger = configure_logging()


class LocalStorage:
    """Local storage for uploaded images and processed outputs."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        settings = get_settings()
        if base_dir is None:
            self.base_dir = settings.storage_dir
            self.uploads_dir = settings.uploads_dir
            self.outputs_dir = settings.outputs_dir
        else:
            self.base_dir = Path(base_dir)
            self.uploads_dir = self.base_dir / "uploads"
            self.outputs_dir = self.base_dir / "processed"

        for directory in (self.base_dir, self.uploads_dir, self.outputs_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _generate_upload_name(suffix: str, field: str = "image") -> str:
        suffix = suffix if suffix.startswith(".") else f".{suffix.lstrip('.')}"
        token = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{field}-{token}{suffix.lower()}"

    def save_upload(self, upload: UploadFile) -> Path:
        suffix = Path(upload.filename or "").suffix or ".bin"
        upload.file.seek(0)
        return self._save_stream(upload.file, suffix=suffix, directory=self.uploads_dir)

    def _save_stream(self, stream: IO[bytes], *, suffix: str, directory: Path) -> Path:
        target_path = directory / self._generate_upload_name(suffix)
        with target_path.open("wb") as buffer:
            shutil.copyfileobj(stream, buffer)
        return target_path

    def output_path(self, prefix: str, original_name: str) -> Path:
        """Build a unique JPEG path in the output directory for an operation."""
        stem = Path(original_name or "image").stem or "image"
        return self.outputs_dir / f"{prefix}-{uuid4().hex[:12]}-{stem}.jpg"

    def find_download(self, name: str) -> Optional[Path]:
        # only bare file names; anything with a directory part is never served
        if not name or Path(name).name != name or name in {".", ".."}:
            return None
        for directory in (self.outputs_dir, self.uploads_dir):
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None

    def discard(self, path: Optional[Path]) -> None:
        """Delete a per-request input file; failures are logged, never raised."""
        if not path:
            return
        try:
            Path(path).unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Error deleting file %s: %s", path, exc)
