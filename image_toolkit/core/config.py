from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """General application settings, loaded from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Image Toolkit API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    storage_dir: Optional[Path] = None
    uploads_dir: Optional[Path] = None
    outputs_dir: Optional[Path] = None

    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_image_types: str = "jpeg|jpg|png|gif"

    jpeg_quality: int = Field(80, ge=1, le=95)
    blur_radius: float = 20.0

    # standard PDF fonts only draw cp1252 text; point this at a TTF for other scripts
    watermark_font: str = "Helvetica"
    watermark_font_path: Optional[Path] = None

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3000

    def configure_paths(self) -> None:
        """Resolve default directories and create any that are missing."""
        self.storage_dir = (self.storage_dir or (self.base_dir / "images")).resolve()
        self.uploads_dir = (self.uploads_dir or (self.storage_dir / "uploads")).resolve()
        self.outputs_dir = (self.outputs_dir or (self.storage_dir / "processed")).resolve()

        for directory in (self.storage_dir, self.uploads_dir, self.outputs_dir):
            directory.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
