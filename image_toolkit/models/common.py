from pathlib import Path

from pydantic import BaseModel, Field


class StoredFile(BaseModel):
    """Descriptor of the single uploaded image a request operates on."""

    path: Path = Field(..., description="Absolute path of the stored upload.")
    filename: str = Field(..., description="Generated name on disk.")
    original_name: str = Field(..., description="Name sent by the client.")
    size_bytes: int = Field(..., ge=0)
