from enum import Enum

from pydantic import BaseModel, Field


class WatermarkStyle(str, Enum):
    diagonal = "diagonal"
    grid = "grid"
    scattered = "scattered"


class WatermarkRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Text repeated across the image.")
    style: WatermarkStyle = Field(WatermarkStyle.diagonal, description="Placement algorithm.")
