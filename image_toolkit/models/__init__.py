
from .common import StoredFile
from .image import ImageFilter, OutputPrefix
from .watermark import WatermarkRequest, WatermarkStyle

__all__ = [
    "ImageFilter",
    "OutputPrefix",
    "StoredFile",
    "WatermarkRequest",
    "WatermarkStyle",
]
