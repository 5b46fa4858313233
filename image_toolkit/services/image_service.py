from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageFilter as PILImageFilter, ImageOps, UnidentifiedImageError

from image_toolkit.core.config import get_settings
from image_toolkit.core.errors import GeometryError, InvalidUploadError, ProcessingError
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import ImageFilter

logger = configure_logging()


class ImageService:
    """Raster operations (resize, crop, filters) backed by Pillow; every output is JPEG."""

    def __init__(self, quality: Optional[int] = None, blur_radius: Optional[float] = None) -> None:
        settings = get_settings()
        self.quality = quality or settings.jpeg_quality
        self.blur_radius = blur_radius or settings.blur_radius

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------
    def dimensions(self, source: Path) -> Tuple[int, int]:
        try:
            with Image.open(source) as image:
                return image.size
        except Image.DecompressionBombError as exc:
            raise _too_many_pixels(exc) from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise ProcessingError(f"Could not read image: {exc}") from exc

    # ------------------------------------------------------------------
    # Resize (cover: scale to fill, centre crop)
    # ------------------------------------------------------------------
    def resize(self, source: Path, width: int, height: int, output: Path) -> Path:
        def _apply(image: Image.Image) -> Image.Image:
            return ImageOps.fit(image, (width, height), method=Image.Resampling.LANCZOS)

        return self._process(source, output, _apply)

    # ------------------------------------------------------------------
    # Crop
    # ------------------------------------------------------------------
    def crop(self, source: Path, left: int, top: int, width: int, height: int, output: Path) -> Path:
        source_width, source_height = self.dimensions(source)
        if left < 0 or top < 0 or left + width > source_width or top + height > source_height:
            raise GeometryError(
                "Invalid crop parameters. Please check the coordinates and dimensions.",
                error="Bad extract area",
            )

        def _apply(image: Image.Image) -> Image.Image:
            return image.crop((left, top, left + width, top + height))

        return self._process(source, output, _apply)

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------
    def apply_filter(self, source: Path, image_filter: ImageFilter, output: Path) -> Path:
        if image_filter is ImageFilter.grayscale:
            return self._process(source, output, ImageOps.grayscale)

        radius = self.blur_radius

        def _blur(image: Image.Image) -> Image.Image:
            return image.filter(PILImageFilter.GaussianBlur(radius=radius))

        return self._process(source, output, _blur)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _process(self, source: Path, output: Path, operation) -> Path:
        try:
            with Image.open(source) as image:
                result = operation(self._to_jpeg_mode(image))
                result.save(output, format="JPEG", quality=self.quality)
        except Image.DecompressionBombError as exc:
            raise _too_many_pixels(exc) from exc
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            logger.exception("Image operation failed for %s", source)
            if output.is_file():
                output.unlink()
            raise ProcessingError(str(exc)) from exc
        return output

    @staticmethod
    def _to_jpeg_mode(image: Image.Image) -> Image.Image:
        if image.mode in ("RGB", "L"):
            return image
        if image.mode in ("RGBA", "LA", "P"):
            # flatten transparency onto white before dropping alpha
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return image.convert("RGB")


def _too_many_pixels(exc: Exception) -> InvalidUploadError:
    logger.warning("Rejected oversized image: %s", exc)
    return InvalidUploadError(
        f"Image dimensions exceed the supported limit of {Image.MAX_IMAGE_PIXELS} pixels",
        error="Image too large",
    )
