from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple

import fitz  # PyMuPDF
from PIL import Image
from reportlab.lib.colors import Color
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from image_toolkit.core.config import get_settings
from image_toolkit.core.errors import CompositionError
from image_toolkit.core.logging import configure_logging
from image_toolkit.services.watermark_layout import OverlayElement

logger = configure_logging()

_CUSTOM_FONT_NAME = "WatermarkFont"


def font_covers(font_name: str, text: str) -> bool:
    """The standard PDF fonts only carry the cp1252 glyph set; registered TTFs are trusted."""
    if font_name not in pdfmetrics.standardFonts:
        return True
    try:
        text.encode("cp1252")
    except UnicodeEncodeError:
        return False
    return True


class OverlayRenderer(Protocol):
    def render(self, elements: Sequence[OverlayElement], size: Tuple[int, int]) -> Image.Image:
        """Return a transparent RGBA image of exactly ``size`` with every element drawn."""


class ReportLabOverlayRenderer:
    """Draw overlay elements on a reportlab page and rasterize it with PyMuPDF."""

    def __init__(self, font_name: Optional[str] = None, font_path: Optional[Path] = None) -> None:
        settings = get_settings()
        font_path = font_path or settings.watermark_font_path
        if font_path:
            pdfmetrics.registerFont(TTFont(_CUSTOM_FONT_NAME, str(font_path)))
            self.font_name = _CUSTOM_FONT_NAME
        else:
            self.font_name = font_name or settings.watermark_font

    def render(self, elements: Sequence[OverlayElement], size: Tuple[int, int]) -> Image.Image:
        width, height = size
        for text in {element.text for element in elements}:
            if not font_covers(self.font_name, text):
                logger.warning(
                    "Font %s cannot draw %r; set WATERMARK_FONT_PATH to a TTF that covers it", self.font_name, text
                )
        pdf_bytes = self._draw_page(elements, width, height)

        with fitz.open(stream=pdf_bytes, filetype="pdf") as document:
            page = document.load_page(0)
            pixmap = page.get_pixmap(alpha=True)
            # MuPDF samples carry premultiplied alpha
            overlay = Image.frombytes("RGBa", (pixmap.width, pixmap.height), pixmap.samples)

        if overlay.size != (width, height):
            raise CompositionError(
                f"Overlay rendered at {overlay.size[0]}x{overlay.size[1]}, expected {width}x{height}."
            )
        return overlay.convert("RGBA")

    def _draw_page(self, elements: Sequence[OverlayElement], width: int, height: int) -> bytes:
        packet = BytesIO()
        c = canvas.Canvas(packet, pagesize=(width, height))

        for element in elements:
            c.saveState()
            c.setFillColor(Color(1, 1, 1, alpha=element.opacity))
            c.setFillAlpha(element.opacity)
            c.setFont(self.font_name, element.font_size)
            # page space has y pointing up, so flip the anchor and the turn direction
            c.translate(element.x, height - element.y)
            c.rotate(-element.rotation)
            c.drawString(0, 0, element.text)
            c.restoreState()

        c.showPage()
        c.save()
        return packet.getvalue()


class WatermarkCompositor:
    """Blend a rendered overlay over a source image and write the result as JPEG."""

    def __init__(self, renderer: Optional[OverlayRenderer] = None, quality: Optional[int] = None) -> None:
        settings = get_settings()
        self.renderer = renderer or ReportLabOverlayRenderer()
        self.quality = quality or settings.jpeg_quality

    def composite(
        self,
        source_path: Path,
        overlay: Sequence[OverlayElement],
        dimensions: Tuple[int, int],
        output_path: Path,
    ) -> Path:
        try:
            overlay_image = self.renderer.render(overlay, dimensions)
            with Image.open(source_path) as source:
                base = source.convert("RGBA")
            if base.size != overlay_image.size:
                raise CompositionError(
                    f"Source image is {base.size[0]}x{base.size[1]}, overlay is "
                    f"{overlay_image.size[0]}x{overlay_image.size[1]}."
                )
            blended = Image.alpha_composite(base, overlay_image).convert("RGB")
            blended.save(output_path, format="JPEG", quality=self.quality)
        except CompositionError:
            _remove_partial(output_path)
            raise
        except Exception as exc:
            logger.exception("Watermark composition failed for %s", source_path)
            _remove_partial(output_path)
            raise CompositionError(str(exc)) from exc

        logger.info("Composited %s watermark elements onto %s", len(overlay), output_path)
        return Path(output_path)


def _remove_partial(path: Path) -> None:
    path = Path(path)
    if path.is_file():
        path.unlink()
