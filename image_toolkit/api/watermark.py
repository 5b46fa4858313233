from fastapi import APIRouter, Depends

from image_toolkit.api.deps import RequestParams, request_params, storage, stored_upload
from image_toolkit.core.errors import InvalidParameterError
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import OutputPrefix, StoredFile, WatermarkRequest, WatermarkStyle
from image_toolkit.services.image_service import ImageService
from image_toolkit.services.watermark_layout import generate_layout, parse_style
from image_toolkit.services.watermark_service import WatermarkCompositor

router = APIRouter(tags=["Watermark"])

logger = configure_logging()
image_service = ImageService()
compositor = WatermarkCompositor()


@router.post("/waterMarkImage", include_in_schema=False)
@router.post("/watermarkImage", summary="Tile a text watermark across an image")
def watermark_image(
    upload: StoredFile = Depends(stored_upload),
    params: RequestParams = Depends(request_params),
) -> dict:
    try:
        text = params.get("watermark")
        if not text:
            raise InvalidParameterError("Watermark text is required")
        style = parse_style(params.get("style", WatermarkStyle.diagonal.value))
        request = WatermarkRequest(text=text, style=style)

        width, height = image_service.dimensions(upload.path)
        layout = generate_layout(width, height, request.text, request.style)

        output = storage.output_path(OutputPrefix.watermarked.value, upload.original_name)
        compositor.composite(upload.path, layout, (width, height), output)
    finally:
        storage.discard(upload.path)

    logger.info("Image watermarked (%s, %s elements): %s", request.style.value, len(layout), output)
    return {
        "message": "Image watermarked successfully!",
        "path": str(output),
        "filename": output.name,
        "style": request.style.value,
    }
