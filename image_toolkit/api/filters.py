from fastapi import APIRouter, Depends

from image_toolkit.api.deps import RequestParams, request_params, storage, stored_upload
from image_toolkit.core.errors import InvalidParameterError
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import ImageFilter, OutputPrefix, StoredFile
from image_toolkit.services.image_service import ImageService

router = APIRouter(tags=["Filter"])

logger = configure_logging()
image_service = ImageService()


def _parse_filter(raw: str) -> ImageFilter:
    try:
        return ImageFilter(raw.lower())
    except ValueError:
        raise InvalidParameterError("Invalid filter. Supported filters are grayscale and blur.") from None


@router.post("/filterImage", summary="Apply a grayscale or blur filter")
def filter_image(
    upload: StoredFile = Depends(stored_upload),
    params: RequestParams = Depends(request_params),
) -> dict:
    try:
        raw_filter = params.get("filter")
        if not raw_filter:
            raise InvalidParameterError("Please specify a filter (grayscale or blur)")
        image_filter = _parse_filter(raw_filter)

        output = storage.output_path(OutputPrefix.filtered.value, upload.original_name)
        image_service.apply_filter(upload.path, image_filter, output)
    finally:
        storage.discard(upload.path)

    logger.info("Image filtered with %s: %s", image_filter.value, output)
    return {"message": "Image filtered successfully!", "path": str(output), "filter": raw_filter}
