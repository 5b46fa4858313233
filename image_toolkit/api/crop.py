from fastapi import APIRouter, Depends

from image_toolkit.api.deps import RequestParams, request_params, storage, stored_upload
from image_toolkit.core.errors import InvalidParameterError
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import OutputPrefix, StoredFile
from image_toolkit.services.image_service import ImageService
from image_toolkit.utils.file_utils import parse_int

router = APIRouter(tags=["Crop"])

logger = configure_logging()
image_service = ImageService()


@router.post("/cropImage", summary="Extract a rectangular region of an image")
def crop_image(
    upload: StoredFile = Depends(stored_upload),
    params: RequestParams = Depends(request_params),
) -> dict:
    try:
        crop_width = parse_int(params.get("cropWidth"))
        crop_height = parse_int(params.get("cropHeight"))
        if crop_width is None or crop_height is None or crop_width <= 0 or crop_height <= 0:
            raise InvalidParameterError("Please specify valid positive values for cropWidth and cropHeight.")

        crop_x = parse_int(params.get("cropX", "0"))
        crop_y = parse_int(params.get("cropY", "0"))
        if crop_x is None or crop_y is None or crop_x < 0 or crop_y < 0:
            raise InvalidParameterError("Please specify non-negative values for cropX and cropY.")

        output = storage.output_path(OutputPrefix.cropped.value, upload.original_name)
        image_service.crop(upload.path, crop_x, crop_y, crop_width, crop_height, output)
    finally:
        storage.discard(upload.path)

    logger.info("Image cropped at (%s, %s) %sx%s: %s", crop_x, crop_y, crop_width, crop_height, output)
    return {"message": "Image cropped successfully!", "path": str(output)}
