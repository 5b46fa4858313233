from fastapi import APIRouter, Depends

from image_toolkit.api.deps import RequestParams, request_params, storage, stored_upload
from image_toolkit.core.errors import InvalidParameterError
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import OutputPrefix, StoredFile
from image_toolkit.services.image_service import ImageService
from image_toolkit.utils.file_utils import parse_int

router = APIRouter(tags=["Resize"])

logger = configure_logging()
image_service = ImageService()


@router.post("/resizeImage", summary="Resize an image to an exact width and height")
def resize_image(
    upload: StoredFile = Depends(stored_upload),
    params: RequestParams = Depends(request_params),
) -> dict:
    try:
        width = parse_int(params.get("width"))
        height = parse_int(params.get("height"))
        if width is None or height is None or width <= 0 or height <= 0:
            raise InvalidParameterError("Please specify valid positive values for width and height.")

        output = storage.output_path(OutputPrefix.resized.value, upload.original_name)
        image_service.resize(upload.path, width, height, output)
    finally:
        storage.discard(upload.path)

    logger.info("Image resized to %sx%s: %s", width, height, output)
    return {"message": "Image resized successfully!", "path": str(output)}
