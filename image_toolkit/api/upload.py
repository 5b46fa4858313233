from fastapi import APIRouter, Depends

from image_toolkit.api.deps import stored_upload
from image_toolkit.core.logging import configure_logging
from image_toolkit.models import StoredFile

router = APIRouter(tags=["Upload"])

logger = configure_logging()


@router.post("/uploadImage", summary="Store an image and return its descriptor")
async def upload_image(upload: StoredFile = Depends(stored_upload)) -> dict:
    logger.info("Image uploaded: %s", upload.original_name)
    return {
        "message": "Image uploaded successfully",
        "originalFilename": upload.original_name,
        "filename": upload.filename,
        "size": upload.size_bytes,
        "path": str(upload.path),
    }
