from fastapi import APIRouter
from fastapi.responses import FileResponse

from image_toolkit.api.deps import storage
from image_toolkit.core.errors import NotFoundError
from image_toolkit.core.logging import configure_logging

router = APIRouter(tags=["Download"])

logger = configure_logging()


@router.get("/downloadImage/{name}", summary="Download a stored or processed image by name")
def download_image(name: str) -> FileResponse:
    path = storage.find_download(name)
    if path is None:
        logger.info("Image not found: %s", name)
        raise NotFoundError("Image not found", error="Image not found")
    return FileResponse(path, filename=name)
