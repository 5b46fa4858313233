
from . import crop, download, filters, resize, upload, watermark

routers = [
    upload.router,
    resize.router,
    crop.router,
    filters.router,
    watermark.router,
    download.router,
]

__all__ = [
    "routers",
]
