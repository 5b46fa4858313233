# image_toolkit/main.py
from __future__ import annotations

from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from image_toolkit.api import routers
from image_toolkit.core.config import get_settings
from image_toolkit.core.errors import ImageToolkitError
from image_toolkit.core.logging import configure_logging

# === Settings and logging ===
settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)


# === CORS ===
def _as_list(val: Iterable | str | None, fallback: list[str]) -> list[str]:
    if val is None:
        return fallback
    if isinstance(val, (list, tuple, set)):
        items = [str(x).strip() for x in val if str(x).strip()]
        return items or fallback
    items = [x.strip() for x in str(val).split(",") if x.strip()]
    return items or fallback


app.add_middleware(
    CORSMiddleware,
    allow_origins=_as_list(settings.allow_origins, fallback=["*"]),
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# === Errors ===
@app.exception_handler(ImageToolkitError)
async def image_toolkit_error_handler(request: Request, exc: ImageToolkitError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


# === Routers ===
for router in routers:
    app.include_router(router)


# === Basic endpoints ===
@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": f"Welcome to {settings.app_name}"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": "Image Toolkit API is running"}
