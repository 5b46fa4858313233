from fastapi import status


class ImageToolkitError(Exception):
    """Base error rendered as ``{"error": ..., "message": ...}`` by the API."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Error processing image"

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error

    def to_body(self) -> dict:
        return {"error": self.error, "message": self.message}


class MissingFileError(ImageToolkitError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "No file"


class InvalidUploadError(ImageToolkitError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Upload error"


class InvalidParameterError(ImageToolkitError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid parameter"


class InvalidStyleError(InvalidParameterError):
    error = "Invalid watermark style"


class GeometryError(ImageToolkitError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid crop region"


class NotFoundError(ImageToolkitError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class ProcessingError(ImageToolkitError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Error processing image"


class CompositionError(ProcessingError):
    error = "Error applying watermark"
