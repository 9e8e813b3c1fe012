from fastapi import HTTPException, status

INVALID_RGB_MESSAGE = "Invalid RGB values provided"
INTERNAL_MATCH_ERROR_MESSAGE = "Internal server error during foundation matching"


class ShadeMatchException(HTTPException):
    """Base exception for ShadeMatch request errors."""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class InvalidRGBError(ShadeMatchException):
    """
    Raised when the request does not carry a usable RGB triple
    (missing, wrong arity, non-numeric or non-finite channels).
    Raised before the catalog is scanned.
    """
    def __init__(self, reason: str = ""):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_RGB_MESSAGE
        )
        self.reason = reason


class ShadeNotFoundError(ShadeMatchException):
    """Strict 404 for a shade name that is not in the catalog."""
    def __init__(self, name: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shade {name} not found."
        )


class InvalidImageError(ShadeMatchException):
    """Raised when an uploaded file cannot be decoded as an image."""
    def __init__(self, filename: str | None = None):
        label = filename or "upload"
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Could not decode {label} as an image."
        )


class PixelOutOfBoundsError(ShadeMatchException):
    """Raised when the requested sample coordinate lies outside the image."""
    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Pixel ({x}, {y}) is outside the {width}x{height} image."
        )


class ImageTooLargeError(ShadeMatchException):
    """Raised when an upload exceeds MAX_UPLOAD_BYTES."""
    def __init__(self, size: int, limit: int):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Upload of {size} bytes exceeds the {limit} byte limit."
        )
