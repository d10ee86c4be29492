# backend/flipbook/errors.py
"""Error taxonomy shared by the resource handlers.

Each error carries the HTTP status it is reported with; the handlers
registered in ``main`` turn them into ``{"error": message}`` bodies.
"""


class FlipbookError(Exception):
    """Base error, reported as an internal failure."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(FlipbookError):
    """Malformed or missing fields or ids."""

    status_code = 400


class NotFound(FlipbookError):
    """An id-addressed resource does not exist."""

    status_code = 404


class UnsupportedMediaType(FlipbookError):
    """Uploaded payload is not an image."""

    status_code = 400


class PayloadTooLarge(FlipbookError):
    """Uploaded payload exceeds the size ceiling."""

    status_code = 400


__all__ = ["FlipbookError", "InvalidInput", "NotFound", "UnsupportedMediaType", "PayloadTooLarge"]
