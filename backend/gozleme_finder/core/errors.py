"""
Error taxonomy for the proxy service.

Every error carries the HTTP status it maps to; the application renders
them all as ``{"error": "<message>"}``.
"""


class ProxyError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ProxyError):
    """A required secret key is not configured."""
    status_code = 400


class InputValidationError(ProxyError):
    """A required request field is missing."""
    status_code = 400


class NotFoundError(ProxyError):
    status_code = 404


class StorageError(ProxyError):
    """A local JSON file exists but cannot be read, parsed or written."""
    status_code = 500


class UpstreamError(ProxyError):
    """A third-party API returned a non-success status or could not be reached."""
    status_code = 502


def upstream_message(data, fallback: str) -> str:
    """Pull ``error.message`` out of a Google/Anthropic error body."""
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return fallback
