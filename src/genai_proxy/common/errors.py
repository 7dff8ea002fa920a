"""Errors raised at the HTTP boundary, each carrying its response status."""
from __future__ import annotations

class ProxyError(Exception):
    """Base error mapped to a JSON `{"message": ...}` response."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class ValidationError(ProxyError):
    """A required field is missing or malformed."""
    status_code = 400

class PayloadTooLargeError(ProxyError):
    """Uploaded file exceeds the configured size limit."""
    status_code = 413

    def __init__(self, message: str = "File too large") -> None:
        super().__init__(message)

class OriginNotAllowedError(ProxyError):
    """Request Origin is not in the allow-list."""
    status_code = 403

    def __init__(self, message: str = "Not allowed by CORS") -> None:
        super().__init__(message)

class UpstreamError(ProxyError):
    """Generation call failed, after any retries."""
    status_code = 500
