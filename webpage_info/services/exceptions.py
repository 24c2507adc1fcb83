"""Custom exception hierarchy for fetching and parsing webpages"""

from typing import Any, Dict


class ServiceError(Exception):
    """Base exception for all webpage-info errors"""
    status_code = 500

    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response"""
        return {
            "code": self.error_code,
            "message": self.message
        }


class URLValidationError(ServiceError):
    """Raised when a URL fails to parse, has no host or uses an unsupported scheme"""
    status_code = 400

    def __init__(self, reason: str = "invalid or unsafe URL provided"):
        super().__init__(f"invalid URL: {reason}", "INVALID_URL")
        self.reason = reason


class URLParseError(ServiceError):
    """Raised when a URL handed over by a nested call cannot be parsed"""
    status_code = 400

    def __init__(self, reason: str):
        super().__init__(f"URL parse error: {reason}", "URL_PARSE_ERROR")
        self.reason = reason


class HTTPFetchError(ServiceError):
    """Raised when the HTTP transport fails (connect, TLS, timeout, read)"""
    status_code = 502

    def __init__(self, reason: str):
        super().__init__(f"HTTP request failed: {reason}", "HTTP_ERROR")
        self.reason = reason


class FileReadError(ServiceError):
    """Raised when an HTML file cannot be read"""
    status_code = 500

    def __init__(self, reason: str):
        super().__init__(f"failed to read file: {reason}", "IO_ERROR")
        self.reason = reason


class ParseError(ServiceError):
    """Raised when HTML parsing fails"""
    status_code = 500

    def __init__(self, message: str = "failed to parse HTML"):
        super().__init__(message, "PARSE_ERROR")


class UnsupportedContentTypeError(ServiceError):
    """Raised when a fetched response is neither HTML nor XML"""
    status_code = 415

    def __init__(self, content_type: str):
        message = f"invalid content type: expected HTML, got {content_type}"
        super().__init__(message, "INVALID_CONTENT_TYPE")
        self.content_type = content_type


class SSRFBlockedError(ServiceError):
    """Raised when a request targets an internal host or a private address"""
    status_code = 403

    def __init__(self, reason: str):
        super().__init__(f"SSRF protection: {reason}", "SSRF_BLOCKED")
        self.reason = reason
