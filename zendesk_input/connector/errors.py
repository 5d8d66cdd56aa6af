"""
errors.py
=========

Exceptions raised by the Zendesk input connector. Every error carries the
HTTP status code that best describes it so the API layer can pass it on.
"""


class ZendeskError(Exception):
    """Base exception for Zendesk connector errors"""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigError(ZendeskError):
    """Invalid task configuration or rejected credentials"""
    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message, 400)


class DataError(ZendeskError):
    """Response payload is not what the connector expects"""
    def __init__(self, message: str = "Invalid data"):
        super().__init__(message, 422)


class ZendeskRequestError(ZendeskError):
    """Request failed with a status that is not worth retrying"""
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message, status_code)


class TemporaryFailureError(ZendeskError):
    """Request failed with a status that may succeed on retry"""
    def __init__(self, message: str = "Temporary failure", status_code: int = 503):
        super().__init__(message, status_code)


class RateLimitError(ZendeskError):
    """Rate limit still exceeded after all retries"""
    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, 429)
