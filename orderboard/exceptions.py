"""Errors raised outside the pure normalization core"""


class ConfigurationError(RuntimeError):
    """Raised when the order API is not configured"""


class OrderFetchError(RuntimeError):
    """Raised when orders cannot be retrieved from the order API.

    The message is meant to be shown to the user as is.
    """

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class OrderLoadError(RuntimeError):
    """Raised when a saved order file cannot be read"""
