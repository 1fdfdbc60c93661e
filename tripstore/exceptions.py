"""
Exception hierarchy.

``ApiError`` subclasses carry an HTTP status and a user-facing message and are
turned into ``{"success": false, "message": ...}`` responses by the handlers
registered in the application factory. ``ServiceError`` subclasses are raised
by the document store, blob store and notification clients.
"""


class ApiError(Exception):
    """Base error returned to the API caller."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Missing or invalid request field."""
    status_code = 400


class AuthenticationError(ApiError):
    """Wrong admin credentials."""
    status_code = 401


class UpstreamError(ApiError):
    """Document store, blob store or email provider failure."""
    status_code = 500


class ServiceError(Exception):
    """Base exception for external service clients."""
    pass


class StoreError(ServiceError):
    """Document store call failed."""
    pass


class StorageError(ServiceError):
    """Blob upload failed."""
    pass


class MailError(ServiceError):
    """Email could not be sent."""
    pass


class NotifyError(ServiceError):
    """Chat bot message could not be posted."""
    pass


class ConfigError(Exception):
    """Required configuration is missing or invalid."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__('Missing or invalid configuration: ' + ', '.join(self.missing))
