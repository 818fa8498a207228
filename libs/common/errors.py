"""Exceptions shared by the services.

Expected domain outcomes of a time submission are returned as result values;
these exceptions cover the cases that abort a request.
"""


class ServiceError(Exception):
    """Base class for errors mapped to HTTP responses by the exception handlers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AccessDeniedError(ServiceError):
    """The caller's role does not resolve to a tier allowed to perform the action."""

    status_code = 403
    default_message = "Access control not found or unauthorized"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Resource not found"


class StoreError(ServiceError):
    """The relational store could not be read or written."""

    status_code = 502
    default_message = "Database request failed"


class IdentityLookupError(ServiceError):
    """The identity provider failed to return a user."""

    status_code = 502
    default_message = "Failed to fetch user data"
