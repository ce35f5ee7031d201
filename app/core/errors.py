from fastapi import status


class GatewayError(Exception):
    """
    Base class for errors raised below the HTTP layer.

    Each subclass carries the status code the exception handlers map it to.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(GatewayError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(GatewayError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class MissingServiceCredential(Forbidden):
    """
    The privileged path was called without any service credential.
    """
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Missing service credential"


class ServiceNotConfigured(GatewayError):
    """
    The server itself has no service key configured; not the caller's fault.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Service role key not configured"


class ValidationFailed(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation Error"


class NotFound(GatewayError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StoreError(GatewayError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database error"
