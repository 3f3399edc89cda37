"""Error taxonomy shared by the stores, the auth gate and the ingestion pipeline.

Every ``ServiceError`` is request-scoped: the API layer turns it into a
``{"error": <message>}`` JSON body with the error's ``status_code``.
"""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """A required field is missing or empty."""


class ConflictError(ServiceError):
    """The email is already registered."""


class NotFoundError(ServiceError):
    """No user is registered under the given email."""


class AuthError(ServiceError):
    """Ingestion key mismatch, or a missing, malformed, invalid or expired token."""

    status_code = 401


class InvalidCredentialsError(AuthError):
    """Wrong password on login. Reported as a bad request."""

    status_code = 400


class StorageReadError(Exception):
    """A backing JSON file exists but cannot be read. Never leaves the store."""


class NotificationError(Exception):
    """The SMS provider rejected or failed to deliver a message. Never leaves the dispatcher."""
