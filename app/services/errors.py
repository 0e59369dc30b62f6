class ServiceError(Exception):
    """Base for failures a caller can show to the user as-is."""
    status = 400


class ValidationError(ServiceError):
    """A required field is missing or malformed."""
    status = 400


class AuthenticationError(ServiceError):
    status = 401


class NotFoundError(ServiceError):
    status = 404


class DomainInvariantError(ServiceError):
    """The requested state change is not allowed from the current state."""
    status = 409


class UpstreamError(ServiceError):
    """A third-party service could not be reached."""
    status = 502


class StorageError(ServiceError):
    status = 503


class CorruptValueError(StorageError):
    """A stored value exists but cannot be decoded; overwriting it loses nothing."""


__all__ = [
    "ServiceError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "DomainInvariantError",
    "UpstreamError",
    "StorageError",
    "CorruptValueError",
]
