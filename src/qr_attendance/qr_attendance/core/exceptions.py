class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data (form fields, scanned payload) is invalid."""


class CapabilityError(DomainError):
    """Raised when the camera or geolocation is denied, unavailable or timed out."""


class AuthenticationError(DomainError):
    """Raised when the remote service rejects the login."""


class MissingTokenError(AuthenticationError):
    """Raised when a login response is successful but carries no usable token."""


class NetworkError(DomainError):
    """Raised on transport failures or unreadable responses from a remote call."""


class RemoteRejectedError(DomainError):
    """Raised when the attendance service refuses a submission."""


class SessionInvalidError(DomainError):
    """Raised when the stored credential is missing or a placeholder."""


class InvalidTransitionError(DomainError):
    """Raised when a workflow operation is invoked from a state that forbids it."""


class StorageError(DomainError):
    """Raised when durable session storage cannot be read or written."""
