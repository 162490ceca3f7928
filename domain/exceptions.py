"""Domain exceptions for business rule violations."""


class DomainError(Exception):
    """Base exception for domain layer."""


class ValidationError(DomainError):
    """Raised when input validation fails."""


class ContentUnavailableError(DomainError):
    """Raised when blob content or metadata cannot be retrieved (not found, timeout, I/O)."""


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (network, storage backend, etc.)."""
