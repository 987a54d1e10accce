"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class UnauthorizedError(DomainError):
    """Credentials are missing or invalid."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates a business validation rule.

    Args:
        message: Summary message for the whole payload.
        field_errors: Optional mapping of field name to error messages.
    """

    def __init__(self, message: str, field_errors: dict[str, list[str]] | None = None):
        self.field_errors = field_errors or {}
        super().__init__(message)


class ConfigError(DomainError):
    """Required configuration is missing or malformed (fatal at startup)."""


class InternalError(DomainError):
    """Unexpected failure in a store or crypto call."""
