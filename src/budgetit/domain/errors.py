"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class AuthorizationError(DomainError):
    """Caller's role lacks the capability required by the operation."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a task batch spanning several projects."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def not_found(label: str, uuid: str) -> str:
    """Return message for a missing record."""
    return f"{label} '{uuid}' not found"


def missing_capability(flag: str) -> str:
    """Return message when the caller's role lacks a capability flag."""
    return f"User is not authorized to manage {flag} data"


def single_owner_required(label: str, values: set) -> str:
    """Return message when a task batch references several projects or budgets."""
    found = ", ".join(sorted(str(value) for value in values)) or "none"
    return f"Tasks must belong to a single {label} (found: {found})"


def delete_blocked(label: str, uuid: str, counts: dict[str, int]) -> str:
    """Return message when a record still has dependent rows."""
    parts = [
        f"{count} {name}{'s' if count != 1 else ''}"
        for name, count in counts.items()
        if count > 0
    ]
    return (
        f"Cannot delete {label} '{uuid}': it has {', '.join(parts)}. "
        "Please remove them first."
    )
