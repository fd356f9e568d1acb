"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class LedgerSyntaxError(ValidationError):
    """A ledger line that could not be parsed."""

    def __init__(self, message: str, line_number: int, line: str):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def account_not_found(acronym: str) -> str:
    """Return message for an undeclared account acronym."""
    return f"Account '{acronym}' not found"


def duplicate_account(acronym: str) -> str:
    """Return message for an account acronym declared twice."""
    return f"Account with acronym '{acronym}' already exists"


def malformed_line(line_number: int, line: str) -> str:
    """Return message for a line that matches no grammar rule."""
    return f'Parsing error on line {line_number}: "{line}"'


def missing_header(keyword: str) -> str:
    """Return message for a ledger without a header line."""
    return f"Ledger must start with a '{keyword} D.M.YYYY' header line"


def on_line(line_number: int, line: str, message: str) -> str:
    """Prefix a message with the offending line."""
    return f'Line {line_number}: {message} ("{line}")'


def registry_frozen(acronym: str) -> str:
    """Return message for an account added after the ledger was built."""
    return f"Cannot add account '{acronym}': the ledger's accounts are read-only"
