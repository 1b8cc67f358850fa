"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ConfigurationError(DomainError):
    """Account configuration is unusable for journal entry generation."""


class UnresolvedAccountError(DomainError):
    """A journal line needs an account role that is not configured."""

    def __init__(self, role: str, transaction_type: str):
        self.role = role
        self.transaction_type = transaction_type
        super().__init__(unresolved_account(role, transaction_type))


class UnbalancedEntriesError(ValidationError):
    """Journal entry debits and credits do not match."""


def missing_cash_account() -> str:
    """Return message for a configuration without a cash account."""
    return "Cash account ID is required for journal entry creation"


def missing_income_account() -> str:
    """Return message for a configuration without any income account."""
    return "At least one income account is required"


def unresolved_account(role: str, transaction_type: str) -> str:
    """Return message for an account role that could not be resolved."""
    return f"No account configured for role '{role}' (needed by {transaction_type} entries)"


def unbalanced_entries(total_debits, total_credits) -> str:
    """Return message when debits and credits differ."""
    return (
        f"Total debits must equal total credits "
        f"(debits {total_debits}, credits {total_credits})"
    )


def unknown_account_role(role: str) -> str:
    """Return message for an account role name that does not exist."""
    return f"Unknown account role '{role}'"
