"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class MissingDebtLink(ValidationError):
    """A debt-typed category was used without a debt reference."""

    rule = "missing_debt_link"

    def __init__(self, category_name: str):
        self.category_name = category_name
        super().__init__(
            f"Category '{category_name}' is a debt category: a debt must be linked"
        )


class MissingInvestmentLink(ValidationError):
    """An investment-typed category was used without an investment reference."""

    rule = "missing_investment_link"

    def __init__(self, category_name: str):
        self.category_name = category_name
        super().__init__(
            f"Category '{category_name}' is an investment category: an investment must be linked"
        )


class UnexpectedLink(ValidationError):
    """A debt/investment reference does not match the category type."""

    rule = "unexpected_link"


class StatementTooLargeError(ValidationError):
    """Statement text exceeds the configured size limit."""

    def __init__(self, size: int, max_bytes: int):
        self.size = size
        self.max_bytes = max_bytes
        super().__init__(
            f"Statement is too large ({size} bytes, limit is {max_bytes} bytes)"
        )


class ParseError(DomainError):
    """Malformed statement row. Always addressed by line number."""

    def __init__(self, line: Optional[int], reason: str):
        self.line = line
        self.reason = reason
        if line is None:
            super().__init__(reason)
        else:
            super().__init__(f"Line {line}: {reason}")


class FieldCountError(ParseError):
    """Row does not have exactly three fields."""

    def __init__(self, line: int, found: int):
        self.found = found
        super().__init__(line, f"expected 3 columns, found {found}")


class InvalidDate(ParseError):
    """Date token is not a valid DD/MM/YYYY calendar date."""

    def __init__(self, line: Optional[int], token: str):
        self.token = token
        super().__init__(line, f"invalid date '{token}', expected DD/MM/YYYY")


class InvalidAmount(ParseError):
    """Amount token does not normalize to a number."""

    def __init__(self, line: Optional[int], token: str, detail: Optional[str] = None):
        self.token = token
        reason = f"invalid amount '{token}'"
        if detail:
            reason = f"{reason} ({detail})"
        super().__init__(line, reason)


class EmptyStatementError(ParseError):
    """Statement contains no data lines."""

    def __init__(self):
        super().__init__(0, "statement is empty or has no data lines")


class ReconcileError(DomainError):
    """Linked debt or investment could not be found at apply/revert time."""


class LedgerInconsistentError(DomainError):
    """Balance reversal succeeded but the follow-up step failed.

    The linked debt/investment balance may no longer match the transaction
    history for this transaction.
    """

    def __init__(self, transaction_id: int, cause: Exception):
        self.transaction_id = transaction_id
        self.cause = cause
        super().__init__(
            f"Ledger may be inconsistent for transaction {transaction_id}: {cause}"
        )


class BatchImportError(DomainError):
    """A statement import stopped at a failing row.

    Rows before ``row_index`` were committed and stay committed.
    """

    def __init__(
        self,
        row_index: int,
        reason: str,
        imported: int,
        transaction_ids: Optional[list[int]] = None,
    ):
        self.row_index = row_index
        self.reason = reason
        self.imported = imported
        self.transaction_ids = list(transaction_ids or [])
        super().__init__(
            f"{imported} row{'s' if imported != 1 else ''} imported; "
            f"failed at row {row_index}: {reason}"
        )


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def subcategory_not_found(subcategory_id: int) -> str:
    """Return message for missing subcategory by ID."""
    return f"Subcategory {subcategory_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def debt_not_found(debt_id: int) -> str:
    """Return message for missing debt."""
    return f"Debt {debt_id} not found"


def investment_not_found(investment_id: int) -> str:
    """Return message for missing investment."""
    return f"Investment {investment_id} not found"
