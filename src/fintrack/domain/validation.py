"""Category-type validation for transactions.

A category's type decides which ledger reference a transaction in it must
carry. These checks run before any balance is touched, for manual entries,
edits and every imported statement row alike.
"""

from typing import Optional

from fintrack.domain.entities import (
    Category,
    CategoryType,
    DebtLink,
    InvestmentLink,
    StandardLink,
    StatementDraft,
    TransactionLink,
)
from fintrack.domain.errors import MissingDebtLink, MissingInvestmentLink, UnexpectedLink


def validate_link(
    draft: Optional[StatementDraft],
    category: Optional[Category],
    debt_id: Optional[int] = None,
    investment_id: Optional[int] = None,
) -> None:
    """Check that the references required by the category type are present.

    Args:
        draft: Transaction being validated (only used for context; may be None
            for manual entries)
        category: Resolved category, or None for uncategorized transactions
        debt_id: Chosen debt reference
        investment_id: Chosen investment reference

    Raises:
        MissingDebtLink: Debt category without a debt reference
        MissingInvestmentLink: Investment category without an investment reference
    """
    if category is None:
        return
    if category.category_type == CategoryType.DEBT and debt_id is None:
        raise MissingDebtLink(category.name)
    if category.category_type == CategoryType.INVESTMENT and investment_id is None:
        raise MissingInvestmentLink(category.name)


def resolve_link(
    category: Optional[Category],
    debt_id: Optional[int] = None,
    investment_id: Optional[int] = None,
    draft: Optional[StatementDraft] = None,
) -> TransactionLink:
    """Validate references against the category and build the transaction link.

    Raises:
        MissingDebtLink: Debt category without a debt reference
        MissingInvestmentLink: Investment category without an investment reference
        UnexpectedLink: A reference the category type does not allow
    """
    validate_link(draft, category, debt_id=debt_id, investment_id=investment_id)

    category_type = category.category_type if category is not None else CategoryType.STANDARD
    label = f"Category '{category.name}'" if category is not None else "An uncategorized transaction"

    if category_type == CategoryType.DEBT:
        if investment_id is not None:
            raise UnexpectedLink(f"{label} is a debt category and cannot link an investment")
        return DebtLink(debt_id)

    if category_type == CategoryType.INVESTMENT:
        if debt_id is not None:
            raise UnexpectedLink(f"{label} is an investment category and cannot link a debt")
        return InvestmentLink(investment_id)

    if debt_id is not None or investment_id is not None:
        raise UnexpectedLink(f"{label} cannot link a debt or an investment")
    return StandardLink()
