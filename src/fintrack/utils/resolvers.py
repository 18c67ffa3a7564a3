"""Utilities for resolving names or IDs given on the command line to entity IDs."""

from typing import Callable, Iterable, Optional, TypeVar

from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.debt import DebtService
from fintrack.domain.errors import NotFoundError, ValidationError
from fintrack.domain.investment import InvestmentService

T = TypeVar("T")


def _resolve(
    value: str | int,
    label: str,
    get_by_id: Callable[[int], Optional[T]],
    candidates: Callable[[], Iterable[T]],
    name_of: Callable[[T], str],
    id_of: Callable[[T], int],
) -> int:
    """Resolve a name or ID to an ID.

    Integers (or strings holding an integer) are treated as IDs; anything
    else is matched against entity names.

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the name matches more than one entity
    """
    if isinstance(value, int):
        if get_by_id(value) is None:
            raise NotFoundError(f"{label} ID {value} not found")
        return value

    try:
        entity_id = int(value)
    except (ValueError, TypeError):
        entity_id = None

    if entity_id is not None:
        if get_by_id(entity_id) is None:
            raise NotFoundError(f"{label} ID {entity_id} not found")
        return entity_id

    matches = [id_of(item) for item in candidates() if name_of(item) == value]
    if not matches:
        raise NotFoundError(f"{label} '{value}' not found")
    if len(matches) > 1:
        raise ValidationError(f"{label} name '{value}' is ambiguous, use its ID")
    return matches[0]


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID."""
    return _resolve(
        account,
        "Account",
        account_service.get_account,
        account_service.list_accounts,
        lambda acc: acc.name,
        lambda acc: acc.id,
    )


def resolve_category(category_service: CategoryService, category: str | int) -> int:
    """Resolve category name or ID to category ID."""
    return _resolve(
        category,
        "Category",
        category_service.get_category,
        category_service.list_categories,
        lambda cat: cat.name,
        lambda cat: cat.id,
    )


def resolve_subcategory(
    category_service: CategoryService, category_id: int, subcategory: str | int
) -> int:
    """Resolve subcategory name or ID within a category to subcategory ID."""
    subcategories = category_service.list_subcategories(category_id)
    by_id = {sub.id: sub for sub in subcategories}
    return _resolve(
        subcategory,
        "Subcategory",
        by_id.get,
        lambda: subcategories,
        lambda sub: sub.name,
        lambda sub: sub.id,
    )


def resolve_debt(debt_service: DebtService, debt: str | int) -> int:
    """Resolve debt description or ID to debt ID."""
    return _resolve(
        debt,
        "Debt",
        debt_service.get_debt,
        debt_service.list_debts,
        lambda item: item.description,
        lambda item: item.id,
    )


def resolve_investment(investment_service: InvestmentService, investment: str | int) -> int:
    """Resolve investment name or ID to investment ID."""
    return _resolve(
        investment,
        "Investment",
        investment_service.get_investment,
        investment_service.list_investments,
        lambda item: item.name,
        lambda item: item.id,
    )
