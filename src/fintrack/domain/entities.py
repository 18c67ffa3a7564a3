"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. The SQLAlchemy models are converted to these by
``fintrack.database.mappers``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class TransactionKind(str, Enum):
    """Direction of a transaction."""

    INCOME = "Income"
    EXPENSE = "Expense"


class CategoryType(str, Enum):
    """Business meaning of a category.

    The type dictates which reference a transaction in this category carries:
    Debt categories require a debt, Investment categories an investment.
    """

    STANDARD = "Standard"
    DEBT = "Debt"
    INVESTMENT = "Investment"


ACCOUNT_TYPES = (
    "Checking Account",
    "Meal Voucher",
    "Cash",
    "Credit Card",
    "Brokerage",
    "Other",
)


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    account_type: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    name: str
    category_type: CategoryType
    created_at: datetime


@dataclass(frozen=True)
class Subcategory:
    """Subcategory domain entity, always owned by one category."""

    id: int
    category_id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Debt:
    """Debt domain entity.

    ``current_balance`` and ``remaining_installments`` are derived values kept
    up to date by the ledger reconciler.
    """

    id: int
    description: str
    original_amount: Decimal
    current_balance: Decimal
    total_installments: Optional[int]
    remaining_installments: Optional[int]
    monthly_interest_rate: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class Investment:
    """Investment position domain entity."""

    id: int
    name: str
    initial_amount: Decimal
    current_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class StandardLink:
    """Transaction in a Standard category (or uncategorized): no ledger link."""


@dataclass(frozen=True)
class DebtLink:
    """Transaction paying down a debt."""

    debt_id: int


@dataclass(frozen=True)
class InvestmentLink:
    """Transaction contributing to or withdrawing from an investment."""

    investment_id: int


TransactionLink = Union[StandardLink, DebtLink, InvestmentLink]


def link_from_ids(debt_id: Optional[int], investment_id: Optional[int]) -> TransactionLink:
    """Build a transaction link from nullable reference columns.

    Raises:
        ValueError: If both references are set
    """
    if debt_id is not None and investment_id is not None:
        raise ValueError("A transaction cannot reference both a debt and an investment")
    if debt_id is not None:
        return DebtLink(debt_id)
    if investment_id is not None:
        return InvestmentLink(investment_id)
    return StandardLink()


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    account_id: int
    description: str
    amount: Decimal
    kind: TransactionKind
    date: date
    reference_month: date
    category_id: Optional[int]
    subcategory_id: Optional[int]
    link: TransactionLink
    created_at: datetime

    @property
    def debt_id(self) -> Optional[int]:
        return self.link.debt_id if isinstance(self.link, DebtLink) else None

    @property
    def investment_id(self) -> Optional[int]:
        return self.link.investment_id if isinstance(self.link, InvestmentLink) else None


@dataclass(frozen=True)
class StatementDraft:
    """A parsed statement row that has not been persisted yet."""

    date: date
    description: str
    amount: Decimal
    kind: TransactionKind
    line: int = 0


@dataclass(frozen=True)
class BalanceDelta:
    """What a single apply/revert call changed on a debt or investment.

    ``target`` is ``"debt"``, ``"investment"`` or ``None`` when the
    transaction had no ledger link and nothing changed.
    """

    target: Optional[str] = None
    target_id: Optional[int] = None
    balance_before: Optional[Decimal] = None
    balance_after: Optional[Decimal] = None
    installments_before: Optional[int] = None
    installments_after: Optional[int] = None
    initial_amount_before: Optional[Decimal] = None
    initial_amount_after: Optional[Decimal] = None

    @property
    def is_noop(self) -> bool:
        return self.target is None


@dataclass(frozen=True)
class RowCategorization:
    """Category and ledger references chosen for an imported statement row."""

    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    debt_id: Optional[int] = None
    investment_id: Optional[int] = None


@dataclass(frozen=True)
class ImportSummary:
    """Result of a successful statement import."""

    count: int
    account_id: int
    transaction_ids: list[int] = field(default_factory=list)
