"""Statement import domain service."""

import codecs
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Union

from fintrack.config import DEFAULT_MAX_STATEMENT_BYTES
from fintrack.database.base import Database
from fintrack.domain.entities import ImportSummary, RowCategorization, StatementDraft
from fintrack.domain.errors import (
    BatchImportError,
    DomainError,
    NotFoundError,
    StatementTooLargeError,
    account_not_found,
)
from fintrack.domain.statement import parse_statement
from fintrack.domain.transaction import TransactionService

logger = logging.getLogger(__name__)

Categorizer = Callable[[int, StatementDraft], RowCategorization]


class StatementImportService:
    """Service for importing bank statements into an account.

    Rows are processed strictly in order: each row is validated, written and
    reconciled before the next one starts, because later rows may touch the
    same debt or investment balance.
    """

    def __init__(self, db: Database, max_bytes: int = DEFAULT_MAX_STATEMENT_BYTES):
        """Initialize statement import service.

        Args:
            db: Database instance
            max_bytes: Largest statement accepted
        """
        self.db = db
        self.max_bytes = max_bytes
        self.transaction_service = TransactionService(db)

    def import_batch(
        self,
        text: str,
        account_id: int,
        categorization: Union[RowCategorization, Categorizer, None] = None,
        reference_month: Optional[date] = None,
        reject_ambiguous: bool = False,
    ) -> ImportSummary:
        """Import every row of a statement into an account.

        Args:
            text: Statement contents
            account_id: Target account ID
            categorization: Categorization applied to every row, or a callable
                ``(row_index, draft) -> RowCategorization`` for per-row choices
                (row_index is 1-based). None imports rows uncategorized.
            reference_month: Reference month for all rows; defaults to each
                row's own month
            reject_ambiguous: Reject amounts with an ambiguous decimal separator

        Returns:
            ImportSummary with the number of imported rows

        Raises:
            ParseError: If the statement is malformed (nothing is written)
            StatementTooLargeError: If the statement exceeds the size limit
            NotFoundError: If the account doesn't exist (nothing is written)
            BatchImportError: If a row fails validation or cannot be stored;
                rows before it stay imported
        """
        drafts = parse_statement(text, max_bytes=self.max_bytes, reject_ambiguous=reject_ambiguous)

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        categorize = self._categorizer(categorization)
        transaction_ids: list[int] = []

        for row_index, draft in enumerate(drafts, start=1):
            try:
                row = categorize(row_index, draft)
                transaction_id = self.transaction_service.create_transaction(
                    account_id=account_id,
                    description=draft.description,
                    amount=draft.amount,
                    kind=draft.kind,
                    date=draft.date,
                    reference_month=reference_month,
                    category_id=row.category_id,
                    subcategory_id=row.subcategory_id,
                    debt_id=row.debt_id,
                    investment_id=row.investment_id,
                )
            except Exception as e:
                logger.warning(
                    "Statement import stopped at row %d after %d rows: %s",
                    row_index,
                    len(transaction_ids),
                    e,
                    exc_info=not isinstance(e, DomainError),
                )
                raise BatchImportError(
                    row_index=row_index,
                    reason=str(e),
                    imported=len(transaction_ids),
                    transaction_ids=transaction_ids,
                ) from e
            transaction_ids.append(transaction_id)

        logger.info("Imported %d transactions into account %s", len(transaction_ids), account_id)
        return ImportSummary(
            count=len(transaction_ids), account_id=account_id, transaction_ids=transaction_ids
        )

    def import_file(
        self,
        statement_path: Union[str, Path],
        account_id: int,
        categorization: Union[RowCategorization, Categorizer, None] = None,
        reference_month: Optional[date] = None,
        reject_ambiguous: bool = False,
    ) -> ImportSummary:
        """Import a statement file (UTF-8, optional BOM).

        Raises:
            FileNotFoundError: If the file doesn't exist
            StatementTooLargeError: If the file exceeds the size limit (checked
                before the file is read)
            ParseError, NotFoundError, BatchImportError: As for import_batch
        """
        path = Path(statement_path)
        if not path.exists():
            raise FileNotFoundError(f"Statement file not found: {statement_path}")

        # A leading BOM is not counted against the limit
        size = path.stat().st_size
        if size > self.max_bytes + len(codecs.BOM_UTF8):
            raise StatementTooLargeError(size, self.max_bytes)

        text = path.read_text(encoding="utf-8-sig")
        return self.import_batch(
            text,
            account_id,
            categorization=categorization,
            reference_month=reference_month,
            reject_ambiguous=reject_ambiguous,
        )

    @staticmethod
    def _categorizer(
        categorization: Union[RowCategorization, Categorizer, None],
    ) -> Categorizer:
        if categorization is None:
            categorization = RowCategorization()
        if isinstance(categorization, RowCategorization):
            fixed = categorization
            return lambda row_index, draft: fixed
        return categorization
