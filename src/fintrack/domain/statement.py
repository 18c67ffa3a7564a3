"""Bank statement parsing.

A statement is UTF-8 text with one transaction per non-blank line and three
columns: date (DD/MM/YYYY), description and signed amount. The column
delimiter is not known in advance and is detected from the first lines.
"""

import logging
import re
from typing import Optional

from fintrack.config import DEFAULT_MAX_STATEMENT_BYTES
from fintrack.domain.entities import StatementDraft
from fintrack.domain.errors import (
    EmptyStatementError,
    FieldCountError,
    StatementTooLargeError,
)
from fintrack.utils.amount_parser import parse_signed_amount
from fintrack.utils.date_parser import parse_statement_date
from fintrack.utils.sanitize import sanitize_text

logger = logging.getLogger(__name__)

# Preference order also breaks ties in delimiter detection
CANDIDATE_DELIMITERS = (";", ",", "\t")
QUOTE_CHARS = ('"', "'")
EXPECTED_FIELDS = 3
SAMPLE_LINES = 3

_DECIMAL_TAIL_RE = re.compile(r"^\d{1,2}$")


def split_line(line: str, delimiter: str) -> list[str]:
    """Split one statement line into fields.

    A field whose first non-blank character is a quote (" or ') runs until
    the matching closing quote, so delimiters inside it are kept. Two
    consecutive quote characters inside a quoted run stand for one literal
    quote. Every field is trimmed after unquoting.

    Args:
        line: Raw line without the line terminator
        delimiter: Single-character column delimiter

    Returns:
        List of field values (at least one)
    """
    fields: list[str] = []
    current: list[str] = []
    quote: Optional[str] = None
    at_field_start = True
    i = 0
    length = len(line)

    while i < length:
        char = line[i]

        if quote is not None:
            if char == quote:
                if i + 1 < length and line[i + 1] == quote:
                    current.append(quote)
                    i += 2
                    continue
                quote = None
            else:
                current.append(char)
            i += 1
            continue

        if char == delimiter:
            fields.append("".join(current).strip())
            current = []
            at_field_start = True
        elif at_field_start and char in QUOTE_CHARS:
            quote = char
            # Drop whitespace seen before the opening quote
            current = []
            at_field_start = False
        else:
            current.append(char)
            if not char.isspace():
                at_field_start = False
        i += 1

    fields.append("".join(current).strip())
    return fields


def detect_delimiter(lines: list[str]) -> str:
    """Pick the most plausible column delimiter for a statement.

    Each of the first three non-blank lines is split with every candidate.
    A split into exactly three fields scores 10; any other split scores its
    field count. The highest total wins and ties go to the earlier
    candidate in ``CANDIDATE_DELIMITERS``.
    """
    sample = [line for line in lines if line.strip()][:SAMPLE_LINES]

    best = CANDIDATE_DELIMITERS[0]
    best_score = -1
    for delimiter in CANDIDATE_DELIMITERS:
        score = 0
        for line in sample:
            count = len(split_line(line, delimiter))
            score += 10 if count == EXPECTED_FIELDS else count
        if score > best_score:
            best, best_score = delimiter, score
    return best


def _split_row(line: str, delimiter: str) -> list[str]:
    fields = split_line(line, delimiter)
    # "01/01/2024,Salário,1.200,00": comma-decimal amount left unquoted
    if (
        delimiter == ","
        and len(fields) == EXPECTED_FIELDS + 1
        and _DECIMAL_TAIL_RE.match(fields[-1])
    ):
        fields = fields[:2] + [f"{fields[2]},{fields[3]}"]
    return fields


def parse_statement(
    text: str,
    max_bytes: int = DEFAULT_MAX_STATEMENT_BYTES,
    reject_ambiguous: bool = False,
) -> list[StatementDraft]:
    """Parse statement text into transaction drafts.

    Parsing is all-or-nothing: the first malformed row raises and no drafts
    are returned.

    Args:
        text: Statement contents
        max_bytes: Maximum accepted UTF-8 size of ``text``
        reject_ambiguous: Reject amounts whose decimal separator is ambiguous
            instead of guessing

    Returns:
        Drafts in input order, one per non-blank line

    Raises:
        StatementTooLargeError: If the text is larger than ``max_bytes``
        EmptyStatementError: If there are no data lines
        ParseError: On the first row with a wrong field count, an invalid
            date or an invalid amount
    """
    size = len(text.encode("utf-8"))
    if size > max_bytes:
        raise StatementTooLargeError(size, max_bytes)

    text = text.lstrip("\ufeff")
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise EmptyStatementError()

    delimiter = detect_delimiter(lines)
    logger.debug("Detected delimiter %r for %d statement lines", delimiter, len(lines))

    drafts = []
    for line_number, line in enumerate(lines, start=1):
        fields = _split_row(line, delimiter)
        if len(fields) != EXPECTED_FIELDS:
            raise FieldCountError(line_number, len(fields))

        date_str, description, amount_str = fields
        txn_date = parse_statement_date(date_str, line_number)
        amount, kind = parse_signed_amount(
            amount_str, line_number, reject_ambiguous=reject_ambiguous
        )
        drafts.append(
            StatementDraft(
                date=txn_date,
                description=sanitize_text(description),
                amount=amount,
                kind=kind,
                line=line_number,
            )
        )

    return drafts
