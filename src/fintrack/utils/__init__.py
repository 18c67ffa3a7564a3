"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date, parse_statement_date, parse_reference_month
from fintrack.utils.amount_parser import parse_amount, parse_signed_amount, normalize_amount
from fintrack.utils.sanitize import sanitize_text

__all__ = [
    "parse_date",
    "parse_statement_date",
    "parse_reference_month",
    "parse_amount",
    "parse_signed_amount",
    "normalize_amount",
    "sanitize_text",
]
