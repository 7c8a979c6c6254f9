"""Utility functions for walletbook."""

from walletbook.utils.date_parser import parse_date
from walletbook.utils.amount_parser import parse_amount
from walletbook.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
