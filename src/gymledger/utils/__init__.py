"""Utility functions for gymledger."""

from gymledger.utils.date_parser import parse_date
from gymledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
