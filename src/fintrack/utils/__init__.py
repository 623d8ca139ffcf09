"""Utility functions for fintrack."""

from fintrack.utils.amount_parser import format_amount, parse_amount

__all__ = ["format_amount", "parse_amount"]
