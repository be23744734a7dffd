"""Utility functions for budgetit."""

from budgetit.utils.date_parser import parse_datetime, format_datetime, whole_hours
from budgetit.utils.money import parse_brl, format_brl, to_decimal

__all__ = [
    "parse_datetime",
    "format_datetime",
    "whole_hours",
    "parse_brl",
    "format_brl",
    "to_decimal",
]
