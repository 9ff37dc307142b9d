"""Utilities Package"""
from utils.validators import *
from utils.formatters import *

__all__ = [
    "normalize_domain",
    "validate_domain",
    "clean_domain",
    "sanitize_input",
    "format_price",
    "sort_candidates",
    "filter_candidates"
]
