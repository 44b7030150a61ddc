"""
Utility modules for specpaste.
"""
from .numbers import parse_float_prefix, round_half_up
from .text_cleaning import clean_input_text, normalize_whitespace, split_lines, strip_html_tags
from .validators import is_valid_url, validate_url

__all__ = [
    "clean_input_text",
    "normalize_whitespace",
    "split_lines",
    "strip_html_tags",
    "parse_float_prefix",
    "round_half_up",
    "is_valid_url",
    "validate_url",
]
