"""
Numeric helpers shared by the scorer, resolver and unit normalizer.
"""
import math
import re
from typing import Optional

_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    Python's ``round`` rounds halves to even, which would score 72.5 as 72.

    Examples:
        >>> round_half_up(72.5)
        73
        >>> round_half_up(-0.5)
        0
    """
    return int(math.floor(value + 0.5))


def parse_float_prefix(text: Optional[str]) -> Optional[float]:
    """
    Parse the leading number of a string, ignoring whatever follows.

    Examples:
        >>> parse_float_prefix("1.8 kg")
        1.8
        >>> parse_float_prefix("approx. 2") is None
        True
    """
    if not text:
        return None
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    return float(match.group(1))
