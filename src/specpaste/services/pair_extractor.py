"""
Raw key/value pair extraction.

Walks cleaned lines and lifts ``key -> value`` pairs using an ordered table
of separator patterns. Order matters: the first separator whose key and
value both pass the sanity checks wins, so "Range: 10 - 20 m" splits on the
colon rather than the dash.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional, Pattern, Sequence, Tuple

from ..constants import KNOWN_BRANDS, PRODUCT_NAME_WORDS
from ..logger import get_logger
from ..models import RawPair

logger = get_logger(__name__)


class Separator(str, Enum):
    """Kinds of key/value separator, in the order they are tried."""
    TAB = "tab"
    COLON = "colon"
    PIPE = "pipe"
    EQUALS = "equals"
    ARROW = "arrow"
    DASH = "dash"


SEPARATOR_PATTERNS: Tuple[Tuple[Separator, Pattern[str]], ...] = (
    (Separator.TAB, re.compile(r'^([^\t]{2,60})\t+(.+)$')),
    (Separator.COLON, re.compile(r'^([^:]{2,60}):\s+(.+)$')),
    (Separator.PIPE, re.compile(r'^([^|]{2,60})\s*\|\s*(.+)$')),
    (Separator.EQUALS, re.compile(r'^([^=]{2,60})\s*=\s*(.+)$')),
    (Separator.ARROW, re.compile(r'^([^→]{2,40})\s*→\s*(.{2,})$')),
    (Separator.DASH, re.compile(r'^([^-]{2,40})\s+[-–—]\s+(.{2,})$')),
)

# Navigation, commerce and social chrome that survives HTML cleaning
NOISE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(
        r'^(home|shop|cart|login|sign in|sign up|sign out|menu|search|filter by|sort by|'
        r'subscribe|newsletter|cookie|accept|privacy|terms|copyright|©|all rights)',
        re.IGNORECASE,
    ),
    re.compile(
        r'^(add to|buy now|add to cart|in stock|out of stock|free shipping|see more|learn more|'
        r'read more|show more|view all|close|back to|next|prev)',
        re.IGNORECASE,
    ),
    re.compile(
        r'^(share|tweet|pin it|email this|print|save for|wishlist|compare|reviews?\s*\(|'
        r'rating|stars?|^\d+ customer)',
        re.IGNORECASE,
    ),
    re.compile(r'^\d+(\.\d+)?$'),
    re.compile(r'^[A-Z0-9]{3,}$'),
    re.compile(r'^\[.*\]$'),
)

NAME_LABEL = re.compile(r'^(product\s*name|item\s*name|model\s*name|name|title)$', re.IGNORECASE)

# Two-line "Label\nValue" heuristic
_LABEL_FORBIDDEN = re.compile(r'[:|\t=→]')
_VALUE_UNITS = re.compile(
    r'\b(mm|cm|m|kg|g|lbs|oz|W|V|Wh|mAh|Hz|kHz|dB|lux|lm|cd|°|fps|bit|yes|no|true|false|approx)\b',
    re.IGNORECASE,
)
_VALUE_PREFIX = re.compile(r'^(f/|[A-Z]{2,4}[\s-])', re.IGNORECASE)

MIN_LINE_LENGTH = 3
MAX_LINE_LENGTH = 300
MAX_VALUE_LENGTH = 200


def is_noise(line: str) -> bool:
    """True for boilerplate lines that never carry specs."""
    return any(p.search(line) for p in NOISE_PATTERNS)


def split_pair(line: str) -> Optional[Tuple[Separator, str, str]]:
    """
    Split a line on the first separator that yields a usable key and value.

    Values that look like URLs, run past 200 characters or are empty send
    the line on to the next separator, as do keys shorter than 2 characters.

    Returns:
        (separator, key, value) or None
    """
    for separator, pattern in SEPARATOR_PATTERNS:
        match = pattern.match(line)
        if not match:
            continue
        key = match.group(1).strip()
        value = match.group(2).strip()
        if value.startswith('http') or len(value) > MAX_VALUE_LENGTH or not value:
            continue
        if len(key) < 2:
            continue
        return separator, key, value
    return None


def _looks_like_label(line: str) -> bool:
    return (
        3 <= len(line) <= 50
        and line[0].isascii() and line[0].isalpha()
        and not _LABEL_FORBIDDEN.search(line)
    )


def _looks_like_value(line: str) -> bool:
    if not line or len(line) > 150:
        return False
    return bool(
        line[0].isdigit()
        or _VALUE_UNITS.search(line)
        or _VALUE_PREFIX.search(line)
    )


def _looks_like_product_name(line: str) -> bool:
    if not 5 < len(line) < 120:
        return False
    lower = line.lower()
    if any(brand.lower() in lower for brand in KNOWN_BRANDS):
        return True
    return bool(PRODUCT_NAME_WORDS.search(line))


def extract_raw_pairs(lines: Sequence[str]) -> Tuple[List[RawPair], str]:
    """
    Extract key/value pairs and a product name from cleaned lines.

    Args:
        lines: Trimmed, non-empty lines of cleaned input

    Returns:
        (pairs in line order, detected product name or "")
    """
    pairs: List[RawPair] = []
    detected_name = ""

    i = 0
    while i < len(lines):
        line = lines[i]
        if not MIN_LINE_LENGTH <= len(line) <= MAX_LINE_LENGTH or is_noise(line):
            i += 1
            continue

        matched = False
        split = split_pair(line)
        if split is not None:
            _, key, value = split
            pairs.append(RawPair(key=key, value=value, source_line=line, line_index=i))
            matched = True
            if not detected_name and NAME_LABEL.match(key):
                detected_name = value

        if not matched and i + 1 < len(lines):
            next_line = lines[i + 1].strip()
            if _looks_like_label(line) and _looks_like_value(next_line):
                pairs.append(RawPair(
                    key=line,
                    value=next_line,
                    source_line=f"{line} → {next_line}",
                    line_index=i,
                ))
                matched = True
                i += 1

        if not matched and not detected_name and _looks_like_product_name(line):
            detected_name = line

        i += 1

    logger.debug(f"Extracted {len(pairs)} raw pairs from {len(lines)} lines")
    return pairs, detected_name
