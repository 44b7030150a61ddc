"""
Multi-product batch parsing.

Splits pasted text describing several products into segments and parses
each segment on its own.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from ..constants import KNOWN_BRANDS
from ..logger import get_logger
from ..models import BatchItem, CrowdAlias, Segment
from .parser import parse

logger = get_logger(__name__)

_HORIZONTAL_RULE = re.compile(r'^[-=_]{3,}\s*$')
_HEADING = re.compile(r'^#{1,3}\s+(.+)')
_LABELED_NAME = re.compile(r'^(?:product|item|model)\s*(?:name|#|number)?\s*[:→=]\s*(.+)', re.IGNORECASE)
_LABEL_VALUE = re.compile(r'[:→=]\s*(.+)')
_BRAND_LINE = re.compile(
    r'\b(?:' + '|'.join(re.escape(brand) for brand in KNOWN_BRANDS) + r')\b',
    re.IGNORECASE,
)

MIN_SEGMENT_CHARS = 20
SINGLE_PRODUCT_NAME = "Single Product"


def _boundary_name(lines: List[str], i: int) -> tuple[bool, Optional[str]]:
    """Whether line ``i`` starts a new product, and the name it carries."""
    line = lines[i].strip()
    if _HORIZONTAL_RULE.match(line):
        return True, None
    if _HEADING.match(line):
        return True, re.sub(r'^#{1,3}\s+', '', line).strip()
    if _LABELED_NAME.match(line):
        match = _LABEL_VALUE.search(line)
        return True, match.group(1).strip() if match else None
    if i > 0 and not lines[i - 1].strip() and _BRAND_LINE.search(line) and len(line) < 120:
        return True, line
    return False, None


def detect_boundaries(text: Any) -> List[Segment]:
    """
    Split multi-product text into segments.

    A boundary is a horizontal rule, a markdown heading, a "Product Name:"
    style line, or a known-brand line right after a blank line. Segments
    shorter than 21 characters are folded into the next one.

    Returns:
        Two or more segments, or [] when the text looks like a single product
    """
    if not text or not isinstance(text, str):
        return []

    lines = text.split('\n')
    segments: List[Segment] = []
    current_start = 0
    current_name: Optional[str] = None

    for i, raw_line in enumerate(lines):
        if not raw_line.strip():
            continue
        is_boundary, detected_name = _boundary_name(lines, i)
        if not is_boundary:
            continue

        if i > current_start + 2:
            segment_text = '\n'.join(lines[current_start:i]).strip()
            if len(segment_text) > MIN_SEGMENT_CHARS:
                segments.append(Segment(
                    start_line=current_start,
                    end_line=i - 1,
                    name=current_name or f"Product {len(segments) + 1}",
                    text=segment_text,
                ))
            current_start = i
            current_name = detected_name
        elif not current_name:
            current_name = detected_name

    last_text = '\n'.join(lines[current_start:]).strip()
    if len(last_text) > MIN_SEGMENT_CHARS:
        segments.append(Segment(
            start_line=current_start,
            end_line=len(lines) - 1,
            name=current_name or f"Product {len(segments) + 1}",
            text=last_text,
        ))

    if len(segments) < 2:
        return []
    logger.debug(f"Detected {len(segments)} product segments")
    return segments


def parse_batch(
    text: Any,
    schema: Optional[Mapping[str, Any]],
    crowd_aliases: Optional[Iterable[CrowdAlias]] = None,
) -> List[BatchItem]:
    """
    Parse text that may describe several products.

    Returns:
        One item per segment, or a single "Single Product" item covering the
        whole text when no batch boundaries are found
    """
    aliases = list(crowd_aliases) if crowd_aliases else None
    segments = detect_boundaries(text)
    if not segments:
        whole = text if isinstance(text, str) else ""
        segment = Segment(
            start_line=0,
            end_line=max(0, len(whole.split('\n')) - 1),
            name=SINGLE_PRODUCT_NAME,
            text=whole,
        )
        return [BatchItem(segment=segment, result=parse(text, schema, aliases))]
    return [BatchItem(segment=s, result=parse(s.text, schema, aliases)) for s in segments]
