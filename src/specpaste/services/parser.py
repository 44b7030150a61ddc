"""
Product text parser.

Orchestrates a single parse: clean, split, extract pairs, detect item-level
details, then match and resolve schema fields.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..logger import get_logger
from ..matching.alias_map import build_alias_map
from ..models import CrowdAlias, ParseResult
from ..utils.text_cleaning import clean_input_text, split_lines
from .detectors import detect_brand, detect_category, extract_price, extract_serial_model
from .field_resolver import match_fields, resolve_fields
from .pair_extractor import extract_raw_pairs

logger = get_logger(__name__)


def parse(
    text: Any,
    schema: Optional[Mapping[str, Any]],
    crowd_aliases: Optional[Iterable[CrowdAlias]] = None,
) -> ParseResult:
    """
    Parse pasted product text into a structured record.

    Never raises for bad input: missing, empty or non-string text gives an
    empty ParseResult.

    Args:
        text: Raw pasted text (plain or HTML)
        schema: Category name -> list of fields
        crowd_aliases: Optional snapshot of crowd-learned aliases

    Returns:
        Frozen ParseResult
    """
    if not text or not isinstance(text, str):
        return ParseResult.empty()

    cleaned = clean_input_text(text)
    lines = split_lines(cleaned)

    pairs, name = extract_raw_pairs(lines)

    # Price scanning sees the raw input so currency symbols in markup survive
    price, price_note = extract_price(pairs, text)

    text_lower = cleaned.lower()
    brand = detect_brand(name, text_lower)
    category = detect_category(text_lower)
    serial, model = extract_serial_model(pairs)

    alias_map = build_alias_map(schema, list(crowd_aliases) if crowd_aliases else None)
    candidates, matched = match_fields(pairs, alias_map, category)
    fields = resolve_fields(candidates)

    unmatched = tuple(pair for idx, pair in enumerate(pairs) if idx not in matched)

    logger.debug(
        f"Parsed {len(lines)} lines: {len(fields)} fields, "
        f"{len(unmatched)} unmatched, category={category or '-'}"
    )

    return ParseResult(
        name=name,
        brand=brand,
        category=category,
        purchase_price=price,
        price_note=price_note,
        serial_number=serial,
        model_number=model,
        fields=MappingProxyType(fields),
        unmatched_pairs=unmatched,
        raw_extracted=tuple(pairs),
        source_lines=tuple(lines),
    )
