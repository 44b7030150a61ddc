"""
Contextual detectors that run alongside field matching.

Each detector looks at the raw pairs or the whole text for one piece of
item-level information: price, brand, category, serial and model numbers.
"""
from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from ..constants import CATEGORY_KEYWORDS, CURRENCY_NAMES, DEFAULT_CURRENCY, KNOWN_BRANDS
from ..models import RawPair

PRICE_LABEL = re.compile(
    r'^(sale\s*price|price|msrp|list\s*price|rrp|retail\s*price|srp|map\s*price|street\s*price)$',
    re.IGNORECASE,
)

# Earlier entries win when a text carries several price labels
PRICE_LABEL_RANKING: Tuple[str, ...] = (
    'sale price',
    'street price',
    'map price',
    'price',
    'msrp',
    'list price',
    'rrp',
    'retail price',
    'srp',
)

_PRICE_VALUE = re.compile(r'[$€£¥]?\s*([\d,]+\.?\d*)')
_PRICE_RANGE = re.compile(r'[$€£¥]\s*([\d,]+\.?\d*)\s*[-–—]\s*[$€£¥]?\s*([\d,]+\.?\d*)')
_PRICE_AMOUNT = re.compile(r'[$€£¥]\s*([\d,]+\.?\d*)')
_CURRENCY_SYMBOL = re.compile(r'[$€£¥]')

SERIAL_LABEL = re.compile(r'^(serial\s*(number|no|#)?|s/n|sn)$', re.IGNORECASE)
MODEL_LABEL = re.compile(
    r'^(model\s*(number|no|#)?|part\s*(number|no|#)?|sku|upc|ean|asin|'
    r'mfr\s*(part|#|number)?|manufacturer\s*part|item\s*(number|no|#)?)$',
    re.IGNORECASE,
)


def _price_rank(label: str) -> int:
    for rank, candidate in enumerate(PRICE_LABEL_RANKING):
        if candidate in label:
            return rank
    return len(PRICE_LABEL_RANKING)


def _price_from_pairs(pairs: Sequence[RawPair]) -> Optional[str]:
    best_rank = None
    price = None
    for pair in pairs:
        label = pair.key.strip().lower()
        if not PRICE_LABEL.match(label):
            continue
        rank = _price_rank(label)
        if best_rank is not None and rank >= best_rank:
            continue
        match = _PRICE_VALUE.search(pair.value)
        if match:
            price = match.group(1).replace(',', '')
            best_rank = rank
    return price


def extract_price(pairs: Sequence[RawPair], full_text: str) -> Tuple[str, str]:
    """
    Find the purchase price.

    A labeled price pair wins (best-ranked label first). Otherwise the raw
    text is scanned for a currency range, then a single currency amount.

    Args:
        pairs: Raw pairs from the cleaned text
        full_text: The original, uncleaned input

    Returns:
        (price digits without separators, note) with "" for missing parts
    """
    price = _price_from_pairs(pairs)
    if price:
        return price, ""

    full_text = full_text or ""
    range_match = _PRICE_RANGE.search(full_text)
    if range_match:
        return range_match.group(1).replace(',', ''), f"Range: {range_match.group(0)}"

    single = _PRICE_AMOUNT.search(full_text)
    if single:
        note = ""
        symbol = _CURRENCY_SYMBOL.search(full_text).group(0)
        if symbol != DEFAULT_CURRENCY:
            note = f"Currency: {CURRENCY_NAMES.get(symbol, symbol)}"
        return single.group(1).replace(',', ''), note

    return "", ""


def detect_brand(name: str, text_lower: str) -> str:
    """
    Find a known brand, checking the product name before the whole text.

    Returns:
        Brand in its canonical casing, or ""
    """
    if name:
        name_lower = name.lower()
        for brand in KNOWN_BRANDS:
            if brand.lower() in name_lower:
                return brand
    for brand in KNOWN_BRANDS:
        if brand.lower() in text_lower:
            return brand
    return ""


def detect_category(text_lower: str) -> str:
    """Pick the category with the most keyword hits (first listed wins ties)."""
    best_category = ""
    best_score = 0
    for category, keywords in CATEGORY_KEYWORDS.items():
        score = sum(1 for keyword in keywords if keyword in text_lower)
        if score > best_score:
            best_category = category
            best_score = score
    return best_category


def extract_serial_model(pairs: Sequence[RawPair]) -> Tuple[str, str]:
    """
    Take the first serial-number and model-number labeled values.

    Returns:
        (serial number, model number) with "" when absent
    """
    serial = ""
    model = ""
    for pair in pairs:
        label = pair.key.strip()
        if not serial and SERIAL_LABEL.match(label):
            serial = pair.value.strip()
        if not model and MODEL_LABEL.match(label):
            model = pair.value.strip()
    return serial, model
