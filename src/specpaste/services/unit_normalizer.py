"""
Unit normalization and type coercion for resolved values.

Both run on demand over single value strings (typically while building an
apply payload) and return None when they have nothing to change.
"""
from __future__ import annotations

import re
from typing import Callable, Optional, Pattern, Tuple

from ..constants import GRAMS_PER_OUNCE, GRAMS_PER_POUND, MM_PER_INCH
from ..models import Coercion, UnitConversion
from ..utils.numbers import parse_float_prefix, round_half_up

_COMPOUND_WEIGHT = re.compile(r'([\d.]+)\s*(?:lbs?|pounds?)\s+([\d.]+)\s*(?:oz|ounces?)', re.IGNORECASE)
_DIMENSIONS_IN = re.compile(
    r'([\d.]+)\s*[x×]\s*([\d.]+)(?:\s*[x×]\s*([\d.]+))?\s*(?:in(?:ch(?:es)?)?|")',
    re.IGNORECASE,
)
_DIMENSIONS_MM = re.compile(r'([\d.]+)\s*[x×]\s*([\d.]+)(?:\s*[x×]\s*([\d.]+))?\s*mm', re.IGNORECASE)
_FAHRENHEIT = re.compile(r'([\d.]+)\s*°?\s*F\b', re.IGNORECASE)


def _fixed(value: float, digits: int) -> str:
    if digits == 0:
        return str(round_half_up(value))
    return f"{value:.{digits}f}"


# (pattern, factor, target unit, decimals), tried in order
_METRIC_SINGLE: Tuple[Tuple[Pattern[str], float, str, int], ...] = (
    (re.compile(r'([\d.]+)\s*(?:in(?:ch(?:es)?)?\b|")', re.IGNORECASE), MM_PER_INCH, 'mm', 1),
    (re.compile(r'([\d.]+)\s*(?:lbs?|pounds?)\b', re.IGNORECASE), GRAMS_PER_POUND, 'g', 0),
    (re.compile(r'([\d.]+)\s*(?:oz|ounces?)\b', re.IGNORECASE), GRAMS_PER_OUNCE, 'g', 0),
)
_IMPERIAL_SINGLE: Tuple[Tuple[Pattern[str], float, str, int], ...] = (
    (re.compile(r'([\d.]+)\s*mm\b', re.IGNORECASE), 1 / MM_PER_INCH, 'in', 2),
)


def _numbers(match: re.Match) -> list[float]:
    values = []
    for group in match.groups():
        number = parse_float_prefix(group)
        if number is not None:
            values.append(number)
    return values


def normalize_units(value: str, prefer_metric: bool = True) -> Optional[UnitConversion]:
    """
    Re-express a value in the preferred unit system.

    Tries, in order: compound pounds+ounces weight, dimension pairs/triples,
    single-unit lengths and weights, Fahrenheit temperatures.

    Args:
        value: Resolved field value
        prefer_metric: Convert to metric (True) or imperial (False)

    Returns:
        UnitConversion, or None when no recognizable unit is present

    Examples:
        >>> normalize_units("10 inches").normalized
        '254.0 mm'
        >>> normalize_units("1 lb 5 oz").normalized
        '595 g'
    """
    if not value or not isinstance(value, str):
        return None

    compound = _COMPOUND_WEIGHT.search(value)
    if compound:
        pounds = parse_float_prefix(compound.group(1))
        ounces = parse_float_prefix(compound.group(2))
        if pounds is not None and ounces is not None:
            grams = pounds * GRAMS_PER_POUND + ounces * GRAMS_PER_OUNCE
            if grams >= 1000:
                return UnitConversion(value, f"{grams / 1000:.2f} kg", 'kg')
            return UnitConversion(value, f"{round_half_up(grams)} g", 'g')

    if prefer_metric:
        dims = _DIMENSIONS_IN.search(value)
        if dims:
            parts = [str(round_half_up(d * MM_PER_INCH)) for d in _numbers(dims)]
            return UnitConversion(value, ' × '.join(parts) + ' mm', 'mm')
    else:
        dims = _DIMENSIONS_MM.search(value)
        if dims:
            parts = [f"{d / MM_PER_INCH:.2f}" for d in _numbers(dims)]
            return UnitConversion(value, ' × '.join(parts) + ' in', 'in')

    for pattern, factor, unit, digits in (_METRIC_SINGLE if prefer_metric else _IMPERIAL_SINGLE):
        match = pattern.search(value)
        if not match:
            continue
        number = parse_float_prefix(match.group(1))
        if number is None:
            continue
        return UnitConversion(value, f"{_fixed(number * factor, digits)} {unit}", unit)

    if prefer_metric:
        fahrenheit = _FAHRENHEIT.search(value)
        if fahrenheit:
            number = parse_float_prefix(fahrenheit.group(1))
            if number is not None:
                celsius = (number - 32) * 5 / 9
                return UnitConversion(value, f"{round_half_up(celsius)} °C", '°C')

    return None


# =============================================================================
# Type coercion
# =============================================================================

BOOLEAN_FIELDS = (
    'weather sealing',
    'touchscreen',
    'autofocus',
    'image stabilization',
    'stabilization',
    'wireless control',
    'airline approved',
    'phantom power',
    'hdr recording',
)

_YES = re.compile(r'^(yes|true|included|available|built[\s-]?in|equipped|supported|✓|✔)$', re.IGNORECASE)
_NO = re.compile(r'^(no|false|not included|none|n/a|not available|not supported|✗|✘|—)$', re.IGNORECASE)
_CCT_RANGE = re.compile(r'(\d{3,5})\s*K?\s*[-–—to]+\s*(\d{3,5})\s*K?', re.IGNORECASE)
_BARE_NUMBER = re.compile(r'^(\d+\.?\d*)$')


def _is_boolean_field(name_lower: str) -> bool:
    return any(f in name_lower or name_lower in f for f in BOOLEAN_FIELDS)


def _coerce_boolean(value: str) -> Optional[str]:
    if _YES.match(value):
        return 'Yes'
    if _NO.match(value):
        return 'No'
    return None


def _coerce_color_temperature(value: str) -> Optional[str]:
    match = _CCT_RANGE.search(value)
    if match:
        return f"{match.group(1)}–{match.group(2)} K"
    return None


def _coerce_aperture(value: str) -> Optional[str]:
    match = _BARE_NUMBER.match(value)
    if match:
        return f"f/{match.group(1)}"
    return None


# (field-name test, coercer), first rule producing a value wins
COERCION_RULES: Tuple[Tuple[Callable[[str], bool], Callable[[str], Optional[str]]], ...] = (
    (_is_boolean_field, _coerce_boolean),
    (lambda name: 'color temp' in name or 'cct' in name, _coerce_color_temperature),
    (lambda name: 'aperture' in name, _coerce_aperture),
)


def coerce_field_value(field_name: str, value: str) -> Optional[Coercion]:
    """
    Rewrite a value into its field's canonical format.

    Examples:
        >>> coerce_field_value("Weather Sealing", "built-in").coerced
        'Yes'
        >>> coerce_field_value("Maximum Aperture", "2.8").coerced
        'f/2.8'
    """
    if not value or not isinstance(value, str) or not field_name:
        return None
    stripped = value.strip()
    name_lower = field_name.lower()

    for applies, coerce in COERCION_RULES:
        if not applies(name_lower):
            continue
        coerced = coerce(stripped)
        if coerced is not None:
            return Coercion(original=stripped, coerced=coerced)
    return None
