"""
Apply-payload building: turn a ParseResult plus the user's choices into
form data for the item being edited.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..models import ApplyPayload, ParseResult
from .unit_normalizer import coerce_field_value, normalize_units

MANUAL_MAPPINGS_KEYS = ("_manual_mappings", "_manualMappings")


def _finalize(field_name: str, value: str, normalize_metric: bool) -> str:
    if normalize_metric:
        conversion = normalize_units(value, True)
        if conversion is not None:
            value = conversion.normalized
    coercion = coerce_field_value(field_name, value)
    if coercion is not None:
        value = coercion.coerced
    return value


def _manual_mappings(overrides: Mapping[str, Any]) -> Mapping[str, Any]:
    for key in MANUAL_MAPPINGS_KEYS:
        mappings = overrides.get(key)
        if isinstance(mappings, Mapping):
            return mappings
    return {}


def build_apply_payload(
    result: Optional[ParseResult],
    overrides: Optional[Mapping[str, Any]] = None,
    normalize_metric: bool = False,
) -> ApplyPayload:
    """
    Build form data from a parse result.

    Args:
        result: ParseResult to apply; None gives an empty payload
        overrides: Field name -> value chosen by the user; the special key
            "_manual_mappings" maps field name -> raw value for pairs the
            user assigned by hand
        normalize_metric: Convert values to metric before coercion

    Returns:
        ApplyPayload with blank values left out of ``specs``
    """
    if not isinstance(result, ParseResult):
        return ApplyPayload()

    overrides = overrides or {}
    specs: Dict[str, str] = {}

    for field_name, resolved in result.fields.items():
        value = overrides.get(field_name, resolved.value)
        if not isinstance(value, str) or not value.strip():
            continue
        specs[field_name] = _finalize(field_name, value, normalize_metric)

    for field_name, raw_value in _manual_mappings(overrides).items():
        if field_name in specs:
            continue
        if not isinstance(raw_value, str) or not raw_value.strip():
            continue
        specs[field_name] = _finalize(field_name, raw_value, normalize_metric)

    return ApplyPayload(
        name=result.name,
        brand=result.brand,
        category=result.category,
        purchase_price=result.purchase_price,
        price_note=result.price_note,
        serial_number=result.serial_number,
        model_number=result.model_number,
        specs=specs,
    )
