"""
Diff between an item's stored spec values and a fresh parse.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..models import DiffEntry, DiffStatus, ResolvedField

_STATUS_ORDER: Dict[DiffStatus, int] = {
    DiffStatus.CHANGED: 0,
    DiffStatus.ADDED: 1,
    DiffStatus.UNCHANGED: 2,
    DiffStatus.REMOVED: 3,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _resolved(field: Any) -> tuple[str, int]:
    """Value and confidence of a ResolvedField (plain strings score 0)."""
    if isinstance(field, ResolvedField):
        return field.value, field.confidence
    return _text(field), 0


def _status(old: str, new: str) -> Optional[DiffStatus]:
    if not old and new:
        return DiffStatus.ADDED
    if old and not new:
        return DiffStatus.REMOVED
    if old and new:
        if old.lower().strip() != new.lower().strip():
            return DiffStatus.CHANGED
        return DiffStatus.UNCHANGED
    return None


def diff_specs(
    existing: Optional[Mapping[str, Any]],
    new_fields: Optional[Mapping[str, Any]],
) -> List[DiffEntry]:
    """
    Compare stored values against newly resolved fields.

    Args:
        existing: Field name -> stored value
        new_fields: Field name -> ResolvedField from a ParseResult (plain
            strings are accepted too)

    Returns:
        Entries ordered changed, added, unchanged, removed; fields empty on
        both sides are left out
    """
    existing = existing or {}
    new_fields = new_fields or {}

    entries = []
    for field_name in dict.fromkeys([*existing.keys(), *new_fields.keys()]):
        old_value = _text(existing.get(field_name))
        new_value, confidence = _resolved(new_fields.get(field_name))
        status = _status(old_value, new_value)
        if status is None:
            continue
        entries.append(DiffEntry(
            field_name=field_name,
            status=status,
            old_value=old_value,
            new_value=new_value,
            confidence=confidence,
        ))

    entries.sort(key=lambda e: _STATUS_ORDER[e.status])
    return entries
