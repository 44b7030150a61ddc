"""
Field matching and resolution.

Matching runs in two passes over the raw pairs:

1. Direct lookup of the normalized (then abbreviation-expanded) key in the
   alias map; the entry priority becomes the candidate confidence.
2. Fuzzy scoring of still-unmatched keys against every field name and every
   alias, with category-mismatch penalties.

Resolution then reduces each field's candidates to one ResolvedField:
dedupe, merge near-equal direct hits, flag close calls as conflicts and
sanity-check the chosen value.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..constants import CONFIDENCE, SHARED_FIELDS, UNIT_SCALES, VALUE_RANGES
from ..logger import get_logger
from ..matching.fuzzy import expand_abbreviations, normalize, similarity_score
from ..models import AliasMap, FieldCandidate, RawPair, ResolvedField
from ..utils.numbers import parse_float_prefix, round_half_up

logger = get_logger(__name__)

CandidateMap = Dict[str, List[FieldCandidate]]


def _penalize(score: float, field_name: str, alias_map: AliasMap, detected_category: str) -> float:
    field_category = alias_map.spec_categories.get(field_name)
    if (
        detected_category
        and field_category
        and field_category != detected_category
        and field_name not in SHARED_FIELDS
    ):
        return max(0, score - CONFIDENCE.CATEGORY_MISMATCH_PENALTY)
    return score


def _fuzzy_matches(
    key_norm: str,
    key_exp: str,
    alias_map: AliasMap,
    detected_category: str,
) -> Dict[str, float]:
    """Best adjusted fuzzy score per field for one pasted key."""
    best: Dict[str, float] = {}

    def keep(field_name: str, score: float) -> None:
        if score >= CONFIDENCE.FUZZY_MINIMUM and score > best.get(field_name, -1):
            best[field_name] = score

    for field_name in alias_map.spec_names:
        field_norm = normalize(field_name)
        field_exp = expand_abbreviations(field_norm)
        score = max(similarity_score(key_norm, field_norm), similarity_score(key_exp, field_exp))
        if score >= CONFIDENCE.FUZZY_MINIMUM:
            keep(field_name, _penalize(score, field_name, alias_map, detected_category))

    for alias, entry in alias_map.entries.items():
        alias_exp = expand_abbreviations(alias)
        score = max(similarity_score(key_norm, alias), similarity_score(key_exp, alias_exp))
        if score >= CONFIDENCE.FUZZY_ALIAS_MINIMUM:
            adjusted = min(CONFIDENCE.FUZZY_CAP, score + (entry.priority - 50) * 0.15)
            keep(entry.target_field, _penalize(adjusted, entry.target_field, alias_map, detected_category))

    return best


def match_fields(
    pairs: Sequence[RawPair],
    alias_map: AliasMap,
    detected_category: str = "",
) -> Tuple[CandidateMap, Set[int]]:
    """
    Collect candidate values for every field.

    Args:
        pairs: Raw pairs in line order
        alias_map: Alias map for this parse
        detected_category: Category from keyword detection ("" if none)

    Returns:
        (field name -> candidates in discovery order, indices of matched pairs)
    """
    candidates: CandidateMap = {name: [] for name in alias_map.spec_names}
    matched: Set[int] = set()

    for idx, pair in enumerate(pairs):
        key_norm = normalize(pair.key)
        entry = alias_map.get(key_norm) or alias_map.get(expand_abbreviations(key_norm))
        if entry is None:
            continue
        candidates.setdefault(entry.target_field, []).append(FieldCandidate(
            value=pair.value,
            confidence=entry.priority,
            source_key=pair.key,
            line_index=pair.line_index,
        ))
        matched.add(idx)

    direct_count = len(matched)

    for idx, pair in enumerate(pairs):
        if idx in matched:
            continue
        key_norm = normalize(pair.key)
        best = _fuzzy_matches(key_norm, expand_abbreviations(key_norm), alias_map, detected_category)
        if not best:
            continue
        for field_name, score in best.items():
            candidates.setdefault(field_name, []).append(FieldCandidate(
                value=pair.value,
                confidence=round_half_up(score),
                source_key=pair.key,
                line_index=pair.line_index,
            ))
        matched.add(idx)

    logger.debug(
        f"Matched {len(matched)}/{len(pairs)} pairs "
        f"({direct_count} direct, {len(matched) - direct_count} fuzzy)"
    )
    return candidates, matched


_UNIT_AFTER_NUMBER = re.compile(r'^\s*([a-zA-Z]+|")')


def _unit_factor(rest: str, rule_unit: str) -> float:
    """Scale from the unit written after a number into the rule's unit (1 if unknown)."""
    match = _UNIT_AFTER_NUMBER.match(rest)
    if not match:
        return 1
    scales = UNIT_SCALES.get(rule_unit, {})
    return scales.get(match.group(1).lower(), 1)


def validate_field_value(field_name: str, value: str) -> Optional[str]:
    """
    Check a value against the plausibility rule for its field.

    Returns:
        Warning text, or None when the value looks fine or no rule applies
    """
    rule = VALUE_RANGES.get(field_name)
    if rule is None:
        return None
    match = rule.pattern.search(value)
    if not match:
        return None
    if rule.check is not None:
        return None if rule.check(value) else rule.warn
    number = parse_float_prefix(match.group(rule.group))
    if number is None:
        return None
    if rule.unit:
        number *= _unit_factor(value[match.end():], rule.unit)
    if rule.min is not None and number < rule.min:
        return rule.warn
    if rule.max is not None and number > rule.max:
        return rule.warn
    return None


def _dedupe(candidates: Sequence[FieldCandidate]) -> List[FieldCandidate]:
    # sorted() is stable: equal confidences keep discovery order
    ordered = sorted(candidates, key=lambda c: c.confidence, reverse=True)
    seen = set()
    unique = []
    for candidate in ordered:
        key = candidate.value.lower().strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


def _merge_direct_hits(candidates: Sequence[FieldCandidate]) -> Optional[Tuple[FieldCandidate, int]]:
    direct = [c for c in candidates if c.confidence >= CONFIDENCE.DIRECT_MATCH]
    if len(direct) < 2:
        return None
    spread = max(c.confidence for c in direct) - min(c.confidence for c in direct)
    if spread > CONFIDENCE.MERGE_RANGE:
        return None
    merged = FieldCandidate(
        value=', '.join(c.value for c in direct),
        confidence=round_half_up(sum(c.confidence for c in direct) / len(direct)),
        source_key=' + '.join(c.source_key for c in direct),
        line_index=direct[0].line_index,
    )
    return merged, len(direct)


def _is_conflict(candidates: Sequence[FieldCandidate]) -> bool:
    if len(candidates) < 2:
        return False
    first, second = candidates[0], candidates[1]
    return (
        abs(first.confidence - second.confidence) <= CONFIDENCE.CONFLICT_DIFF_THRESHOLD
        and first.confidence >= CONFIDENCE.FUZZY_MINIMUM
        and second.confidence >= CONFIDENCE.FUZZY_MINIMUM
    )


def resolve_field(field_name: str, candidates: Sequence[FieldCandidate]) -> Optional[ResolvedField]:
    """Reduce one field's candidates to a single resolved value."""
    if not candidates:
        return None

    unique = _dedupe(candidates)
    merged = _merge_direct_hits(unique)
    has_conflict = merged is None and _is_conflict(unique)

    if merged is not None:
        best, merged_count = merged
    else:
        merged_count = None
        best = next((c for c in unique if c.confidence >= CONFIDENCE.DIRECT_MATCH), unique[0])

    return ResolvedField(
        value=best.value,
        confidence=best.confidence,
        source_key=best.source_key,
        line_index=best.line_index,
        alternatives=tuple(unique) if len(unique) > 1 else (),
        merged_count=merged_count,
        has_conflict=has_conflict,
        validation_warning=validate_field_value(field_name, best.value),
    )


def resolve_fields(candidates: CandidateMap) -> Dict[str, ResolvedField]:
    """
    Resolve every field that has at least one candidate.

    Returns:
        Field name -> ResolvedField, in alias-map field order
    """
    fields: Dict[str, ResolvedField] = {}
    for field_name, field_candidates in candidates.items():
        resolved = resolve_field(field_name, field_candidates)
        if resolved is not None:
            fields[field_name] = resolved

    conflicts = sum(1 for f in fields.values() if f.has_conflict)
    if conflicts:
        logger.debug(f"Resolved {len(fields)} fields with {conflicts} conflicts")
    return fields
