"""
Alias map construction.

Every label variant a parse should recognize is registered here with a
priority, which becomes the candidate confidence when a pasted key hits the
variant exactly. Higher-priority entries are never displaced by weaker ones.
"""
import math
from typing import Any, Iterable, Mapping, Optional

from ..constants import COMMON_ALIASES, CONFIDENCE, GENERIC_WORDS
from ..logger import get_logger
from ..models import AliasEntry, AliasMap, CrowdAlias, SpecField
from .fuzzy import expand_abbreviations, normalize

logger = get_logger(__name__)


def as_spec_field(item: Any) -> Optional[SpecField]:
    """Accept a SpecField or a ``{"name": ..., "required": ...}`` mapping."""
    if isinstance(item, SpecField):
        return item if item.name else None
    if isinstance(item, Mapping):
        name = item.get("name")
        if isinstance(name, str) and name:
            return SpecField(name=name, required=bool(item.get("required", False)))
    return None


def community_priority(usage_count: int) -> int:
    """Priority for a crowd alias: grows with usage, capped below common aliases."""
    return min(
        CONFIDENCE.COMMUNITY_MAX,
        CONFIDENCE.COMMUNITY_BASE + math.floor((usage_count - 3) * 1.5),
    )


def _register_schema(alias_map: AliasMap, schema: Mapping[str, Any]) -> None:
    for category, spec_list in schema.items():
        if not isinstance(spec_list, (list, tuple)):
            continue
        for item in spec_list:
            spec = as_spec_field(item)
            if spec is None:
                continue
            name = spec.name
            if name not in alias_map.spec_categories:
                alias_map.spec_names.append(name)
            alias_map.spec_categories[name] = category

            name_norm = normalize(name)
            alias_map.register(name_norm, AliasEntry(name, CONFIDENCE.EXACT_MATCH, category))

            expanded = expand_abbreviations(name_norm)
            if expanded != name_norm:
                alias_map.register(expanded, AliasEntry(name, CONFIDENCE.EXPANDED_NAME, category))

            # Distinctive words of multi-word names ("Sensitivity" of "Mic Sensitivity")
            words = name_norm.split(' ')
            if len(words) > 1:
                for word in words:
                    if len(word) >= 5 and word not in GENERIC_WORDS:
                        alias_map.register(
                            word,
                            AliasEntry(name, CONFIDENCE.SPEC_WORD, category),
                            floor=CONFIDENCE.SPEC_WORD,
                        )


def _register_common_aliases(alias_map: AliasMap) -> None:
    for canonical, aliases in COMMON_ALIASES.items():
        target = alias_map.get(normalize(canonical))
        if target is None:
            continue
        for alias in aliases:
            alias_norm = normalize(alias)
            alias_map.register(
                alias_norm,
                AliasEntry(target.target_field, CONFIDENCE.COMMON_ALIAS, target.category),
                floor=CONFIDENCE.COMMON_ALIAS,
            )
            alias_expanded = expand_abbreviations(alias_norm)
            if alias_expanded != alias_norm:
                alias_map.register(
                    alias_expanded,
                    AliasEntry(target.target_field, CONFIDENCE.COMMON_ALIAS_EXPANDED, target.category),
                    floor=CONFIDENCE.COMMON_ALIAS_EXPANDED,
                )


def _register_crowd_aliases(alias_map: AliasMap, crowd_aliases: Iterable[CrowdAlias]) -> int:
    added = 0
    for alias in crowd_aliases:
        key = normalize(alias.source_key)
        if not key or key in alias_map:
            continue
        alias_map.register(key, AliasEntry(alias.target_field, community_priority(alias.usage_count)))
        added += 1
    return added


def build_alias_map(
    schema: Optional[Mapping[str, Any]],
    crowd_aliases: Optional[Iterable[CrowdAlias]] = None,
) -> AliasMap:
    """
    Build the label lookup for one parse.

    Args:
        schema: Category name -> list of fields (SpecField or mappings with "name")
        crowd_aliases: Optional crowd-learned aliases; never override existing entries

    Returns:
        A fresh AliasMap (empty when no schema is given)
    """
    alias_map = AliasMap()
    if not schema or not isinstance(schema, Mapping):
        return alias_map

    _register_schema(alias_map, schema)
    _register_common_aliases(alias_map)

    crowd_count = 0
    if crowd_aliases:
        crowd_count = _register_crowd_aliases(alias_map, crowd_aliases)

    logger.debug(
        f"Alias map built: {len(alias_map.spec_names)} fields, "
        f"{len(alias_map)} entries, {crowd_count} crowd aliases"
    )
    return alias_map
