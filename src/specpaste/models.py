"""
Data models for specpaste parsing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional, List, Dict, Mapping, Tuple


@dataclass(frozen=True)
class SpecField:
    """
    One field of a caller-supplied category schema.

    Attributes:
        name: Canonical field name (e.g. "Maximum Aperture")
        required: Whether the caller considers the field mandatory
    """
    name: str
    required: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "required": self.required}


# Category name -> ordered fields
FieldSchema = Mapping[str, List[SpecField]]


@dataclass(frozen=True)
class CrowdAlias:
    """A label -> field mapping confirmed by users elsewhere."""
    source_key: str
    target_field: str
    usage_count: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_key": self.source_key,
            "target_field": self.target_field,
            "usage_count": self.usage_count,
        }


@dataclass(frozen=True)
class AliasEntry:
    """Where a normalized label points, and how strongly."""
    target_field: str
    priority: int
    category: Optional[str] = None


@dataclass
class AliasMap:
    """
    Lookup from normalized label text to canonical field.

    Built fresh for every parse; never shared between calls.

    Attributes:
        entries: Normalized label -> AliasEntry, in registration order
        spec_names: Every target field name, in schema order
        spec_categories: Target field name -> schema category
    """
    entries: Dict[str, AliasEntry] = field(default_factory=dict)
    spec_names: List[str] = field(default_factory=list)
    spec_categories: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[AliasEntry]:
        return self.entries.get(key)

    def register(self, key: str, entry: AliasEntry, floor: Optional[int] = None) -> bool:
        """
        Register an entry, optionally only when nothing at or above ``floor`` exists.

        Returns:
            True if the entry was stored
        """
        existing = self.entries.get(key)
        if floor is not None and existing is not None and existing.priority >= floor:
            return False
        self.entries[key] = entry
        return True

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class RawPair:
    """
    A (key, value) pair lifted from one or two input lines.

    Attributes:
        key: Label text as it appeared
        value: Value text as it appeared
        source_line: The line (or "label → value" for two-line pairs)
        line_index: Index into the cleaned, non-empty line list
    """
    key: str
    value: str
    source_line: str
    line_index: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "key": self.key,
            "value": self.value,
            "source_line": self.source_line,
            "line_index": self.line_index,
        }


@dataclass(frozen=True)
class FieldCandidate:
    """One hypothesis for a target field's value."""
    value: str
    confidence: int
    source_key: str
    line_index: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "value": self.value,
            "confidence": self.confidence,
            "source_key": self.source_key,
            "line_index": self.line_index,
        }


@dataclass(frozen=True)
class ResolvedField:
    """
    The value chosen for a target field after reconciliation.

    Attributes:
        value: Selected (or merged) value
        confidence: 0-100
        source_key: Label(s) the value came from
        line_index: Source line of the selected candidate
        alternatives: Deduplicated candidates, best first (empty if only one)
        merged_count: Number of values merged into ``value``, if merged
        has_conflict: Top two candidates were too close to call
        validation_warning: Set when the value looks implausible
    """
    value: str
    confidence: int
    source_key: str
    line_index: Optional[int] = None
    alternatives: Tuple[FieldCandidate, ...] = ()
    merged_count: Optional[int] = None
    has_conflict: bool = False
    validation_warning: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "value": self.value,
            "confidence": self.confidence,
            "source_key": self.source_key,
            "line_index": self.line_index,
            "alternatives": [a.to_dict() for a in self.alternatives],
        }
        if self.merged_count is not None:
            data["merged_count"] = self.merged_count
        if self.has_conflict:
            data["has_conflict"] = True
        if self.validation_warning:
            data["validation_warning"] = self.validation_warning
        return data


@dataclass(frozen=True)
class ParseResult:
    """
    Structured record produced by one parse call.

    ``fields`` is a read-only mapping with at most one entry per target field.
    """
    name: str = ""
    brand: str = ""
    category: str = ""
    purchase_price: str = ""
    price_note: str = ""
    serial_number: str = ""
    model_number: str = ""
    fields: Mapping[str, ResolvedField] = field(default_factory=lambda: MappingProxyType({}))
    unmatched_pairs: Tuple[RawPair, ...] = ()
    raw_extracted: Tuple[RawPair, ...] = ()
    source_lines: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> ParseResult:
        """Neutral result for missing or unusable input."""
        return cls()

    def is_empty(self) -> bool:
        """True when nothing at all was recognized."""
        return not (self.fields or self.raw_extracted or self.name)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "purchase_price": self.purchase_price,
            "price_note": self.price_note,
            "serial_number": self.serial_number,
            "model_number": self.model_number,
            "fields": {k: v.to_dict() for k, v in self.fields.items()},
            "unmatched_pairs": [p.to_dict() for p in self.unmatched_pairs],
            "raw_extracted": [p.to_dict() for p in self.raw_extracted],
            "source_lines": list(self.source_lines),
        }


@dataclass(frozen=True)
class Segment:
    """A line range of multi-product input believed to describe one product."""
    start_line: int
    end_line: int
    name: str
    text: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "name": self.name,
            "text": self.text,
        }


@dataclass(frozen=True)
class BatchItem:
    """One segment of batch input with its parse result."""
    segment: Segment
    result: ParseResult

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"segment": self.segment.to_dict(), "result": self.result.to_dict()}


class DiffStatus(str, Enum):
    """How a field compares against the stored record."""
    CHANGED = "changed"
    ADDED = "added"
    UNCHANGED = "unchanged"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffEntry:
    """Comparison of one field between a stored record and a new parse."""
    field_name: str
    status: DiffStatus
    old_value: str
    new_value: str
    confidence: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "field_name": self.field_name,
            "status": self.status.value,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class UnitConversion:
    """A value re-expressed in the preferred unit system."""
    original: str
    normalized: str
    unit: str


@dataclass(frozen=True)
class Coercion:
    """A value rewritten into its field's canonical format."""
    original: str
    coerced: str


@dataclass
class ApplyPayload:
    """Form data assembled from a parse result and the caller's choices."""
    name: str = ""
    brand: str = ""
    category: str = ""
    purchase_price: str = ""
    price_note: str = ""
    serial_number: str = ""
    model_number: str = ""
    specs: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "purchase_price": self.purchase_price,
            "price_note": self.price_note,
            "serial_number": self.serial_number,
            "model_number": self.model_number,
            "specs": dict(self.specs),
        }


@dataclass(slots=True)
class PageContent:
    """
    Text acquired from a remote product page.

    Attributes:
        text: Parser-ready text (structured-data preamble plus page body)
        html: Raw HTML as fetched (may be empty when a proxy returned text only)
        source_url: URL that was requested
        title: Page title, when one could be found
    """
    text: str
    html: str = ""
    source_url: Optional[str] = None
    title: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "text": self.text,
            "html": self.html,
            "source_url": self.source_url,
            "title": self.title,
        }
