"""
specpaste - Smart paste parsing for product specifications.

Turns pasted spec sheets, retailer pages and marketing copy into structured
product records matched against a caller-supplied field schema.
"""

__version__ = "1.0.0"
__author__ = "specpaste"

from .models import (
    ApplyPayload,
    BatchItem,
    CrowdAlias,
    DiffEntry,
    DiffStatus,
    ParseResult,
    ResolvedField,
    Segment,
    SpecField,
)
from .services.apply_payload import build_apply_payload
from .services.batch_parser import detect_boundaries, parse_batch
from .services.diff_engine import diff_specs
from .services.parser import parse
from .services.unit_normalizer import coerce_field_value, normalize_units

__all__ = [
    "ApplyPayload",
    "BatchItem",
    "CrowdAlias",
    "DiffEntry",
    "DiffStatus",
    "ParseResult",
    "ResolvedField",
    "Segment",
    "SpecField",
    "build_apply_payload",
    "detect_boundaries",
    "parse_batch",
    "diff_specs",
    "parse",
    "coerce_field_value",
    "normalize_units",
]
