"""
Parsing services.

Provides modular components for:
- Raw pair extraction and contextual detection
- Field matching and resolution
- Unit normalization and type coercion
- Batch splitting, diffing and apply payloads
- Crowd-learned alias storage
"""

from .apply_payload import build_apply_payload
from .batch_parser import detect_boundaries, parse_batch
from .crowd_aliases import CrowdAliasStore
from .detectors import detect_brand, detect_category, extract_price, extract_serial_model
from .diff_engine import diff_specs
from .field_resolver import match_fields, resolve_fields
from .pair_extractor import extract_raw_pairs
from .parser import parse
from .unit_normalizer import coerce_field_value, normalize_units

__all__ = [
    'build_apply_payload',
    'detect_boundaries',
    'parse_batch',
    'CrowdAliasStore',
    'detect_brand',
    'detect_category',
    'extract_price',
    'extract_serial_model',
    'diff_specs',
    'match_fields',
    'resolve_fields',
    'extract_raw_pairs',
    'parse',
    'coerce_field_value',
    'normalize_units',
]
