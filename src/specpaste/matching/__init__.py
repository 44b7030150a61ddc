"""
Label matching: normalization, similarity scoring and alias maps.
"""
from .alias_map import build_alias_map
from .fuzzy import expand_abbreviations, levenshtein, normalize, similarity_score

__all__ = [
    "build_alias_map",
    "expand_abbreviations",
    "levenshtein",
    "normalize",
    "similarity_score",
]
