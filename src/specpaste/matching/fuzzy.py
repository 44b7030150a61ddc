"""
String normalization and similarity scoring for spec labels.

``similarity_score`` grades how likely two labels name the same field on the
shared 0-100 confidence scale. The tiers, strongest first:

- exact match after normalization (100)
- equal after abbreviation expansion (97)
- one label contains the other (80-95)
- token overlap, tolerating one-letter typos in long words (50-90)
- a single shared long word (50-55)
- edit distance on short labels (54-60)
"""
import re
from typing import List, Optional

from rapidfuzz.distance import Levenshtein

from ..constants import ABBREVIATIONS, CONFIDENCE, STOP_WORDS
from ..utils.numbers import round_half_up

_DASHES = re.compile(r'[-–—]')
_BRACKETS = re.compile(r'[()\[\]{}]')
_DISALLOWED = re.compile(r'[^a-z0-9\s/%.]')
_WHITESPACE = re.compile(r'\s+')


def normalize(text: str) -> str:
    """
    Lowercase, turn dashes into spaces, drop punctuation, collapse whitespace.

    Examples:
        >>> normalize("Max. Aperture (f/)")
        'max. aperture f/'
    """
    if not text:
        return ""
    result = _DASHES.sub(' ', text.lower())
    result = _BRACKETS.sub('', result)
    result = _DISALLOWED.sub('', result)
    return _WHITESPACE.sub(' ', result).strip()


def expand_abbreviations(text: str) -> str:
    """Replace whole-word abbreviations ("wt", "freq") with their long forms."""
    return ' '.join(ABBREVIATIONS.get(word, word) for word in text.split(' '))


def levenshtein(a: str, b: str) -> int:
    """Edit distance (insertions, deletions, substitutions) between two strings."""
    return Levenshtein.distance(a, b)


def _content_words(text: str) -> List[str]:
    return [w for w in text.split(' ') if len(w) > 2 and w not in STOP_WORDS]


def _find_unused(words: List[str], used: set, predicate) -> Optional[int]:
    for idx, word in enumerate(words):
        if idx not in used and predicate(word):
            return idx
    return None


def _token_overlap_score(a: str, b: str) -> Optional[int]:
    words_a = _content_words(a)
    words_b = _content_words(b)
    if not words_a or not words_b:
        return None

    exact_shared = 0
    near_shared = 0
    used = set()

    for wa in words_a:
        idx = _find_unused(words_b, used, lambda wb: wb == wa)
        if idx is not None:
            exact_shared += 1
            used.add(idx)
            continue
        if len(wa) >= 5:
            idx = _find_unused(words_b, used, lambda wb: len(wb) >= 5 and levenshtein(wa, wb) <= 1)
            if idx is not None:
                near_shared += 1
                used.add(idx)

    overlap_ratio = (exact_shared + near_shared * 0.8) / max(len(words_a), len(words_b))
    if overlap_ratio >= 0.5:
        bonus = 5 if exact_shared > near_shared else 0
        return round_half_up(50 + overlap_ratio * 35 + bonus)

    if exact_shared == 1:
        shared = [w for w in words_a if w in words_b]
        if any(len(w) >= 7 for w in shared):
            return CONFIDENCE.SINGLE_LONG_WORD
        if any(len(w) >= 5 for w in shared):
            return CONFIDENCE.SINGLE_MEDIUM_WORD
    return None


def similarity_score(source: str, target: str) -> float:
    """
    Score how closely a source label matches a target label.

    Args:
        source: Label as found in the pasted text
        target: Field name or alias it is compared against

    Returns:
        Score in [0, 100]; containment scores may be fractional

    Examples:
        >>> similarity_score("Weight", "weight")
        100
        >>> similarity_score("Wt", "Weight")
        97
    """
    a = normalize(source)
    b = normalize(target)
    if not a or not b:
        return 0
    if a == b:
        return CONFIDENCE.EXACT_MATCH

    a_exp = expand_abbreviations(a)
    b_exp = expand_abbreviations(b)
    if a_exp == b_exp:
        return CONFIDENCE.ALIAS_EXPANSION

    # Target inside source scores higher than the reverse
    if len(b_exp) >= 4 and b_exp in a_exp and len(b_exp) / len(a_exp) > 0.4:
        return CONFIDENCE.CONTAINMENT_HIGH + min(10, len(b_exp) / len(a_exp) * 10)
    if len(a_exp) >= 4 and a_exp in b_exp and len(a_exp) / len(b_exp) > 0.4:
        return CONFIDENCE.CONTAINMENT_LOW + min(10, len(a_exp) / len(b_exp) * 10)

    overlap = _token_overlap_score(a_exp, b_exp)
    if overlap is not None:
        return overlap

    if len(a_exp) <= 20 and len(b_exp) <= 20:
        ratio = 1 - levenshtein(a_exp, b_exp) / max(len(a_exp), len(b_exp))
        if ratio >= 0.7:
            return round_half_up(40 + ratio * 20)

    return 0
