"""
Text cleaning for pasted product content.

Pasted text arrives as anything from a clean spec sheet to raw page HTML.
``clean_input_text`` flattens it into plain lines, turning table rows and
definition lists into ``key<TAB>value`` lines so the pair extractor can
pick them up.
"""
import re
from html import unescape

# Elements whose content is never product text
_IMG = re.compile(r'<img[^>]*/?>', re.IGNORECASE)
_SVG = re.compile(r'<svg[\s\S]*?</svg>', re.IGNORECASE)
_MEDIA = re.compile(
    r'<(?:picture|video|audio|iframe|canvas|object|embed)[^>]*'
    r'(?:/>|>[\s\S]*?</(?:picture|video|audio|iframe|canvas|object|embed)>)',
    re.IGNORECASE,
)
_SCRIPTS = re.compile(r'<(?:script|style|noscript)[\s\S]*?</(?:script|style|noscript)>', re.IGNORECASE)
_COMMENTS = re.compile(r'<!--[\s\S]*?-->')
_CHROME = re.compile(r'<(?:button|nav|footer|form)[^>]*>[\s\S]*?</(?:button|nav|footer|form)>', re.IGNORECASE)

# Tables and definition lists
_TABLE = re.compile(r'<table[^>]*>([\s\S]*?)</table>', re.IGNORECASE)
_ROW = re.compile(r'<tr[^>]*>([\s\S]*?)</tr>', re.IGNORECASE)
_CELL = re.compile(r'<t[dh][^>]*>([\s\S]*?)</t[dh]>', re.IGNORECASE)
_DEFINITION = re.compile(r'<dt[^>]*>([\s\S]*?)</dt>\s*<dd[^>]*>([\s\S]*?)</dd>', re.IGNORECASE)

# Block-level breaks
_LINE_BREAK = re.compile(r'<(?:br|hr)\s*/?>', re.IGNORECASE)
_BLOCK_END = re.compile(
    r'</(?:p|div|tr|li|h[1-6]|dt|dd|section|article|header|blockquote)>',
    re.IGNORECASE,
)
_CELL_GAP = re.compile(r'</t[dh]>\s*<t[dh][^>]*>', re.IGNORECASE)

_TAG = re.compile(r'<[^>]+>')
_LEFTOVER_ENTITY = re.compile(r'&[a-zA-Z]+;')


def normalize_whitespace(text: str) -> str:
    """
    Collapse every whitespace run to a single space.

    Examples:
        >>> normalize_whitespace("hello    world\\n\\ntest")
        'hello world test'
    """
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def strip_html_tags(text: str) -> str:
    """Remove HTML tags without decoding entities."""
    if not text:
        return ""
    return _TAG.sub('', text)


def _table_to_lines(match: re.Match) -> str:
    rows = []
    for row in _ROW.finditer(match.group(1)):
        cells = []
        for cell in _CELL.finditer(row.group(1)):
            cell_text = normalize_whitespace(strip_html_tags(cell.group(1)))
            if cell_text:
                cells.append(cell_text)
        if len(cells) >= 2:
            rows.append(cells[0] + '\t' + ', '.join(cells[1:]))
        elif len(cells) == 1:
            rows.append(cells[0])
    return '\n'.join(rows)


def _definition_to_line(match: re.Match) -> str:
    term = strip_html_tags(match.group(1)).strip()
    definition = strip_html_tags(match.group(2)).strip()
    return term + '\t' + definition + '\n'


def clean_input_text(text: str) -> str:
    """
    Strip markup from pasted content and normalize it into plain lines.

    Args:
        text: Raw pasted text or HTML

    Returns:
        Cleaned text ("" for empty or non-string input)

    Examples:
        >>> clean_input_text("<table><tr><td>Weight</td><td>658 g</td></tr></table>")
        'Weight\\t658 g'
    """
    if not text or not isinstance(text, str):
        return ""

    cleaned = text
    for pattern in (_IMG, _SVG, _MEDIA, _SCRIPTS, _COMMENTS, _CHROME):
        cleaned = pattern.sub('', cleaned)

    cleaned = _TABLE.sub(_table_to_lines, cleaned)
    # Definition lists must be paired before block-level cleanup splits them
    cleaned = _DEFINITION.sub(_definition_to_line, cleaned)

    cleaned = _LINE_BREAK.sub('\n', cleaned)
    cleaned = _BLOCK_END.sub('\n', cleaned)
    cleaned = _CELL_GAP.sub('\t', cleaned)

    cleaned = _TAG.sub('', cleaned)

    cleaned = unescape(cleaned).replace('\xa0', ' ')
    cleaned = _LEFTOVER_ENTITY.sub('', cleaned)

    cleaned = re.sub(r'\t+', '\t', cleaned)
    cleaned = re.sub(r'[ \t]*\n[ \t]*', '\n', cleaned)
    cleaned = re.sub(r'\n{3,}', '\n\n', cleaned)
    return cleaned.strip()


def split_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in text.split('\n') if line.strip()]
