"""
Text acquisition: product pages and text files.
"""

from .file_reader import read_text_file
from .page_fetcher import PageFetcher, extract_structured_data

__all__ = [
    'PageFetcher',
    'extract_structured_data',
    'read_text_file',
]
