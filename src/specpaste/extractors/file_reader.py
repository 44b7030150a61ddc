"""
Text file acquisition.
"""
from pathlib import Path
from typing import Union

from ..errors import TextAcquisitionError
from ..logger import get_logger

logger = get_logger(__name__)

TEXT_SUFFIXES = {".txt", ".text", ".csv", ".tsv", ".md", ".html", ".htm"}


def read_text_file(path: Union[str, Path]) -> str:
    """
    Read a spec sheet saved as text (or HTML) for parsing.

    Undecodable bytes are replaced rather than rejected.

    Raises:
        TextAcquisitionError: Missing, unreadable or non-text file
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise TextAcquisitionError(f"File not found: {file_path}", {"path": str(file_path)})
    if file_path.suffix and file_path.suffix.lower() not in TEXT_SUFFIXES:
        raise TextAcquisitionError(
            f"Unsupported file type: {file_path.suffix}",
            {"path": str(file_path), "supported": sorted(TEXT_SUFFIXES)},
        )

    try:
        text = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.error(f"Failed to read {file_path}: {e}")
        raise TextAcquisitionError(f"Failed to read file: {e}", {"path": str(file_path)}) from e

    logger.debug(f"Read {len(text)} chars from {file_path.name}")
    return text
