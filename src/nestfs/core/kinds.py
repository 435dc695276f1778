"""
Content classification for the Nested Archive File System.

Resources are classified from the first bytes of their content, never from
their name or extension. Only a bounded prefix is ever inspected; matching
is done by the ``filetype`` package.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from enum import Enum
from typing import Dict

import filetype

# Number of leading bytes read for classification
PREFIX_SIZE = 261


class Kind(Enum):
    """Recognized content kinds, valued by the extension filetype reports."""
    UNKNOWN = "unknown"
    OTHER = "other"
    ZIP = "zip"
    JPEG = "jpg"
    PNG = "png"
    GIF = "gif"
    PDF = "pdf"
    GZIP = "gz"
    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"
    EPUB = "epub"

    @property
    def is_archive(self) -> bool:
        """True for container kinds that are browsed as directories."""
        return self in ARCHIVE_KINDS


# ZIP-based documents are matched before plain ZIP and stay files
ARCHIVE_KINDS = frozenset({Kind.ZIP})

_BY_EXTENSION: Dict[str, Kind] = {kind.value: kind for kind in Kind}


def classify(head: bytes) -> Kind:
    """
    Classify content from its leading bytes.

    Args:
        head: Up to PREFIX_SIZE bytes from the start of a resource (extra bytes are ignored)

    Returns:
        The matching Kind; Kind.OTHER for types filetype knows but nestfs does
        not model, Kind.UNKNOWN when nothing matches. Short input never raises.
    """
    guess = filetype.guess(bytes(head[:PREFIX_SIZE]))
    if guess is None:
        return Kind.UNKNOWN
    return _BY_EXTENSION.get(guess.extension, Kind.OTHER)
