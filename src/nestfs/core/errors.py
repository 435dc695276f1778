"""
Error types for the Nested Archive File System.

Every error raised while resolving a path records the segment that failed,
so callers can tell which component of a multi-archive path was the problem.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Optional


class NestFSError(OSError):
    """Base class for all resolution errors."""

    def __init__(self, message: str, segment: Optional[str] = None):
        super().__init__(message)
        self.segment = segment


class SegmentNotFound(NestFSError, FileNotFoundError):
    """The view could not open a path component."""


class StatFailed(NestFSError):
    """A handle was opened but its metadata could not be read."""


class ClassifyFailed(NestFSError):
    """The classification prefix of a resource could not be read."""


class NotADirectory(NestFSError, NotADirectoryError):
    """A plain file was asked to carry trailing components or to be listed."""


class ArchiveOpenFailed(NestFSError):
    """A resource classified as an archive could not be opened as one."""


class SourceNotSeekable(ArchiveOpenFailed):
    """The store handed out a stream without random access."""
