"""
NestFS: Nested Archive File System

A Python library that treats archive files as directories wherever they occur
in a path, recursively, so archives inside archives can be browsed like
ordinary directory trees.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT

Public API:
    - NestFS: Main entry point. Provides open/read_dir and the .files, .dirs, .config namespaces.
    - OSStore, MemoryStore: Backing views to resolve paths against.

Example usage:
    from nestfs import NestFS
    fs = NestFS('testdata')
    with fs.open('dirinzip.zip/z/cat1744.jpg') as f:
        data = f.read()
    for entry in fs.read_dir('.'):
        print(entry.name, entry.is_dir())
"""

import nestfs.handlers
from .nestfs import NestFS
from .core.base_view import Entry, FilesystemView, ArchiveView, VirtualDirEntry
from .core.errors import (
    NestFSError, SegmentNotFound, StatFailed, ClassifyFailed, NotADirectory,
    ArchiveOpenFailed, SourceNotSeekable,
)
from .core.kinds import Kind, classify
from .stores.os_store import OSStore
from .stores.memory_store import MemoryStore

__version__ = '0.1.0'
__all__ = [
    "NestFS", "Entry", "FilesystemView", "ArchiveView", "VirtualDirEntry",
    "NestFSError", "SegmentNotFound", "StatFailed", "ClassifyFailed", "NotADirectory",
    "ArchiveOpenFailed", "SourceNotSeekable", "Kind", "classify", "OSStore", "MemoryStore",
]
