"""
Directory listing for the Nested Archive File System.
Lists a directory of any view and reports archive files as directories.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import List, Optional

from .base_view import Entry, FilesystemView, VirtualDirEntry
from .errors import NestFSError, NotADirectory, SegmentNotFound, StatFailed
from .global_config import GlobalConfig
from .logging import debug_print
from .path_resolver import classify_resource


class DirectoryLister:
    """
    Lists directories, wrapping archive files in VirtualDirEntry.

    Args:
        strict: If True, a failure to classify one entry fails the listing.
            Defaults to the ``strict_listing`` setting at listing time.
    """

    def __init__(self, strict: Optional[bool] = None):
        self._strict = strict

    @property
    def strict(self) -> bool:
        if self._strict is None:
            return GlobalConfig.get_strict_listing()
        return self._strict

    def list(self, view: FilesystemView, name: str) -> List[Entry]:
        try:
            entries = view.read_dir(name)
        except NotADirectoryError as e:
            raise NotADirectory(f"could not read {name} as directory: {e}", segment=name) from e
        except FileNotFoundError as e:
            raise SegmentNotFound(f"could not read directory {name}: {e}", segment=name) from e
        except OSError as e:
            debug_print(f"Exception in DirectoryLister.list: {e}", level=1, exc=e)
            raise StatFailed(f"could not read directory {name}: {e}", segment=name) from e

        strict = self.strict
        result = []
        for entry in entries:
            if entry.is_dir():
                result.append(entry)
                continue
            child = entry.name if name == "." else f"{name}/{entry.name}"
            try:
                kind = classify_resource(view, child)
            except NestFSError as e:
                if strict:
                    raise
                debug_print(f"[DirectoryLister] Leaving {child} unclassified: {e}", level=1)
                result.append(entry)
                continue
            result.append(VirtualDirEntry(entry) if kind.is_archive else entry)
        return result
