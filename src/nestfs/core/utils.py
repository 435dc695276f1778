"""
Utility functions for the Nested Archive File System.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import posixpath
from typing import Any, Dict, List, Optional

from .base_view import Entry


def is_valid_name(name: str) -> bool:
    """
    Check that a view-relative name is usable: "." or slash-separated
    components that are neither empty, "." nor "..", without a leading slash.
    """
    if name == ".":
        return True
    if not name or name.startswith("/"):
        return False
    return all(part not in ("", ".", "..") for part in name.split("/"))


def check_name(name: str) -> None:
    """Raise FileNotFoundError for names no view can contain."""
    if not is_valid_name(name):
        raise FileNotFoundError(f"Invalid path: '{name}'")


def normalize_member_name(name: str) -> Optional[str]:
    """
    Normalize a stored member name (archive member, memory key) to a view name.

    Returns:
        The normalized name, or None if the name is empty or escapes the root
    """
    name = name.replace("\\", "/").strip("/")
    if not name:
        return None
    name = posixpath.normpath(name)
    if name == "." or name == ".." or name.startswith("../"):
        return None
    return name


class PathIndex:
    """
    Directory tree built from a flat list of member paths.
    Parent directories that are never listed explicitly are synthesized.
    """

    def __init__(self, root_name: str = ".", root_modified: float = 0.0):
        self._entries: Dict[str, Entry] = {".": Entry(root_name, 0, root_modified, True)}
        self._children: Dict[str, Dict[str, Entry]] = {".": {}}

    def _attach(self, path: str, entry: Entry) -> None:
        parent = posixpath.dirname(path) or "."
        self._ensure_dir(parent)
        self._children[parent][entry.name] = entry
        self._entries[path] = entry

    def _ensure_dir(self, path: str) -> None:
        if path in self._children:
            return
        existing = self._entries.get(path)
        if existing is not None:
            raise NotADirectoryError(f"Not a directory: '{path}'")
        self._children[path] = {}
        self._attach(path, Entry(posixpath.basename(path), 0, 0.0, True))

    def add_dir(self, path: str, modified: float = 0.0, meta: Optional[Dict[str, Any]] = None) -> None:
        if path in self._children:
            # Explicit entry after an implied one: keep the richer metadata
            entry = Entry(posixpath.basename(path), 0, modified, True, meta)
            parent = posixpath.dirname(path) or "."
            self._children[parent][entry.name] = entry
            self._entries[path] = entry
            return
        if path in self._entries:
            raise NotADirectoryError(f"Not a directory: '{path}'")
        self._children[path] = {}
        self._attach(path, Entry(posixpath.basename(path), 0, modified, True, meta))

    def add_file(self, path: str, size: int, modified: float = 0.0, meta: Optional[Dict[str, Any]] = None) -> None:
        if path in self._children:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        self._attach(path, Entry(posixpath.basename(path), size, modified, False, meta))

    def lookup(self, name: str) -> Entry:
        check_name(name)
        try:
            return self._entries[name]
        except KeyError:
            raise FileNotFoundError(f"No such file or directory: '{name}'") from None

    def children(self, name: str) -> List[Entry]:
        entry = self.lookup(name)
        if not entry.is_dir():
            raise NotADirectoryError(f"Not a directory: '{name}'")
        return sorted(self._children[name].values(), key=lambda e: e.name)

    def __contains__(self, name):
        return name in self._entries

    def __len__(self):
        return len(self._entries)
