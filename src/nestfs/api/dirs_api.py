"""
Directory operations for the Nested Archive File System.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Callable, Iterator, List, Optional, Tuple

from nestfs.core.base_view import Entry
from nestfs.core.errors import NestFSError
from nestfs.core.logging import debug_print


class DirsAPI:
    """
    NESTFS Public API: Directory Operations. This class is exposed as fs.dirs on NestFS.
    This class is not meant to be used directly, but through NestFS.
    """

    def __init__(self, nest_fs):
        self._fs = nest_fs

    def read_dir(self, path: str) -> List[Entry]:
        """
        List a directory or archive. See NestFS.read_dir.
        """
        return self._fs.read_dir(path)

    def list_dir(self, path: str) -> List[str]:
        """
        List contents of a directory or archive.

        Args:
            path: Path to list

        Returns:
            List of names of files and subdirectories
        """
        return [entry.name for entry in self._fs.read_dir(path)]

    def is_dir(self, path: str) -> bool:
        """
        Check if a path is a directory (physical or archive).
        Archives that cannot be opened are not directories.
        """
        try:
            with self._fs.open(path) as handle:
                return handle.is_dir()
        except OSError as e:
            debug_print(f"[DirsAPI.is_dir] {path}: {e}", level=2)
            return False

    def exists(self, path: str) -> bool:
        """
        Check if a directory exists (physical or archive).
        """
        return self.is_dir(path)

    def walk(self, path: str = ".",
             onerror: Optional[Callable[[NestFSError], None]] = None,
             followlinks: bool = False) -> Iterator[Tuple[str, List[str], List[str]]]:
        """
        Generator yielding (root, dirs, files) tuples for directory tree.
        Archives are reported in dirs and walked into.

        Args:
            path: Starting path for walk
            onerror: Called with the error when a directory cannot be listed;
                without it the error propagates
            followlinks: Descend into symbolic links to directories, as
                os.walk does. A link to an ancestor then loops.

        Returns:
            Generator yielding (root, dirs, files) tuples
        """
        try:
            entries = self._fs.read_dir(path)
        except NestFSError as e:
            if onerror is None:
                raise
            debug_print(f"[DirsAPI.walk] Skipping {path}: {e}", level=1)
            onerror(e)
            return
        dirs = [entry.name for entry in entries if entry.is_dir()]
        files = [entry.name for entry in entries if not entry.is_dir()]
        links = {entry.name for entry in entries if (entry.meta or {}).get("link")}
        yield path, dirs, files
        for dir_name in dirs:
            if dir_name in links and not followlinks:
                continue
            dir_path = dir_name if path in (".", "") else f"{path.rstrip('/')}/{dir_name}"
            yield from self.walk(dir_path, onerror, followlinks)
