"""
File operations for the Nested Archive File System.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Any, Dict, Union

from nestfs.core.base_view import Entry
from nestfs.core.handles import Handle
from nestfs.core.logging import debug_print


class FilesAPI:
    """
    NESTFS Public API: File Operations. This class is exposed as fs.files on NestFS.
    This class is not meant to be used directly, but through NestFS.
    """

    def __init__(self, nest_fs):
        self._fs = nest_fs

    def open(self, path: str) -> Handle:
        """
        Open a file or directory for reading. See NestFS.open.
        """
        return self._fs.open(path)

    def read(self, path: str, binary: bool = False, encoding: str = "utf-8") -> Union[str, bytes]:
        """
        Read entire file contents.

        Args:
            path: Path to the file, possibly inside (nested) archives
            binary: If True, return bytes instead of string
            encoding: Text encoding used when binary is False

        Returns:
            File contents as string or bytes

        Raises:
            IsADirectoryError: If the path is a directory or an archive
        """
        with self._fs.open(path) as f:
            data = f.read()
        return data if binary else data.decode(encoding)

    def stat(self, path: str) -> Entry:
        """
        Get the entry describing a path. Archive files report is_dir() True.
        """
        with self._fs.open(path) as f:
            return f.stat()

    def get_info(self, path: str) -> Dict[str, Any]:
        """
        Get information about a file.

        Returns:
            Dictionary with name, size, modified and is_dir
        """
        info = self.stat(path)
        return {
            "name": info.name,
            "size": info.size,
            "modified": info.modified,
            "is_dir": info.is_dir(),
        }

    def exists(self, path: str) -> bool:
        """
        Check if a path resolves to anything (file, directory or archive).
        Like os.path.exists, any error while resolving means False.
        """
        try:
            with self._fs.open(path):
                return True
        except OSError as e:
            debug_print(f"[FilesAPI.exists] {path}: {e}", level=2)
            return False
