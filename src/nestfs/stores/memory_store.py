"""
Backing view over an in-memory mapping of paths to bytes.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import io
import time
from typing import Dict, List, Mapping, Optional

from nestfs.core.base_view import Entry, FilesystemView
from nestfs.core.handles import DirHandle, FileHandle, Handle
from nestfs.core.logging import debug_print
from nestfs.core.utils import PathIndex, normalize_member_name


class ForwardOnlyStream(io.BytesIO):
    """Byte stream that refuses random access, like a pipe or socket."""

    def seekable(self):
        return False

    def seek(self, offset, whence=io.SEEK_SET):
        raise io.UnsupportedOperation("seek")


class MemoryStore(FilesystemView):
    """
    View over ``{"dir/file.txt": b"..."}``. Keys ending in "/" declare empty
    directories; parent directories are implied by the file paths.

    Args:
        files: Mapping of slash-separated paths to file contents
        seekable: If False, file handles cannot seek (archives inside cannot be opened)
        modified: Timestamp reported for every entry (defaults to now)
    """

    def __init__(self, files: Mapping[str, bytes], seekable: bool = True, modified: Optional[float] = None):
        self.seekable = seekable
        self.modified = time.time() if modified is None else modified
        self._data: Dict[str, bytes] = {}
        self._index = PathIndex(root_modified=self.modified)
        for key, data in files.items():
            name = normalize_member_name(key)
            if name is None:
                debug_print(f"[MemoryStore] Skipping invalid key: {key!r}", level=1)
                continue
            if key.endswith("/"):
                self._index.add_dir(name, self.modified)
            else:
                self._index.add_file(name, len(data), self.modified)
                self._data[name] = bytes(data)

    def open(self, name: str) -> Handle:
        entry = self._index.lookup(name)
        if entry.is_dir():
            return DirHandle(name, entry, self)
        data = self._data[name]
        stream = io.BytesIO(data) if self.seekable else ForwardOnlyStream(data)
        return FileHandle(name, entry, stream)

    def stat(self, name: str) -> Entry:
        return self._index.lookup(name)

    def read_dir(self, name: str) -> List[Entry]:
        return self._index.children(name)
