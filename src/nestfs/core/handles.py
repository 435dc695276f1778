"""
Open handles returned by filesystem views.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import io
from typing import List, Optional

from typing_extensions import Protocol, runtime_checkable

from .base_view import Entry


@runtime_checkable
class ByteSource(Protocol):
    """Binary stream a FileHandle reads from."""

    def read(self, size: int = -1) -> bytes: ...

    def seekable(self) -> bool: ...

    def close(self) -> None: ...


class Handle:
    """
    Base class for open files and directories.
    """

    def __init__(self, name: str, info: Entry):
        self.name = name
        self._info = info
        self._closed = False

    def stat(self) -> Entry:
        """Return the entry describing this handle."""
        if self._closed:
            raise ValueError("I/O operation on closed handle.")
        return self._info

    def is_dir(self) -> bool:
        return self._info.is_dir()

    def detach(self) -> "Handle":
        """
        Return a handle that stays usable after the view that opened it is closed.
        Handles that never depend on their view return themselves.
        """
        return self

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    # Context manager support
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class FileHandle(Handle):
    """
    Readable handle over a regular file's bytes.
    Random access is available when the underlying stream is seekable.
    """

    def __init__(self, name: str, info: Entry, stream: ByteSource):
        super().__init__(name, info)
        self._stream = stream

    @property
    def size(self) -> int:
        return self._info.size

    def _check(self):
        if self._closed:
            raise ValueError("I/O operation on closed file.")

    def read(self, size: int = -1) -> bytes:
        self._check()
        return self._stream.read(size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check()
        if not self._stream.seekable():
            raise io.UnsupportedOperation("seek")
        return self._stream.seek(offset, whence)

    def tell(self) -> int:
        self._check()
        return self._stream.tell()

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def seekable(self) -> bool:
        return not self._closed and self._stream.seekable()

    def flush(self) -> None:
        pass

    def close(self) -> None:
        if self._closed:
            return
        self._stream.close()
        super().close()


class DirHandle(Handle):
    """
    Handle on a directory of a view.
    read_dir() returns the view's own entries, without archive detection.
    """

    def __init__(self, name: str, info: Entry, view):
        super().__init__(name, info)
        self._view = view

    def read_dir(self) -> List[Entry]:
        if self._closed:
            raise ValueError("I/O operation on closed directory.")
        return self._view.read_dir(self.name)

    def read(self, size: Optional[int] = -1) -> bytes:
        raise IsADirectoryError(f"Is a directory: '{self.name}'")
