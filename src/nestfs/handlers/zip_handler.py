"""
ZIP archive handler for the Nested Archive File System.
Provides a read-only view over the contents of a ZIP archive.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import io
import time
import zipfile
import zlib
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, List, Set

from nestfs.core.base_view import ArchiveView, Entry
from nestfs.core.errors import ArchiveOpenFailed, SourceNotSeekable
from nestfs.core.handles import DirHandle, FileHandle, Handle
from nestfs.core.kinds import Kind
from nestfs.core.logging import debug_print
from nestfs.core.utils import PathIndex, normalize_member_name

# RuntimeError covers encrypted members and unsupported compression
_MEMBER_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError)


def _zip_timestamp(info: zipfile.ZipInfo) -> float:
    # Convert DOS timestamp to Unix timestamp
    try:
        return time.mktime(datetime(*info.date_time).timetuple())
    except (ValueError, OverflowError):
        return 0.0


class ZipMemberHandle(FileHandle):
    """
    Streaming handle over one ZIP member, decompressing only what is read.
    It reads through the archive, so it is only usable while the view is open;
    detach() decompresses the member into memory.
    """

    def __init__(self, name: str, info: Entry, stream, archive_name: str):
        super().__init__(name, info, stream)
        self._archive_name = archive_name

    @contextmanager
    def _reading(self):
        try:
            yield
        except _MEMBER_ERRORS as e:
            debug_print(f"Exception in ZipMemberHandle: {e}", level=1, exc=e)
            raise IOError(f"Error reading {self.name} from {self._archive_name}: {e}") from e

    def read(self, size: int = -1) -> bytes:
        with self._reading():
            return super().read(size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        with self._reading():
            return super().seek(offset, whence)

    def detach(self) -> FileHandle:
        """Decompress the unread rest of the member and close this handle."""
        try:
            data = self.read()
        finally:
            self.close()
        return FileHandle(self.name, self._info, io.BytesIO(data))


class ZipHandler(ArchiveView):
    """
    View over a ZIP archive.

    The member index is read once from the central directory. Stat and
    listing work from that index and keep working after close(). Opening a
    member streams it out of the archive, so classifying a member only
    decompresses its first bytes.
    """

    @classmethod
    def get_supported_kinds(cls) -> Set[Kind]:
        return {Kind.ZIP}

    def _open(self) -> None:
        self.zip_file = None
        self._members: Dict[str, zipfile.ZipInfo] = {}
        if not self.source.seekable():
            raise SourceNotSeekable(f"could not open {self.name} as zip: source is not seekable", segment=self.name)
        try:
            self.zip_file = zipfile.ZipFile(self.source, "r")
        except (zipfile.BadZipFile, zlib.error, ValueError, OSError) as e:
            debug_print(f"Exception in ZipHandler._open: {e}", level=1, exc=e)
            raise ArchiveOpenFailed(f"could not open {self.name} as zip: {e}", segment=self.name) from e
        try:
            self._build_index()
        except Exception:
            self.close()
            raise
        debug_print(f"[ZipHandler._open] {self.name}: {len(self._members)} files", level=2)

    def _build_index(self) -> None:
        modified = self.source.stat().modified
        self._index = PathIndex(root_name=self.name, root_modified=modified)
        for info in self.zip_file.infolist():
            name = normalize_member_name(info.filename)
            if name is None:
                debug_print(f"[ZipHandler] Skipping member outside archive root: {info.filename!r}", level=1)
                continue
            meta = {"compress_type": info.compress_type, "crc": info.CRC, "compress_size": info.compress_size}
            try:
                if info.is_dir():
                    self._index.add_dir(name, _zip_timestamp(info), meta)
                else:
                    self._index.add_file(name, info.file_size, _zip_timestamp(info), meta)
                    self._members[name] = info
            except OSError as e:
                debug_print(f"[ZipHandler] Skipping conflicting member {info.filename!r}: {e}", level=1)

    def close(self) -> None:
        """Close the ZIP file and the source it was read from."""
        if self.zip_file is not None:
            self.zip_file.close()
            self.zip_file = None
        self.source.close()

    def stat(self, name: str) -> Entry:
        return self._index.lookup(name)

    def open(self, name: str) -> Handle:
        entry = self._index.lookup(name)
        if entry.is_dir():
            return DirHandle(name, entry, self)
        if self.zip_file is None:
            raise ValueError(f"Attempt to read from closed archive {self.name}")
        try:
            stream = self.zip_file.open(self._members[name])
        except _MEMBER_ERRORS as e:
            debug_print(f"Exception in ZipHandler.open: {e}", level=1, exc=e)
            raise IOError(f"Error reading {name} from {self.name}: {e}") from e
        return ZipMemberHandle(name, entry, stream, self.name)

    def read_dir(self, name: str) -> List[Entry]:
        return self._index.children(name)

    def __repr__(self):
        return f"ZipHandler({self.name!r})"
