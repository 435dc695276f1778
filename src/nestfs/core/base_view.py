"""
Base view types for the Nested Archive File System.
Defines the interface every filesystem view implements, plus the directory
entry types shared by all views.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Any, Dict, List, NamedTuple, Optional, Set, TYPE_CHECKING
from abc import ABC, abstractmethod

from .errors import StatFailed

if TYPE_CHECKING:
    from .handles import FileHandle, Handle
    from .kinds import Kind


class Entry(NamedTuple):
    """Information about an entry in a directory of a view."""
    name: str
    size: int
    modified: float
    directory: bool
    meta: Optional[Dict[str, Any]] = None

    def is_dir(self) -> bool:
        return self.directory


class VirtualDirEntry:
    """
    Directory entry wrapper reporting an archive file as a directory.
    Only is_dir() is overridden; everything else comes from the wrapped entry,
    including the store's own ``directory`` flag. Indexing, unpacking and
    ``_replace`` behave as on the wrapped entry, but the wrapper is not an
    instance of Entry itself.
    """
    __slots__ = ("_entry",)

    def __init__(self, entry):
        self._entry = entry

    @property
    def wrapped(self):
        return self._entry

    def is_dir(self) -> bool:
        return True

    def _replace(self, **changes) -> "VirtualDirEntry":
        return VirtualDirEntry(self._entry._replace(**changes))

    def __getattr__(self, key):
        if key == "_entry":
            raise AttributeError(key)
        return getattr(self._entry, key)

    def __getitem__(self, index):
        return self._entry[index]

    def __iter__(self):
        return iter(self._entry)

    def __len__(self):
        return len(self._entry)

    def __eq__(self, other):
        if isinstance(other, VirtualDirEntry):
            return self._entry == other._entry
        return NotImplemented

    def __hash__(self):
        return hash(("virtual", self._entry))

    def __repr__(self):
        return f"VirtualDirEntry({self._entry!r})"


class FilesystemView(ABC):
    """
    A tree of files and directories addressed by slash-separated names
    relative to the view root ("." is the root).

    The resolver only ever talks to this interface, so real directories,
    in-memory stores and archive contents are interchangeable.
    """

    # --- Context management ---
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Release resources held by the view. Views without resources do nothing."""

    @abstractmethod
    def open(self, name: str) -> "Handle":
        """
        Open a file or directory.

        Args:
            name: Slash-separated name relative to the view root

        Returns:
            A FileHandle or DirHandle. It may read through the view; detach()
            gives a handle that outlives it.

        Raises:
            FileNotFoundError: If the name does not exist or is not a valid name
        """

    def stat(self, name: str) -> Entry:
        """
        Describe a file or directory without reading its content.

        The default opens a handle and closes it again; views that keep an
        index of their entries answer from it instead.

        Raises:
            FileNotFoundError: If the name does not exist or is not a valid name
            StatFailed: If the handle was opened but could not describe itself
        """
        with self.open(name) as handle:
            try:
                return handle.stat()
            except (OSError, ValueError) as e:
                raise StatFailed(f"could not get stat {name}: {e}", segment=name) from e

    @abstractmethod
    def read_dir(self, name: str) -> List[Entry]:
        """
        List a directory, sorted by entry name.

        Raises:
            FileNotFoundError: If the name does not exist
            NotADirectoryError: If the name is a file
        """


class ArchiveView(FilesystemView):
    """
    Base class for views decoded from an archive file.
    Subclasses are registered with HandlerManager for the kinds they declare
    as soon as they are defined.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        from nestfs.core.handler_manager import HandlerManager
        # Only concrete subclasses declare their kinds
        if not getattr(cls.get_supported_kinds, "__isabstractmethod__", False):
            for kind in cls.get_supported_kinds():
                HandlerManager.register_handler(kind, cls)

    def __init__(self, source: "FileHandle", size: int, name: str = "."):
        """
        Initialize the archive view.

        Args:
            source: Random-access handle over the archive bytes; the view owns it
            size: Size of the archive in bytes
            name: Name of the archive file, used for the root entry
        """
        self.source = source
        self.size = size
        self.name = name
        self._open()

    @abstractmethod
    def _open(self) -> None:
        """Decode the archive index from self.source."""

    @classmethod
    @abstractmethod
    def get_supported_kinds(cls) -> Set["Kind"]:
        """Content kinds this view can decode."""
