"""
Path resolution for the Nested Archive File System.
Walks a path segment by segment, opening every archive crossed on the way
as a nested view, until the final target is located.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from contextlib import ExitStack
from typing import NamedTuple, Tuple
import posixpath

from .base_view import ArchiveView, FilesystemView
from .errors import ArchiveOpenFailed, ClassifyFailed, NotADirectory, SegmentNotFound, StatFailed
from .handles import Handle
from .handler_manager import HandlerManager
from .kinds import PREFIX_SIZE, Kind, classify
from .logging import debug_print

PathSegments = Tuple[str, ...]


def clean_path(path: str) -> str:
    """
    Lexically clean a slash-separated path.

    Repeated separators collapse, "." and ".." are resolved and trailing
    separators are dropped. Paths are relative to the root view, so a leading
    separator is dropped too. The empty path cleans to ".".
    """
    path = posixpath.normpath(path or ".").lstrip("/")
    return path or "."


def split_path(name: str) -> PathSegments:
    """
    Split a cleaned path into its components, root first.

    Args:
        name: Path already passed through clean_path

    Returns:
        Non-empty tuple of non-empty components; "." gives (".",)
    """
    if name == ".":
        return (".",)
    return tuple(name.split("/"))


def open_segment(view: FilesystemView, name: str) -> Handle:
    try:
        return view.open(name)
    except OSError as e:
        debug_print(f"Exception in open_segment: {e}", level=1, exc=e)
        raise SegmentNotFound(f"could not open {name}: {e}", segment=name) from e


def open_detached(view: FilesystemView, name: str) -> Handle:
    """Open ``name`` with a handle that stays usable once ``view`` is closed."""
    handle = open_segment(view, name)
    try:
        return handle.detach()
    except OSError as e:
        debug_print(f"Exception in open_detached: {e}", level=1, exc=e)
        raise SegmentNotFound(f"could not open {name}: {e}", segment=name) from e


def is_directory(view: FilesystemView, name: str) -> bool:
    """Stat ``name`` in ``view`` without reading its content."""
    try:
        info = view.stat(name)
    except StatFailed:
        raise
    except OSError as e:
        debug_print(f"Exception in is_directory: {e}", level=1, exc=e)
        raise SegmentNotFound(f"could not open {name}: {e}", segment=name) from e
    return info.is_dir()


def read_prefix(handle: Handle, size: int = PREFIX_SIZE) -> bytes:
    """Read up to ``size`` leading bytes, stopping early only at end of file."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = handle.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def classify_resource(view: FilesystemView, name: str) -> Kind:
    """Classify ``name`` in ``view`` by content; the handle it reads is always closed."""
    with open_segment(view, name) as handle:
        try:
            head = read_prefix(handle)
        except (OSError, ValueError) as e:
            debug_print(f"Exception in classify_resource: {e}", level=1, exc=e)
            raise ClassifyFailed(f"could not find kind {name}: {e}", segment=name) from e
    kind = classify(head)
    debug_print(f"[classify_resource] {name}: {kind.value}", level=3)
    return kind


def open_archive(view: FilesystemView, name: str, kind: Kind) -> ArchiveView:
    """
    Open ``name`` as an archive view of the given kind.
    The returned view owns the source handle; on failure the handle is closed.
    """
    handler_cls = HandlerManager.get_handler(kind)
    if handler_cls is None:
        raise ArchiveOpenFailed(f"no archive handler registered for {kind.value}", segment=name)
    source = open_detached(view, name)
    try:
        try:
            size = source.stat().size
        except (OSError, ValueError) as e:
            raise StatFailed(f"could not get stat {name}: {e}", segment=name) from e
        archive = handler_cls(source, size, name=posixpath.basename(name))
    except Exception:
        source.close()
        raise
    debug_print(f"[open_archive] Opened {name} as {kind.value}", level=2)
    return archive


class Target(NamedTuple):
    """Final location of a resolved path."""
    view: FilesystemView
    name: str
    is_dir: bool


class PathResolver:
    """
    Resolves paths that may cross any number of archive boundaries.

    Each archive crossed is opened as a new view and registered on the
    caller's ExitStack, so it lives exactly as long as the call that needed it.
    Note that a path ending at an archive file resolves to the archive's root
    directory, never to the archive bytes.
    """

    def resolve(self, root: FilesystemView, path: str, stack: ExitStack) -> Target:
        """
        Clean and split ``path`` and locate it starting from ``root``.
        """
        segments = split_path(clean_path(path))
        debug_print(f"[PathResolver.resolve] path={path}, segments={segments}", level=2)
        return self.locate(root, segments, stack)

    def locate(self, view: FilesystemView, segments: PathSegments, stack: ExitStack) -> Target:
        """
        Locate ``segments`` inside ``view``.

        Args:
            view: View the first segment lives in
            segments: Non-empty remaining components
            stack: Receives every archive view opened on the way

        Returns:
            Target naming the view and the name inside it
        """
        head = segments[0]
        if len(segments) == 1:
            if is_directory(view, head):
                return Target(view, head, True)
            kind = classify_resource(view, head)
            if kind.is_archive:
                archive = stack.enter_context(open_archive(view, head, kind))
                return Target(archive, ".", True)
            return Target(view, head, False)

        # Plain directories are folded into the next segment
        if is_directory(view, head):
            merged = (f"{head}/{segments[1]}",) + segments[2:]
            return self.locate(view, merged, stack)

        kind = classify_resource(view, head)
        if not kind.is_archive:
            raise NotADirectory(f"could not open {head} as directory", segment=head)
        archive = stack.enter_context(open_archive(view, head, kind))
        return self.locate(archive, segments[1:], stack)
