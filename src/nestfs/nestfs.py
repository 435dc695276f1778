"""
NestFS: Nested Archive File System

A Python library that treats archive files as directories wherever they occur
in a path, so that a single path can reach into archives nested in archives.

This module combines the resolver, the directory lister and the API
namespaces into the NestFS class.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from contextlib import ExitStack
from typing import List, Optional, Union
import os

from .core.base_view import Entry, FilesystemView
from .core.directory_lister import DirectoryLister
from .core.errors import NotADirectory
from .core.handles import Handle
from .core.logging import debug_print
from .core.path_resolver import PathResolver, open_detached
from .stores.os_store import OSStore

# API classes for public operations
from .api.files_api import FilesAPI
from .api.dirs_api import DirsAPI
from .api.config_api import ConfigAPI


class NestFS:
    """
    Main entry point for the Nested Archive File System.

    Attributes:
        root: The backing view every path is resolved against
        files: File operations (open, read, stat, exists, ...)
        dirs: Directory operations (read_dir, list_dir, walk, ...)
        config: Configuration

    Example:
        fs = NestFS("testdata")
        with fs.open("outer.zip/inner.zip/photo.jpg") as f:
            data = f.read()
        fs.read_dir("outer.zip")   # inner.zip is reported as a directory
    """

    def __init__(self, root: Optional[Union[str, "os.PathLike", FilesystemView]] = None):
        if root is None:
            root = OSStore(os.getcwd())
        elif not isinstance(root, FilesystemView):
            root = OSStore(root)
        self.root = root
        self._path_resolver = PathResolver()
        self._lister = DirectoryLister()
        self.files = FilesAPI(self)
        self.dirs = DirsAPI(self)
        self.config = ConfigAPI()

    def open(self, path: str) -> Handle:
        """
        Open a path for reading.

        Returns a DirHandle for directories, a FileHandle for plain files, and
        for an archive file a DirHandle on the archive's root directory, not a
        handle on the archive bytes. Archive views opened on the way are closed
        before returning; the handle does not depend on them.

        Raises:
            SegmentNotFound, StatFailed, ClassifyFailed, NotADirectory,
            ArchiveOpenFailed, SourceNotSeekable
        """
        with ExitStack() as stack:
            target = self._path_resolver.resolve(self.root, path, stack)
            debug_print(f"[NestFS.open] {path} -> {target.name} in {target.view!r}", level=2)
            return open_detached(target.view, target.name)

    def read_dir(self, path: str) -> List[Entry]:
        """
        List a directory, reporting archive files as directories.

        Raises:
            NotADirectory: If the path resolves to a plain file
        """
        with ExitStack() as stack:
            target = self._path_resolver.resolve(self.root, path, stack)
            if not target.is_dir:
                raise NotADirectory(f"could not read {target.name} as directory", segment=target.name)
            debug_print(f"[NestFS.read_dir] {path} -> {target.name} in {target.view!r}", level=2)
            return self._lister.list(target.view, target.name)

    def __repr__(self):
        return f"NestFS({self.root!r})"
