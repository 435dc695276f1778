"""
Backing view over a directory of the real filesystem.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import stat
from typing import List

from nestfs.core.base_view import Entry, FilesystemView
from nestfs.core.handles import DirHandle, FileHandle, Handle
from nestfs.core.logging import debug_print
from nestfs.core.utils import check_name


class OSStore(FilesystemView):
    """
    View rooted at a real directory. Names never leave the root.
    Symbolic links are followed; their entries carry ``meta["link"]``.
    """

    def __init__(self, root: str = "."):
        self.root = os.path.abspath(os.fspath(root))

    def _full_path(self, name: str) -> str:
        check_name(name)
        if name == ".":
            return self.root
        return os.path.join(self.root, *name.split("/"))

    @staticmethod
    def _entry(name: str, st: os.stat_result, is_dir: bool, is_link: bool = False) -> Entry:
        return Entry(
            name=name,
            size=0 if is_dir else st.st_size,
            modified=st.st_mtime,
            directory=is_dir,
            meta={"mode": st.st_mode, "link": is_link},
        )

    def stat(self, name: str) -> Entry:
        path = self._full_path(name)
        st = os.stat(path)
        return self._entry(os.path.basename(path), st, stat.S_ISDIR(st.st_mode), os.path.islink(path))

    def open(self, name: str) -> Handle:
        info = self.stat(name)
        debug_print(f"[OSStore.open] name={name}, is_dir={info.directory}", level=3)
        if info.directory:
            return DirHandle(name, info, self)
        return FileHandle(name, info, open(self._full_path(name), "rb"))

    def read_dir(self, name: str) -> List[Entry]:
        path = self._full_path(name)
        entries = []
        with os.scandir(path) as it:
            for item in it:
                is_dir = item.is_dir()
                try:
                    st = item.stat()
                except FileNotFoundError:
                    # Dangling symlink
                    st = item.stat(follow_symlinks=False)
                entries.append(self._entry(item.name, st, is_dir, item.is_symlink()))
        return sorted(entries, key=lambda e: e.name)

    def __repr__(self):
        return f"OSStore({self.root!r})"
