"""
Unit tests for the NESTFS Zip handler.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""
import io
import os
import sys
import zipfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from nestfs import MemoryStore, NestFS
from nestfs.core.errors import ArchiveOpenFailed, SourceNotSeekable
from nestfs.core.handles import DirHandle, FileHandle
from nestfs.core.utils import PathIndex
from nestfs.handlers import zip_handler
from nestfs.handlers.zip_handler import ZipHandler, ZipMemberHandle


def make_zip(files, compression=zipfile.ZIP_DEFLATED):
    """Build ZIP archive bytes holding the given files."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w', compression) as zip_file:
        for name, content in files.items():
            zip_file.writestr(name, content)
    return buf.getvalue()


def open_zip(data, name="test.zip", seekable=True):
    store = MemoryStore({name: data}, seekable=seekable)
    source = store.open(name)
    return ZipHandler(source, source.size, name=name)


@pytest.mark.parametrize("files", [
    {"a.txt": b"", "b.txt": b"x", "c.txt": b"A" * 4096},
    {"d.txt": os.urandom(64 * 1024)},
])
def test_members_are_decompressed(files):
    with open_zip(make_zip(files)) as view:
        for name, content in files.items():
            with view.open(name) as f:
                assert isinstance(f, FileHandle)
                assert f.read() == content
                assert f.size == len(content)


def test_member_handles_are_seekable():
    with open_zip(make_zip({"seek.txt": b"0123456789"})) as view:
        with view.open("seek.txt") as f:
            assert f.seekable()
            f.seek(5)
            assert f.tell() == 5
            assert f.read(2) == b"56"
            f.seek(-1, io.SEEK_END)
            assert f.read() == b"9"


def test_implicit_directories_are_synthesized():
    with open_zip(make_zip({"x/y/z.txt": b"z"})) as view:
        [x] = view.read_dir(".")
        assert x.name == "x" and x.is_dir()
        [y] = view.read_dir("x")
        assert y.name == "y" and y.is_dir()
        [z] = view.read_dir("x/y")
        assert z.name == "z.txt" and not z.is_dir() and z.size == 1
        assert isinstance(view.open("x/y"), DirHandle)


def test_explicit_directory_entries():
    with open_zip(make_zip({"d/x.txt": b"x", "d/": b"", "empty/": b""})) as view:
        assert [e.name for e in view.read_dir(".")] == ["d", "empty"]
        assert view.read_dir("empty") == []
        with view.open("d") as d:
            assert d.is_dir()
            assert [e.name for e in d.read_dir()] == ["x.txt"]


def test_root_entry_is_named_after_archive():
    with open_zip(make_zip({"a.txt": b"a"}), name="photos.zip") as view:
        with view.open(".") as root:
            info = root.stat()
            assert info.name == "photos.zip"
            assert info.is_dir()


def test_missing_member_and_not_a_directory():
    with open_zip(make_zip({"a.txt": b"a"})) as view:
        with pytest.raises(FileNotFoundError):
            view.open("b.txt")
        with pytest.raises(NotADirectoryError):
            view.read_dir("a.txt")
        with pytest.raises(FileNotFoundError):
            view.open("../a.txt")


def test_members_escaping_the_root_are_skipped():
    with open_zip(make_zip({"../evil.txt": b"no", "/abs/ok.txt": b"ok", "good.txt": b"g"})) as view:
        assert [e.name for e in view.read_dir(".")] == ["abs", "good.txt"]
        with view.open("abs/ok.txt") as f:
            assert f.read() == b"ok"


def test_conflicting_members_do_not_break_the_index():
    with open_zip(make_zip({"a": b"file", "a/b": b"nested"})) as view:
        [a] = view.read_dir(".")
        assert a.name == "a" and not a.is_dir()
        with view.open("a") as f:
            assert f.read() == b"file"


def test_listing_survives_close_but_reading_does_not():
    view = open_zip(make_zip({"d/a.txt": b"a"}))
    source = view.source
    view.close()
    assert source.closed
    assert [e.name for e in view.read_dir("d")] == ["a.txt"]
    assert view.stat("d/a.txt").size == 1
    with pytest.raises(ValueError):
        view.open("d/a.txt")


def test_multibyte_member_names():
    with open_zip(make_zip({"にほんご/ファイル.txt": "中身".encode("utf-8")})) as view:
        [d] = view.read_dir(".")
        assert d.name == "にほんご"
        with view.open("にほんご/ファイル.txt") as f:
            assert f.read().decode("utf-8") == "中身"


def test_invalid_archive_raises_archive_open_failed():
    with pytest.raises(ArchiveOpenFailed) as exc_info:
        open_zip(b"PK\x03\x04" + b"\x00" * 100, name="broken.zip")
    assert exc_info.value.segment == "broken.zip"


def test_non_seekable_source_raises():
    with pytest.raises(SourceNotSeekable):
        open_zip(make_zip({"a.txt": b"a"}), seekable=False)


def test_members_stream_until_detached():
    content = os.urandom(32 * 1024)
    with open_zip(make_zip({"big.bin": content})) as view:
        f = view.open("big.bin")
        assert isinstance(f, ZipMemberHandle)
        assert f.read(16) == content[:16]
        detached = f.detach()
        assert f.closed
    # The detached handle outlives the view
    assert detached.read() == content[16:]
    detached.seek(0)
    assert detached.read(16) == content[:16]


def test_stat_answers_from_the_index():
    with open_zip(make_zip({"d/a.txt": b"abc"}), name="s.zip") as view:
        assert view.stat("d").is_dir()
        info = view.stat("d/a.txt")
        assert info.name == "a.txt" and info.size == 3 and not info.is_dir()
        assert view.stat(".").name == "s.zip"
        with pytest.raises(FileNotFoundError):
            view.stat("d/b.txt")


def test_resolution_decompresses_each_member_once(monkeypatch):
    detached = []
    original_detach = ZipMemberHandle.detach

    def recording_detach(self):
        detached.append(self.name)
        return original_detach(self)

    monkeypatch.setattr(ZipMemberHandle, "detach", recording_detach)
    inner = make_zip({"x": b"x" * 1000})
    outer = make_zip({"i.zip": inner, "big1": os.urandom(256 * 1024), "big2": b"\x00" * (1 << 20)})
    fs = NestFS(MemoryStore({"o.zip": outer}))

    with fs.open("o.zip/i.zip/x") as f:
        assert f.read() == b"x" * 1000
    assert detached == ["i.zip", "x"]

    del detached[:]
    entries = {e.name: e.is_dir() for e in fs.read_dir("o.zip")}
    assert entries == {"big1": False, "big2": False, "i.zip": True}
    assert detached == []


def test_corrupt_member_fails_only_when_fully_read():
    data = bytearray(make_zip({"a.txt": b"A" * 1000}, compression=zipfile.ZIP_STORED))
    # Damage the stored content so the CRC no longer matches
    data[500] ^= 0xFF
    with open_zip(bytes(data)) as view:
        with view.open("a.txt") as f:
            assert f.read(16) == b"A" * 16
        with pytest.raises(IOError):
            view.open("a.txt").detach()


def test_index_failure_closes_the_archive(monkeypatch):
    data = make_zip({"a.txt": b"a"})
    store = MemoryStore({"t.zip": data})
    source = store.open("t.zip")
    opened = []

    class RecordingZipFile(zipfile.ZipFile):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            opened.append(self)

    def failing_add_file(self, *args, **kwargs):
        raise ValueError("index failure")

    monkeypatch.setattr(zip_handler.zipfile, "ZipFile", RecordingZipFile)
    monkeypatch.setattr(PathIndex, "add_file", failing_add_file)
    with pytest.raises(ValueError):
        ZipHandler(source, source.size, name="t.zip")
    [zip_file] = opened
    assert zip_file.fp is None
    assert source.closed
