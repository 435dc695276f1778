"""
Unit tests for content classification and the archive handler registry.

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
from nestfs.core.base_view import ArchiveView
from nestfs.core.handler_manager import HandlerManager
from nestfs.core.kinds import PREFIX_SIZE, Kind, classify
from nestfs.handlers.zip_handler import ZipHandler


def test_prefix_size():
    assert PREFIX_SIZE == 261


@pytest.mark.parametrize("head", [
    b"PK\x03\x04rest of a local file header",
    b"PK\x05\x06" + b"\x00" * 18,
    b"PK\x07\x08spanned",
])
def test_zip_signatures(head):
    assert classify(head) is Kind.ZIP
    assert classify(head).is_archive


def test_real_zip_classifies_as_zip():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w') as zf:
        zf.writestr("a.txt", "a")
    assert classify(buf.getvalue()[:PREFIX_SIZE]) is Kind.ZIP


def test_empty_zip_classifies_as_zip():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w'):
        pass
    assert classify(buf.getvalue()) is Kind.ZIP


PNG_HEAD = (b"\x89PNG\r\n\x1a\n"
            b"\x00\x00\x00\rIHDR" + b"\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00" + b"\x00" * 4
            + b"\x00\x00\x00\x00IDAT")


@pytest.mark.parametrize("head,kind", [
    (b"\xff\xd8\xff\xe0\x00\x10JFIF", Kind.JPEG),
    (PNG_HEAD, Kind.PNG),
    (b"GIF89a\x01\x00", Kind.GIF),
    (b"%PDF-1.7", Kind.PDF),
    (b"\x1f\x8b\x08\x00", Kind.GZIP),
    (b"hello world", Kind.UNKNOWN),
])
def test_other_kinds_are_not_archives(head, kind):
    assert classify(head) is kind
    assert not kind.is_archive


def make_docx():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w', zipfile.ZIP_STORED) as zf:
        zf.writestr("[Content_Types].xml", '<?xml version="1.0"?><Types/>')
        zf.writestr("word/document.xml", "<w:document/>")
    return buf.getvalue()


def test_zip_based_documents_are_not_archives():
    data = make_docx()
    assert data[:4] == b"PK\x03\x04"
    kind = classify(data[:PREFIX_SIZE])
    assert kind is Kind.DOCX
    assert not kind.is_archive


@pytest.mark.parametrize("head", [b"", b"P", b"PK", b"PK\x03", b"\xff\xd8"])
def test_short_prefix_is_unknown(head):
    assert classify(head) is Kind.UNKNOWN


def test_bytes_past_prefix_are_ignored():
    assert classify(b"x" * PREFIX_SIZE + b"PK\x03\x04") is Kind.UNKNOWN


def test_every_archive_kind_has_a_handler():
    for kind in Kind:
        if kind.is_archive:
            assert HandlerManager.get_handler(kind) is not None, kind
    assert HandlerManager.get_handler(Kind.ZIP) is ZipHandler
    assert HandlerManager.get_handler(Kind.UNKNOWN) is None


def test_archive_views_register_on_definition():
    class GzipView(ArchiveView):
        @classmethod
        def get_supported_kinds(cls):
            return {Kind.GZIP}

        def _open(self):
            pass

        def open(self, name):
            raise FileNotFoundError(name)

        def read_dir(self, name):
            return []

    try:
        assert HandlerManager.get_handler(Kind.GZIP) is GzipView
        assert Kind.GZIP in HandlerManager.get_supported_kinds()
    finally:
        HandlerManager.deregister_handler(Kind.GZIP)
    assert HandlerManager.get_handler(Kind.GZIP) is None
