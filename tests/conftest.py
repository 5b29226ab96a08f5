"""Shared fixtures: build torrent metadata values and files."""

import pytest

from torrent_cleanup.encoder import serialize
from torrent_cleanup.values import VDict, VInt, VList, VString


def _s(text, encoding="utf-8"):
    if isinstance(text, bytes):
        return VString(text)
    return VString.from_text(text, encoding)


def _build_torrent(files=None, *, name="content", length=None, comment=None,
                  encoding=None, segment_encoding="utf-8"):
    """Return a manifest value.

    *files* is a list of path-segment lists (multi-file); pass *length*
    instead for a single-file torrent.
    """
    info = VDict()
    if length is not None:
        info.entries[_s("length")] = VInt(length)
    else:
        info.entries[_s("files")] = VList([
            VDict({
                _s("length"): VInt(0),
                _s("path"): VList([_s(seg, segment_encoding) for seg in segments]),
            })
            for segments in (files or [])
        ])
    info.entries[_s("name")] = _s(name)

    top = VDict()
    if comment is not None:
        top.entries[_s("comment")] = _s(comment)
    if encoding is not None:
        top.entries[_s("encoding")] = _s(encoding)
    top.entries[_s("info")] = info
    return top


@pytest.fixture
def torrent_file(tmp_path):
    """Factory writing a .torrent file built by the ``build_torrent`` fixture."""
    counter = iter(range(1000))

    def _write(files=None, **kwargs):
        path = tmp_path / f"t{next(counter)}.torrent"
        path.write_bytes(serialize(_build_torrent(files, **kwargs)))
        return path

    return _write


@pytest.fixture
def download_dir(tmp_path):
    root = tmp_path / "downloads"
    root.mkdir()
    return root


def _make_files(root, *relpaths, size=3):
    """Create files (and parent directories) below *root*."""
    created = []
    for rel in relpaths:
        path = root.joinpath(*rel.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        created.append(path)
    return created


@pytest.fixture
def build_torrent():
    """The manifest builder, for tests that work on values rather than files."""
    return _build_torrent


@pytest.fixture
def make_files():
    return _make_files
