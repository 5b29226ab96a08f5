"""Tests for CleanupSession: several torrents, one directory."""

import pytest

from torrent_cleanup.config import MAX_DEPTH_LIMIT, CleanupSettings, DecoderConfig
from torrent_cleanup.errors import (
    MalformedInputError,
    MissingFieldError,
    TooDeeplyNestedError,
    UnsupportedEncodingError,
)
from torrent_cleanup.session import CleanupSession


def test_end_to_end(download_dir, torrent_file, make_files):
    make_files(download_dir, "a/b.txt", "a/extra.nfo", "c.txt")
    session = CleanupSession(download_dir)
    session.load_torrents([
        torrent_file([["a", "b.txt"]], comment="first"),
        torrent_file([["C.TXT"]]),
    ])

    assert len(session.manifests) == 2
    assert session.manifests[0].comment == "first"
    assert session.errors == []

    report = session.reconcile()
    assert report.total_local_files == 3
    assert [o.path for o in report.orphans] == [str(download_dir / "a" / "extra.nfo")]

def test_delete(download_dir, torrent_file, make_files):
    keep, drop = make_files(download_dir, "keep.txt", "drop.txt")
    session = CleanupSession(download_dir)
    session.load_torrent(torrent_file([["keep.txt"]]))
    session.reconcile(delete=True)
    assert keep.exists()
    assert not drop.exists()

def test_load_torrent_propagates_decode_errors(download_dir, tmp_path):
    bad = tmp_path / "bad.torrent"
    bad.write_bytes(b"x")
    with pytest.raises(MalformedInputError):
        CleanupSession(download_dir).load_torrent(bad)

def test_load_torrents_skips_failures(download_dir, torrent_file, tmp_path):
    bad = tmp_path / "bad.torrent"
    bad.write_bytes(b"d4:infoi1ee")
    good = torrent_file([["a.txt"]])

    session = CleanupSession(download_dir)
    loaded = session.load_torrents([bad, tmp_path / "missing.torrent", good])

    assert len(loaded) == 1
    assert len(session.expected_paths) == 1
    assert [f.source for f in session.errors] == [str(bad), str(tmp_path / "missing.torrent")]
    assert isinstance(session.errors[0].error, MissingFieldError)
    assert isinstance(session.errors[1].error, OSError)

def test_single_file_torrent_leaves_everything_orphaned(
    download_dir, torrent_file, make_files
):
    make_files(download_dir, "movie.mkv")
    session = CleanupSession(download_dir)
    info = session.load_torrent(torrent_file(length=3, name="movie.mkv"))
    assert info.single_file
    assert session.reconcile().orphan_count == 1

def test_settings_are_applied(download_dir, torrent_file, make_files):
    make_files(download_dir, "Movie.mkv")
    cfg = CleanupSettings(case_sensitive=True)
    session = CleanupSession(download_dir, settings=cfg)
    session.load_torrent(torrent_file([["movie.mkv"]]))
    assert session.reconcile().orphan_count == 1

def test_decoder_settings_are_applied(download_dir, tmp_path):
    path = tmp_path / "dup.torrent"
    path.write_bytes(b"d4:infoi1e4:infod5:filesleee")
    cfg = CleanupSettings(decoder=DecoderConfig(duplicate_keys="last"))
    info = CleanupSession(download_dir, settings=cfg).load_torrent(path)
    assert info.file_count == 0

def test_default_encoding_argument(download_dir, torrent_file, make_files):
    (f,) = make_files(download_dir, "café.txt")
    session = CleanupSession(download_dir, default_encoding="latin-1")
    session.load_torrent(torrent_file([["café.txt"]], segment_encoding="latin-1"))
    assert session.reconcile().orphan_count == 0

def test_non_text_encoding_fails_only_its_own_torrent(
    download_dir, torrent_file, tmp_path
):
    bad = tmp_path / "base64.torrent"
    bad.write_bytes(b"d8:encoding6:base644:infod5:filesld4:pathl1:aeeeee")
    good = torrent_file([["a.txt"]])

    session = CleanupSession(download_dir)
    loaded = session.load_torrents([bad, good])

    assert len(loaded) == 1
    assert [f.source for f in session.errors] == [str(bad)]
    assert isinstance(session.errors[0].error, UnsupportedEncodingError)

def test_too_deep_torrent_is_recorded(download_dir, torrent_file, tmp_path):
    depth = MAX_DEPTH_LIMIT + 1
    deep = tmp_path / "deep.torrent"
    deep.write_bytes(b"l" * depth + b"e" * depth)
    cfg = CleanupSettings(decoder=DecoderConfig(max_depth=MAX_DEPTH_LIMIT))

    session = CleanupSession(download_dir, settings=cfg)
    loaded = session.load_torrents([deep, torrent_file([["a.txt"]])])

    assert len(loaded) == 1
    assert isinstance(session.errors[0].error, TooDeeplyNestedError)
