"""Tests for token persistence."""

import json
import os
import stat

from brale_dashboard.core.token_store import TOKEN_KEY, TokenStore


def test_round_trip(tmp_path):
    """Test saving and loading a token."""
    store = TokenStore(tmp_path / "nested" / "token.json")

    store.save("abc123")

    assert store.load() == "abc123"
    assert json.loads(store.path.read_text()) == {TOKEN_KEY: "abc123"}
    assert TOKEN_KEY == "bearerToken"


def test_file_is_private(tmp_path):
    """Test that the token file is only readable by its owner."""
    store = TokenStore(tmp_path / "token.json")

    store.save("abc123")

    assert stat.S_IMODE(store.path.stat().st_mode) == 0o600


def test_save_replaces_previous_token(tmp_path):
    """Test that a new token overwrites the old one."""
    store = TokenStore(tmp_path / "token.json")

    store.save("old")
    store.save("new")

    assert store.load() == "new"


def test_missing_file(tmp_path):
    """Test loading when nothing was saved."""
    assert TokenStore(tmp_path / "token.json").load() is None


def test_corrupt_file(tmp_path):
    """Test that an unreadable file loads as no token."""
    path = tmp_path / "token.json"
    path.write_text("{not json")

    assert TokenStore(path).load() is None


def test_unexpected_content(tmp_path):
    """Test files without the token key."""
    path = tmp_path / "token.json"
    path.write_text(json.dumps(["abc"]))

    assert TokenStore(path).load() is None


def test_clear(tmp_path):
    """Test removing the saved token."""
    store = TokenStore(tmp_path / "token.json")
    store.save("abc")

    assert store.clear() is True
    assert store.load() is None
    assert store.clear() is False


def test_file_is_private_before_token_is_written(tmp_path, monkeypatch):
    """Test that the token is never written to a readable file."""
    store = TokenStore(tmp_path / "token.json")
    modes = []
    real_dump = json.dump

    def recording_dump(obj, f, **kwargs):
        modes.append(stat.S_IMODE(os.fstat(f.fileno()).st_mode))
        real_dump(obj, f, **kwargs)

    monkeypatch.setattr(json, "dump", recording_dump)

    store.save("abc123")

    assert modes == [0o600]


def test_existing_readable_file_is_restricted(tmp_path):
    """Test that saving over a world-readable file makes it private."""
    path = tmp_path / "token.json"
    path.write_text("{}")
    path.chmod(0o644)

    TokenStore(path).save("abc123")

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert TokenStore(path).load() == "abc123"
