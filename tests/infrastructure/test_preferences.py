"""Tests for the JSON preference store."""

import json
from pathlib import Path

import pytest

from accountdesk.infrastructure.preferences import PREFERENCES_FILENAME, PreferenceStore


class TestPreferenceStore:
    def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        assert PreferenceStore(tmp_path / "absent").get("theme") is None

    def test_set_creates_directory(self, tmp_path: Path) -> None:
        store = PreferenceStore(tmp_path / "nested" / "dir")
        store.set("theme", "dark")
        path = tmp_path / "nested" / "dir" / PREFERENCES_FILENAME
        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}

    def test_set_keeps_other_keys(self, tmp_path: Path) -> None:
        store = PreferenceStore(tmp_path)
        store.set("a", "1")
        store.set("theme", "light")
        assert store.get("a") == "1"
        assert store.get("theme") == "light"

    def test_corrupt_file_reads_empty(self, tmp_path: Path) -> None:
        (tmp_path / PREFERENCES_FILENAME).write_text("{not json", encoding="utf-8")
        store = PreferenceStore(tmp_path)
        assert store.get("theme") is None
        store.set("theme", "dark")
        assert store.get("theme") == "dark"

    def test_non_object_reads_empty(self, tmp_path: Path) -> None:
        (tmp_path / PREFERENCES_FILENAME).write_text('["dark"]', encoding="utf-8")
        assert PreferenceStore(tmp_path).get("theme") is None

    def test_undecodable_file_reads_empty(self, tmp_path: Path) -> None:
        (tmp_path / PREFERENCES_FILENAME).write_bytes(b'{"theme": "\xff\xfe"}')
        store = PreferenceStore(tmp_path)
        assert store.get("theme") is None
        store.set("theme", "light")
        assert store.get("theme") == "light"

    def test_unreadable_file_reads_empty(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / PREFERENCES_FILENAME).write_text('{"theme": "dark"}', encoding="utf-8")

        def deny(self: Path, *args: object, **kwargs: object) -> str:
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_text", deny)
        assert PreferenceStore(tmp_path).get("theme") is None
