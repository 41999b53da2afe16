"""Tests for snapshot storage implementations."""

import json
import os
import stat
from unittest.mock import patch

import pytest

from shared.storage import InMemorySnapshotStorage, LocalSnapshotStorage

SNAPSHOT = {
    "players": [{"id": "a", "name": "Ann", "scores": [30], "total": 30, "color": "#3b82f6"}],
    "round": 2,
    "status": "Active",
}


class TestLocalSnapshotStorage:
    def test_load_missing_file_returns_none(self, tmp_path):
        storage = LocalSnapshotStorage(tmp_path / "snapshot.json")
        assert storage.load() is None

    def test_save_then_load(self, tmp_path):
        storage = LocalSnapshotStorage(tmp_path / "snapshot.json")

        storage.save(SNAPSHOT)

        assert storage.load() == SNAPSHOT

    def test_creates_parent_directories(self, tmp_path):
        file_path = tmp_path / "nested" / "dir" / "snapshot.json"
        LocalSnapshotStorage(file_path).save(SNAPSHOT)
        assert file_path.exists()

    def test_overwrites_previous_snapshot(self, tmp_path):
        storage = LocalSnapshotStorage(tmp_path / "snapshot.json")

        storage.save(SNAPSHOT)
        storage.save({"players": [], "round": 1, "status": "Setup"})

        assert storage.load() == {"players": [], "round": 1, "status": "Setup"}

    def test_writes_utf8_names(self, tmp_path):
        file_path = tmp_path / "snapshot.json"
        data = {"players": [{"id": "a", "name": "プレイヤー"}], "round": 1, "status": "Setup"}

        LocalSnapshotStorage(file_path).save(data)

        assert "プレイヤー" in file_path.read_text(encoding="utf-8")
        assert json.loads(file_path.read_text(encoding="utf-8")) == data

    def test_file_has_owner_only_permissions(self, tmp_path):
        file_path = tmp_path / "snapshot.json"
        LocalSnapshotStorage(file_path).save(SNAPSHOT)
        assert stat.S_IMODE(os.stat(file_path).st_mode) == 0o600

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = LocalSnapshotStorage(tmp_path / "snapshot.json")
        storage.save(SNAPSHOT)
        storage.save(SNAPSHOT)
        assert [p.name for p in tmp_path.iterdir()] == ["snapshot.json"]

    def test_corrupt_file_returns_none(self, tmp_path):
        file_path = tmp_path / "snapshot.json"
        file_path.write_text("{truncated", encoding="utf-8")
        assert LocalSnapshotStorage(file_path).load() is None

    def test_non_object_json_returns_none(self, tmp_path):
        file_path = tmp_path / "snapshot.json"
        file_path.write_text("[1, 2]", encoding="utf-8")
        assert LocalSnapshotStorage(file_path).load() is None

    def test_clear_removes_file(self, tmp_path):
        file_path = tmp_path / "snapshot.json"
        storage = LocalSnapshotStorage(file_path)
        storage.save(SNAPSHOT)

        storage.clear()

        assert not file_path.exists()
        assert storage.load() is None

    def test_clear_without_file_is_noop(self, tmp_path):
        LocalSnapshotStorage(tmp_path / "snapshot.json").clear()

    def test_failed_write_keeps_previous_snapshot(self, tmp_path):
        file_path = tmp_path / "snapshot.json"
        storage = LocalSnapshotStorage(file_path)
        storage.save(SNAPSHOT)

        with patch("shared.storage.os.fchmod", side_effect=OSError("boom")), pytest.raises(OSError, match="boom"):
            storage.save({"players": [], "round": 1, "status": "Setup"})

        assert storage.load() == SNAPSHOT
        assert [p.name for p in tmp_path.iterdir()] == ["snapshot.json"]


class TestInMemorySnapshotStorage:
    def test_empty_by_default(self):
        assert InMemorySnapshotStorage().load() is None

    def test_initial_data(self):
        assert InMemorySnapshotStorage(SNAPSHOT).load() == SNAPSHOT

    def test_saved_copy_is_isolated(self):
        storage = InMemorySnapshotStorage()
        data = {"players": [], "round": 1, "status": "Setup"}
        storage.save(data)

        data["round"] = 99

        assert storage.load()["round"] == 1

    def test_clear(self):
        storage = InMemorySnapshotStorage(SNAPSHOT)
        storage.clear()
        assert storage.load() is None

    def test_rejects_non_json_values(self):
        with pytest.raises(TypeError):
            InMemorySnapshotStorage().save({"when": object()})
