# tests/unit/handlers/test_unit_rotation.py — v1
"""Tests for handlers/rotation.py — backup shifting and pruning."""

from __future__ import annotations

from pathlib import Path

from mellivora_logger.handlers.rotation import RotationManager


def _seed(path: Path, backups: int) -> None:
    path.write_text("active")
    for i in range(1, backups + 1):
        Path(f"{path}.{i}").write_text(f"backup{i}")


def _read(path: Path, index: int) -> str:
    return Path(f"{path}.{index}").read_text()


class TestShouldRotate:
    def test_disabled_when_max_bytes_zero(self, tmp_path):
        path = tmp_path / "a.log"
        path.write_bytes(b"x" * 100)
        with open(path, "ab") as stream:
            assert RotationManager(max_bytes=0).should_rotate(stream) is False

    def test_below_threshold(self, tmp_path):
        path = tmp_path / "a.log"
        path.write_bytes(b"x" * 9)
        with open(path, "ab") as stream:
            assert RotationManager(max_bytes=10).should_rotate(stream) is False

    def test_at_threshold(self, tmp_path):
        path = tmp_path / "a.log"
        path.write_bytes(b"x" * 10)
        with open(path, "ab") as stream:
            assert RotationManager(max_bytes=10).should_rotate(stream) is True


class TestListBackups:
    def test_numeric_order_descending(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 11)
        indexes = [i for i, _ in RotationManager().list_backups(str(path))]
        assert indexes == list(range(11, 0, -1))

    def test_ignores_non_numeric_suffixes(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 1)
        Path(f"{path}.lock").write_text("")
        Path(f"{path}.old").write_text("")
        assert [i for i, _ in RotationManager().list_backups(str(path))] == [1]


class TestRotate:
    def test_promotes_active_and_shifts(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 2)
        RotationManager(max_bytes=1, backup_count=5).rotate(str(path))
        assert not path.exists()
        assert _read(path, 1) == "active"
        assert _read(path, 2) == "backup1"
        assert _read(path, 3) == "backup2"

    def test_prunes_oldest(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 3)
        RotationManager(max_bytes=1, backup_count=3).rotate(str(path))
        assert _read(path, 1) == "active"
        assert _read(path, 2) == "backup1"
        assert _read(path, 3) == "backup2"
        assert not Path(f"{path}.4").exists()

    def test_multi_digit_suffixes_prune_the_oldest(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 10)
        RotationManager(max_bytes=1, backup_count=10).rotate(str(path))
        assert _read(path, 1) == "active"
        assert _read(path, 10) == "backup9"
        assert not Path(f"{path}.11").exists()

    def test_gaps_are_compacted(self, tmp_path):
        path = tmp_path / "a.log"
        path.write_text("active")
        Path(f"{path}.1").write_text("backup1")
        Path(f"{path}.5").write_text("backup5")
        RotationManager(max_bytes=1, backup_count=5).rotate(str(path))
        assert _read(path, 1) == "active"
        assert _read(path, 2) == "backup1"
        assert _read(path, 3) == "backup5"
        assert not Path(f"{path}.5").exists()

    def test_zero_backups_truncates(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 2)
        RotationManager(max_bytes=1, backup_count=0).rotate(str(path))
        assert not path.exists()
        assert RotationManager().list_backups(str(path)) == []

    def test_missing_active_file_is_tolerated(self, tmp_path):
        path = tmp_path / "gone.log"
        RotationManager(max_bytes=1, backup_count=2).rotate(str(path))
        assert not Path(f"{path}.1").exists()

    def test_non_numeric_files_survive(self, tmp_path):
        path = tmp_path / "a.log"
        _seed(path, 1)
        Path(f"{path}.lock").write_text("keep")
        RotationManager(max_bytes=1, backup_count=1).rotate(str(path))
        assert Path(f"{path}.lock").read_text() == "keep"
        assert _read(path, 1) == "active"
        assert not Path(f"{path}.2").exists()
