"""Unit tests for RetentionPruner.

Tests oldest-first selection, partial failures, edge cases for the
keep count, and dry-run mode.
"""

import errno
import os
from pathlib import Path

import pytest
from treekeeper.filesystem import retention as retention_module
from treekeeper.filesystem.cleaner import RecursiveCleaner
from treekeeper.filesystem.operator import ForceOperator
from treekeeper.filesystem.retention import RetentionPruner, delete_oldest

_BASE_NS = 1_700_000_000 * 10**9


def _make_dirs(root: Path, ages: dict[str, int]) -> None:
    """Create subdirectories with a file each and distinct mtimes.

    Args:
        root: Parent directory.
        ages: Mapping of directory name to age in seconds (higher is older).
    """
    root.mkdir(exist_ok=True)
    for name, age in ages.items():
        sub = root / name
        sub.mkdir()
        (sub / "data.bin").write_text(name)
        mtime = _BASE_NS - age * 10**9
        os.utime(sub, ns=(mtime, mtime))


@pytest.fixture
def backups(tmp_path: Path) -> Path:
    """Five subdirectories, 'day1' the oldest and 'day5' the newest."""
    root = tmp_path / "backups"
    _make_dirs(root, {"day1": 50, "day2": 40, "day3": 30, "day4": 20, "day5": 10})
    return root


class TestPrune:
    """Tests for RetentionPruner.prune and delete_oldest."""

    def test_removes_oldest(self, backups: Path) -> None:
        """The oldest subdirectories beyond the keep count are removed."""
        assert delete_oldest(backups, 3) is True
        assert sorted(p.name for p in backups.iterdir()) == ["day3", "day4", "day5"]

    def test_result_details(self, backups: Path) -> None:
        """The result lists kept (newest first) and removed (oldest first) paths."""
        result = RetentionPruner().prune(backups, 3)

        assert result.success is True
        assert result.removed == (str(backups / "day1"), str(backups / "day2"))
        assert result.kept == (
            str(backups / "day5"),
            str(backups / "day4"),
            str(backups / "day3"),
        )
        assert result.failed == ()

    def test_failure_does_not_stop_other_removals(
        self, backups: Path, locking_operator_cls: type
    ) -> None:
        """If one removal fails the call fails, but the other still succeeds."""
        operator = locking_operator_cls(locked=[backups / "day1" / "data.bin"])
        pruner = RetentionPruner(RecursiveCleaner(operator))

        assert pruner.delete_oldest(backups, 3) is False
        assert not (backups / "day2").exists()
        assert (backups / "day1" / "data.bin.0.deleting").exists()

    def test_failure_details(self, backups: Path, locking_operator_cls: type) -> None:
        """A failed removal is reported with an error message."""
        operator = locking_operator_cls(locked=[backups / "day1" / "data.bin"])

        result = RetentionPruner(RecursiveCleaner(operator)).prune(backups, 3)

        assert result.success is False
        assert result.failed == (str(backups / "day1"),)
        assert result.removed == (str(backups / "day2"),)
        assert result.results[0].error is not None

    def test_keep_more_than_present(self, backups: Path) -> None:
        """Nothing is removed when the keep count covers every subdirectory."""
        result = RetentionPruner().prune(backups, 10)

        assert result.success is True
        assert result.results == ()
        assert len(result.kept) == 5

    def test_keep_zero_removes_all(self, backups: Path) -> None:
        """A keep count of zero removes every subdirectory."""
        assert delete_oldest(backups, 0) is True
        assert list(backups.iterdir()) == []

    def test_files_are_ignored(self, backups: Path) -> None:
        """Only subdirectories take part; files in the directory are untouched."""
        (backups / "README").write_text("keep me")

        delete_oldest(backups, 1)

        assert sorted(p.name for p in backups.iterdir()) == ["README", "day5"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory has nothing to prune."""
        assert delete_oldest(tmp_path / "missing", 3) is True

    def test_directory_vanishing_before_listing(
        self, backups: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A directory removed between the check and the listing has nothing to prune."""

        def vanished(path: str) -> list[str]:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)

        monkeypatch.setattr(retention_module, "list_subdirectories", vanished)

        result = RetentionPruner().prune(backups, 3)

        assert result.success
        assert result.results == ()
        assert delete_oldest(backups, 3) is True

    def test_negative_keep_count(self, backups: Path) -> None:
        """A negative keep count is rejected."""
        with pytest.raises(ValueError, match="keep_count"):
            delete_oldest(backups, -1)

    def test_equal_mtimes_ordered_by_name(self, tmp_path: Path) -> None:
        """Ties on modification time are broken by name."""
        root = tmp_path / "runs"
        _make_dirs(root, {"b": 10, "A": 10, "c": 10})

        result = RetentionPruner().prune(root, 1)

        assert result.removed == (str(root / "A"), str(root / "b"))
        assert result.kept == (str(root / "c"),)

    def test_dry_run_removes_nothing(self, backups: Path) -> None:
        """A dry run reports what would be removed without removing it."""
        pruner = RetentionPruner(RecursiveCleaner(ForceOperator(dry_run=True)))

        result = pruner.prune(backups, 3)

        assert result.success is True
        assert all(r.dry_run for r in result.results)
        assert len(list(backups.iterdir())) == 5
