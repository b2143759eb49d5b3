"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, including
a fault-injecting entry operator that simulates files and directories
locked by another process.
"""

import errno
import os
from collections.abc import Iterable
from pathlib import Path

import pytest
from treekeeper.filesystem.base import StrPath
from treekeeper.filesystem.operator import ForceOperator


class LockingOperator(ForceOperator):
    """ForceOperator that treats some entries as locked by another process.

    A locked file can be renamed aside but never deleted, like a file held
    open on Windows. A locked directory cannot be removed.

    Attributes:
        locked: Paths of files that cannot be deleted (pending names are added
            as locked files are renamed aside).
        locked_dirs: Paths of directories whose removal raises PermissionError.
        delete_calls: Every path passed to force_delete, in call order.
    """

    def __init__(
        self,
        locked: Iterable[StrPath] = (),
        locked_dirs: Iterable[StrPath] = (),
        dry_run: bool = False,
    ) -> None:
        super().__init__(dry_run=dry_run)
        self.locked = {os.fspath(p) for p in locked}
        self.locked_dirs = {os.fspath(p) for p in locked_dirs}
        self.delete_calls: list[str] = []

    def force_delete(self, path: StrPath) -> bool:
        path = os.fspath(path)
        self.delete_calls.append(path)
        if path in self.locked:
            if not path.endswith(self.deleting_suffix):
                pending = f"{path}.0{self.deleting_suffix}"
                os.rename(path, pending)
                self.locked.add(pending)
            return False
        return super().force_delete(path)

    def remove_tree(self, directory: StrPath) -> None:
        directory = os.fspath(directory)
        if directory in self.locked_dirs:
            raise PermissionError(errno.EACCES, "Directory is in use", directory)
        super().remove_tree(directory)


@pytest.fixture
def locking_operator_cls() -> type[LockingOperator]:
    """The fault-injecting operator class."""
    return LockingOperator


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small tree with files at several depths.

    Layout::

        root/
            b.txt
            A.txt
            notes.log
            sub/
                c.txt
                deep/
                    d.txt
            Other/
                e.log
    """
    root = tmp_path / "root"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "Other").mkdir()
    (root / "b.txt").write_text("b")
    (root / "A.txt").write_text("A")
    (root / "notes.log").write_text("log")
    (root / "sub" / "c.txt").write_text("c")
    (root / "sub" / "deep" / "d.txt").write_text("d")
    (root / "Other" / "e.log").write_text("e")
    return root


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory.

    Returns:
        Path where the treekeeper config file would live.
    """
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "treekeeper" / "config.toml"
