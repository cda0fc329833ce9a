"""Shared test fixtures."""

from pathlib import Path

import pytest

from tidydisk.targets import CleanupTarget, WholeDirectory


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Point the settings file at a temp location for every test."""
    config_file = tmp_path / "tidydisk_config" / "config.json"
    monkeypatch.setenv("TIDYDISK_CONFIG", str(config_file))
    return config_file


@pytest.fixture
def sample_tree(tmp_path) -> tuple[Path, Path]:
    """Two target directories: 13 + 1024 bytes, and a nested 2048-byte file."""
    dir_a = tmp_path / "target_a"
    dir_a.mkdir()
    (dir_a / "file1.txt").write_bytes(b"Hello, World!")
    (dir_a / "file2.txt").write_bytes(b"\0" * 1024)

    dir_b = tmp_path / "target_b"
    (dir_b / "subdir").mkdir(parents=True)
    (dir_b / "subdir" / "file3.txt").write_bytes(b"\0" * 2048)

    return dir_a, dir_b


@pytest.fixture
def sample_catalog(sample_tree):
    """Catalog factory producing fresh targets over ``sample_tree``."""
    dir_a, dir_b = sample_tree

    def factory() -> list[CleanupTarget]:
        return [
            CleanupTarget(id="a", name="Target A", rule=WholeDirectory(path=dir_a)),
            CleanupTarget(id="b", name="Target B", rule=WholeDirectory(path=dir_b)),
        ]

    return factory
