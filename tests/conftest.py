"""Shared fixtures for the file operations test suite."""

from pathlib import Path

import pytest

from fileops import FileOperations, PathPolicy


@pytest.fixture(autouse=True)
def quiet_console(monkeypatch):
    """Keep rich console output out of test logs."""
    monkeypatch.setenv("FILEOPS_QUIET", "true")


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """A scratch directory that doubles as the only allowed root."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def workspace_policy(temp_dir) -> PathPolicy:
    """Policy rooted at temp_dir, no extension allow-list so directories pass."""
    return PathPolicy(
        allowed_roots=[str(temp_dir)],
        blocked_roots=[str(temp_dir / "blocked")],
        blocked_extensions=[".exe", ".sh"],
    )


@pytest.fixture
def file_ops(workspace_policy) -> FileOperations:
    return FileOperations(workspace_policy)
