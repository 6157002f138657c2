"""Shared fixtures for CLI tests."""

import pytest


@pytest.fixture
def data_dir(tmp_path, sprint):
    """Data directory holding the "Sprint" board (Todo: A, B, C; Doing: empty)."""
    return str(tmp_path)
