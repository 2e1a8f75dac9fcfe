"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from rookery.core.board import Board


@pytest.fixture(scope="session")
def standard_board() -> Board:
    """The starting position; boards are immutable, so one instance is shared."""
    return Board.create_standard_board()
