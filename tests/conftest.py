"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Iterable, Set, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, Field, FieldConfig, Session


# ============================================================================
# Helpers
# ============================================================================

class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def count_adjacent_mines(field: Field, x: int, y: int) -> int:
    """Brute-force neighbor count, independent of the field's bookkeeping."""
    count = 0
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < field.width and 0 <= ny < field.height:
                if field.get_cell(nx, ny).has_mine:
                    count += 1
    return count


def expected_cascade(field: Field, start: Tuple[int, int]) -> Set[Tuple[int, int]]:
    """Zero-count region connected to start plus its non-mine border."""
    region = {start}
    frontier = [start]
    while frontier:
        x, y = frontier.pop()
        if field.get_cell(x, y).neighboring_mines != 0:
            continue
        for neighbor in field.neighbors(x, y):
            if neighbor not in region and not field.get_cell(*neighbor).has_mine:
                region.add(neighbor)
                frontier.append(neighbor)
    return region


def all_coordinates(width: int, height: int) -> Iterable[Tuple[int, int]]:
    return [(x, y) for y in range(height) for x in range(width)]


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def default_field(rng: random.Random) -> Field:
    """An unpopulated 8x8 field with 10 mines."""
    return Field(8, 8, 10, rng=rng)


@pytest.fixture
def empty_field() -> Field:
    """A field with no mines for cascade testing."""
    return Field(8, 8, 0)


@pytest.fixture
def corner_mine_field() -> Field:
    """5x5 field with a single mine in the bottom-right corner."""
    return Field.with_mines(5, 5, [(4, 4)])


@pytest.fixture
def wall_field() -> Field:
    """5x5 field with a full column of mines at x == 2."""
    return Field.with_mines(5, 5, [(2, y) for y in range(5)])


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def wall_session(wall_field: Field, clock: FakeClock) -> Session:
    """Session over the mine wall field with a manual clock."""
    return Session(field=wall_field, clock=clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> FieldConfig:
    """Create a valid field configuration."""
    return FieldConfig(8, 8, 10)
