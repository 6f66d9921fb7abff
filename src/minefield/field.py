"""
Field module for the minefield core.

Implements the grid of cells with deferred mine placement, cascading
reveals and flag bookkeeping.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from .cell import Cell, Coordinate, RevealResult, ToggleFlagResult

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MAX_DIMENSION = 255


class FieldInvariantError(AssertionError):
    """Raised when the field's internal bookkeeping is inconsistent."""


@dataclass(frozen=True)
class FieldConfig:
    """
    Dimensions and mine count of a field.

    Attributes:
        width: Number of columns (1-255).
        height: Number of rows (1-255).
        mine_count: Total mines to place.
    """

    width: int = 8
    height: int = 8
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for dimension in (self.width, self.height):
            if not 1 <= dimension <= MAX_DIMENSION:
                raise ValueError(
                    f"Field dimensions must be between 1 and {MAX_DIMENSION}"
                )
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.cell_count - 1
        if self.mine_count > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def cell_count(self) -> int:
        return self.width * self.height


# Preset difficulty levels
DEFAULT = FieldConfig(8, 8, 10)
BEGINNER = FieldConfig(9, 9, 10)
INTERMEDIATE = FieldConfig(16, 16, 40)
EXPERT = FieldConfig(30, 16, 99)

PRESETS: Dict[str, FieldConfig] = {
    "default": DEFAULT,
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Field Class
# ============================================================================

class Field:
    """
    Minesweeper grid.

    Cells are stored row-major. Mines are placed once, either eagerly or
    lazily on the first reveal, which is then guaranteed to be safe.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Create an unpopulated field.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_count: Mines to place at population time.
            rng: Random source for mine placement (default: OS-seeded).

        Raises:
            ValueError: If the dimensions or mine count are out of range.
        """
        self._config = FieldConfig(width, height, mine_count)
        self._rng = rng if rng is not None else random.Random()
        self._cells: List[Cell] = [
            Cell() for _ in range(self._config.cell_count)
        ]
        self._flagged_cells = 0
        self._revealed_cells = 0
        self._populated = False
        self._detonated: Optional[Coordinate] = None

    @classmethod
    def from_config(
        cls, config: FieldConfig, rng: Optional[random.Random] = None
    ) -> "Field":
        """Create an unpopulated field from a configuration."""
        return cls(config.width, config.height, config.mine_count, rng=rng)

    @classmethod
    def new_populated(
        cls,
        width: int,
        height: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> "Field":
        """Create a field and place its mines immediately, with no safe cell."""
        field = cls(width, height, mine_count, rng=rng)
        field.populate()
        return field

    @classmethod
    def with_mines(
        cls, width: int, height: int, mines: Iterable[Coordinate]
    ) -> "Field":
        """
        Create a populated field from an explicit mine layout.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Coordinates of every mine, without duplicates.

        Raises:
            ValueError: If a coordinate is repeated or the layout leaves
                no safe cell.
            IndexError: If a coordinate lies outside the field.
        """
        mines = list(mines)
        if len(set(mines)) != len(mines):
            raise ValueError("Mine coordinates must be distinct")
        field = cls(width, height, len(mines))
        for x, y in mines:
            field._place_mine(x, y)
        field._populated = True
        return field

    # ========================================================================
    # Grid Access (Low-level)
    # ========================================================================

    def _cell_index(self, x: int, y: int) -> int:
        """Row-major index of a coordinate, failing fast when out of range."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Cell ({x}, {y}) outside {self.width}x{self.height} field"
            )
        return x + y * self.width

    def _neighborhood(self, x: int, y: int) -> Iterator[Coordinate]:
        """
        Yield the 3x3 block around a cell, clamped to the grid.

        Iterates x-major then y and includes the center cell itself.
        """
        for nx in range(max(x - 1, 0), min(x + 1, self.width - 1) + 1):
            for ny in range(max(y - 1, 0), min(y + 1, self.height - 1) + 1):
                yield nx, ny

    def neighbors(self, x: int, y: int) -> List[Coordinate]:
        """In-bounds coordinates adjacent to a cell (up to 8)."""
        self._cell_index(x, y)
        return [
            (nx, ny)
            for nx, ny in self._neighborhood(x, y)
            if (nx, ny) != (x, y)
        ]

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every coordinate in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def populate(
        self,
        safe_cell: Optional[Coordinate] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Place mines by rejection sampling.

        Each attempt draws an independent uniform column and row; the
        safe cell and already-mined cells are rejected and redrawn.

        Args:
            safe_cell: Coordinate that must stay mine-free.
            rng: Random source overriding the field's own for this call.

        Raises:
            RuntimeError: If the field has already been populated.
        """
        if self._populated:
            raise RuntimeError("Field has already been populated")
        if safe_cell is not None:
            self._cell_index(*safe_cell)

        reserved = 0 if safe_cell is None else 1
        capacity = self._config.cell_count - reserved
        if self.mine_count > capacity:
            raise FieldInvariantError(
                f"{self.mine_count} mines do not fit in {capacity} cells"
            )

        rng = rng if rng is not None else self._rng
        remaining = self.mine_count
        while remaining > 0:
            x = rng.randrange(self.width)
            y = rng.randrange(self.height)
            if (x, y) == safe_cell:
                continue
            if self._cells[self._cell_index(x, y)].has_mine:
                continue
            self._place_mine(x, y)
            remaining -= 1

        self._populated = True
        logger.debug(
            "Populated %dx%d field with %d mines (safe cell %s)",
            self.width, self.height, self.mine_count, safe_cell,
        )

    def _place_mine(self, x: int, y: int) -> None:
        """Mark a mine and bump the counters of its neighbors."""
        cell = self._cells[self._cell_index(x, y)]
        cell.has_mine = True
        for nx, ny in self._neighborhood(x, y):
            if (nx, ny) != (x, y):
                self._cells[self._cell_index(nx, ny)].neighboring_mines += 1

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, x: int, y: int) -> RevealResult:
        """
        Reveal a cell, cascading through zero-count regions.

        Populates the field first if needed, keeping (x, y) mine-free.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            NOTHING if the cell is revealed or flagged, MINE if it held a
            mine, otherwise SUCCESS with every coordinate uncovered.
        """
        index = self._cell_index(x, y)
        if not self._populated:
            self.populate(safe_cell=(x, y))

        cell = self._cells[index]
        if cell.revealed or cell.flagged:
            return RevealResult.nothing()

        cell.revealed = True
        if cell.has_mine:
            self._detonated = (x, y)
            logger.debug("Mine detonated at (%d, %d)", x, y)
            return RevealResult.mine()

        self._revealed_cells += 1
        revealed = [(x, y)]
        if cell.neighboring_mines == 0:
            revealed.extend(self._cascade(x, y))
            logger.debug(
                "Cascade from (%d, %d) revealed %d cells", x, y, len(revealed)
            )
        return RevealResult.success(revealed)

    def _cascade(self, x: int, y: int) -> List[Coordinate]:
        """Reveal everything reachable from a zero-count cell."""
        revealed: List[Coordinate] = []
        pending = deque([(x, y)])
        while pending:
            cx, cy = pending.pop()
            for nx, ny in self._neighborhood(cx, cy):
                neighbor = self._cells[self._cell_index(nx, ny)]
                if neighbor.revealed or neighbor.flagged:
                    continue
                if neighbor.has_mine:
                    raise FieldInvariantError(
                        f"Cascade reached mine at ({nx}, {ny})"
                    )
                neighbor.revealed = True
                self._revealed_cells += 1
                revealed.append((nx, ny))
                if neighbor.neighboring_mines == 0:
                    pending.append((nx, ny))
        return revealed

    def toggle_flag(self, x: int, y: int) -> ToggleFlagResult:
        """
        Flag or unflag a cell that has not been revealed.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Which transition occurred, or NOTHING for a revealed cell.
        """
        cell = self._cells[self._cell_index(x, y)]
        if cell.revealed:
            return ToggleFlagResult.NOTHING

        cell.flagged = not cell.flagged
        if cell.flagged:
            self._flagged_cells += 1
            return ToggleFlagResult.FLAGGED

        if self._flagged_cells == 0:
            raise FieldInvariantError("Flag counter dropped below zero")
        self._flagged_cells -= 1
        return ToggleFlagResult.UNFLAGGED

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def config(self) -> FieldConfig:
        return self._config

    @property
    def width(self) -> int:
        return self._config.width

    @property
    def height(self) -> int:
        return self._config.height

    @property
    def mine_count(self) -> int:
        return self._config.mine_count

    @property
    def flagged_cells(self) -> int:
        return self._flagged_cells

    @property
    def revealed_cells(self) -> int:
        """Number of revealed cells that do not hold a mine."""
        return self._revealed_cells

    @property
    def populated(self) -> bool:
        return self._populated

    @property
    def detonated(self) -> Optional[Coordinate]:
        """Coordinate of the revealed mine, if any."""
        return self._detonated

    @property
    def is_cleared(self) -> bool:
        """Check if every non-mine cell has been revealed."""
        safe_cells = self._config.cell_count - self.mine_count
        return (
            self._populated
            and self._detonated is None
            and self._revealed_cells == safe_cells
        )

    def get_cell(self, x: int, y: int) -> Cell:
        """
        Get a copy of the cell at a position.

        Changes to the copy do not reach the field; use reveal and
        toggle_flag to mutate cells.
        """
        return replace(self._cells[self._cell_index(x, y)])

    def get_observation(self) -> np.ndarray:
        """
        Get the grid as a (height, width) int8 array of cell codes.

        See Cell.to_observation for the encoding.
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y in self.coordinates():
            obs[y, x] = self._cells[self._cell_index(x, y)].to_observation()
        return obs

    def render_ascii(self, reveal_all: bool = False) -> str:
        """
        Render the grid as text, one row per line.

        Hidden cells are '.', flags 'F', mines '*', empty cells ' '.
        With reveal_all, mines show as 'x' and every count is shown.
        """
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                cell = self._cells[self._cell_index(x, y)]
                if reveal_all and cell.has_mine:
                    row.append("x")
                elif reveal_all:
                    row.append(str(cell.neighboring_mines))
                elif cell.flagged:
                    row.append("F")
                elif not cell.revealed:
                    row.append(".")
                elif cell.has_mine:
                    row.append("*")
                elif cell.neighboring_mines == 0:
                    row.append(" ")
                else:
                    row.append(str(cell.neighboring_mines))
            lines.append(" ".join(row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Field(width={self.width}, height={self.height}, "
            f"mine_count={self.mine_count}, populated={self._populated})"
        )
