"""
Cell module for the minefield core.

Represents individual grid cells and the result values returned by
reveal and flag operations.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Tuple

Coordinate = Tuple[int, int]


# ============================================================================
# Observation Codes
# ============================================================================

HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single position on the minefield.

    Attributes:
        has_mine: Whether this cell contains a mine.
        revealed: Whether the player has uncovered this cell.
        flagged: Whether the player has marked this cell.
        neighboring_mines: Count of mines in adjacent cells (0-8).
    """

    has_mine: bool = False
    revealed: bool = False
    flagged: bool = False
    neighboring_mines: int = 0

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.revealed and not self.flagged

    def to_observation(self) -> int:
        """
        Convert cell to the integer code used by array observers.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighboring mine count
            9: Revealed mine
        """
        if self.flagged:
            return FLAGGED_CODE
        if not self.revealed:
            return HIDDEN_CODE
        if self.has_mine:
            return MINE_CODE
        return self.neighboring_mines


# ============================================================================
# Operation Results
# ============================================================================

class RevealOutcome(Enum):
    """What happened when a cell was revealed."""

    NOTHING = auto()
    SUCCESS = auto()
    MINE = auto()


@dataclass(frozen=True)
class RevealResult:
    """
    Result of revealing a cell.

    Attributes:
        outcome: Kind of result.
        cells: Coordinates uncovered by a successful reveal, origin first.
    """

    outcome: RevealOutcome
    cells: Tuple[Coordinate, ...] = ()

    @classmethod
    def nothing(cls) -> "RevealResult":
        return cls(RevealOutcome.NOTHING)

    @classmethod
    def mine(cls) -> "RevealResult":
        return cls(RevealOutcome.MINE)

    @classmethod
    def success(cls, cells: Iterable[Coordinate]) -> "RevealResult":
        return cls(RevealOutcome.SUCCESS, tuple(cells))

    @property
    def is_nothing(self) -> bool:
        return self.outcome == RevealOutcome.NOTHING

    @property
    def is_success(self) -> bool:
        return self.outcome == RevealOutcome.SUCCESS

    @property
    def is_mine(self) -> bool:
        return self.outcome == RevealOutcome.MINE


class ToggleFlagResult(Enum):
    """What happened when a flag was toggled."""

    NOTHING = auto()
    FLAGGED = auto()
    UNFLAGGED = auto()
