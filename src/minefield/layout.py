"""
Screen layout and pointer mapping for front ends.

Splits a window into a status bar and a pillarboxed field area, and
turns pointer positions into grid coordinates so that clicks outside
the field never reach the core.
"""
from enum import Enum, auto
from typing import NamedTuple, Optional, Tuple, Union

from .cell import Coordinate, RevealResult, ToggleFlagResult
from .session import Session


# ============================================================================
# Constants
# ============================================================================

STATUS_BAR_HEIGHT = 24


class InputEvent(Enum):
    """Pointer buttons the core responds to."""

    REVEAL = auto()
    TOGGLE_FLAG = auto()


class Rect(NamedTuple):
    """Axis-aligned rectangle in pixels."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, px: float, py: float) -> bool:
        return (
            self.x <= px < self.x + self.width
            and self.y <= py < self.y + self.height
        )


# ============================================================================
# Field Layout
# ============================================================================

class FieldLayout:
    """
    Where the field and the status bar sit inside a window.

    The status bar spans the top of the window. The field fills the rest
    of the height with square cells and is centered horizontally.
    """

    def __init__(
        self, window_size: Tuple[int, int], field_size: Tuple[int, int]
    ) -> None:
        self.field_rect = Rect(0, 0, 1, 1)
        self.status_bar_rect = Rect(0, 0, 1, 1)
        self.field_size = field_size
        self.recalculate(window_size, field_size)

    def recalculate(
        self, window_size: Tuple[int, int], field_size: Tuple[int, int]
    ) -> None:
        """Recompute both rectangles, e.g. after a window resize."""
        window_width, window_height = window_size
        columns, rows = field_size
        self.field_size = field_size

        # Only pillarboxes; a window narrower than the field clips it.
        display_height = max(window_height - STATUS_BAR_HEIGHT, 1)
        cell_size = display_height / rows
        display_width = cell_size * columns

        self.status_bar_rect = Rect(0, 0, window_width, STATUS_BAR_HEIGHT)
        self.field_rect = Rect(
            int((window_width - display_width) / 2),
            STATUS_BAR_HEIGHT,
            int(display_width),
            int(display_height),
        )

    def cell_at(self, px: float, py: float) -> Optional[Coordinate]:
        """
        Map a pointer position to the cell under it.

        Returns:
            (x, y) grid coordinate, or None outside the field.
        """
        rect = self.field_rect
        if not rect.contains(px, py):
            return None
        columns, rows = self.field_size
        x = int((px - rect.x) * columns / rect.width)
        y = int((py - rect.y) * rows / rect.height)
        return min(x, columns - 1), min(y, rows - 1)

    def cell_rect(self, x: int, y: int) -> Rect:
        """On-screen rectangle covered by a cell."""
        columns, rows = self.field_size
        rect = self.field_rect
        left = rect.x + x * rect.width // columns
        top = rect.y + y * rect.height // rows
        right = rect.x + (x + 1) * rect.width // columns
        bottom = rect.y + (y + 1) * rect.height // rows
        return Rect(left, top, right - left, bottom - top)

    def dispatch(
        self, session: Session, event: InputEvent, px: float, py: float
    ) -> Optional[Union[RevealResult, ToggleFlagResult]]:
        """
        Route a click into the session.

        Returns:
            The session's result, or None if the click missed the field.
        """
        cell = self.cell_at(px, py)
        if cell is None:
            return None
        if event == InputEvent.REVEAL:
            return session.reveal(*cell)
        return session.toggle_flag(*cell)
