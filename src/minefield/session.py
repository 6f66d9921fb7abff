"""
Session module for the minefield core.

Wraps a Field with the playthrough timer and the derived status
queries a front end polls every frame.
"""
import logging
import random
import time
from datetime import timedelta
from enum import Enum, auto
from typing import Callable, Optional

from .cell import RevealResult, ToggleFlagResult
from .field import DEFAULT, Field, FieldConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


# ============================================================================
# Constants
# ============================================================================

class TimerState(Enum):
    """Possible states of the session timer."""

    NOT_STARTED = auto()
    STARTED = auto()
    STOPPED = auto()


# ============================================================================
# Session Class
# ============================================================================

class Session:
    """
    One playthrough: a field plus its timer.

    The timer starts on the first reveal and stops, permanently, when a
    mine is revealed or the last safe cell is uncovered.
    """

    def __init__(
        self,
        config: FieldConfig = DEFAULT,
        rng: Optional[random.Random] = None,
        clock: Clock = time.monotonic,
        field: Optional[Field] = None,
    ) -> None:
        """
        Start a new session.

        Args:
            config: Field dimensions and mine count.
            rng: Random source for mine placement.
            clock: Monotonic time source in seconds.
            field: Prebuilt field to play on instead of a fresh one.
        """
        self._config = field.config if field is not None else config
        self._rng = rng
        self._clock = clock
        self._field = field if field is not None else Field.from_config(
            config, rng=rng
        )
        self._timer_state = TimerState.NOT_STARTED
        self._started_at = 0.0
        self._final = timedelta(0)

    # ========================================================================
    # Timer
    # ========================================================================

    def _start_timer(self) -> None:
        self._started_at = self._clock()
        self._timer_state = TimerState.STARTED
        logger.debug("Timer started")

    def _stop_timer(self) -> None:
        self._final = self.timer()
        self._timer_state = TimerState.STOPPED
        logger.debug("Timer stopped at %.3fs", self._final.total_seconds())

    def timer(self) -> timedelta:
        """
        Elapsed playing time.

        Zero before the first reveal, live while playing, and frozen once
        the game is over.
        """
        if self._timer_state == TimerState.NOT_STARTED:
            return timedelta(0)
        if self._timer_state == TimerState.STARTED:
            return timedelta(seconds=self._clock() - self._started_at)
        return self._final

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, x: int, y: int) -> RevealResult:
        """
        Reveal a cell, starting the timer on the first call.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            The field's reveal result, or NOTHING once the game is over.

        Raises:
            IndexError: If the coordinate lies outside the field.
        """
        self._field.get_cell(x, y)
        if self.game_over:
            return RevealResult.nothing()
        if self._timer_state == TimerState.NOT_STARTED:
            self._start_timer()

        result = self._field.reveal(x, y)

        if result.is_mine:
            self._stop_timer()
            logger.info(
                "Game lost at (%d, %d) after %.1fs",
                x, y, self._final.total_seconds(),
            )
        elif self._field.is_cleared:
            self._stop_timer()
            logger.info(
                "Game won after %.1fs", self._final.total_seconds()
            )
        return result

    def toggle_flag(self, x: int, y: int) -> ToggleFlagResult:
        """Flag or unflag a cell; the timer is not affected."""
        return self._field.toggle_flag(x, y)

    def reset(self) -> None:
        """Begin a new playthrough on a fresh field of the same size."""
        self._field = Field.from_config(self._config, rng=self._rng)
        self._timer_state = TimerState.NOT_STARTED
        self._started_at = 0.0
        self._final = timedelta(0)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def field(self) -> Field:
        return self._field

    @property
    def timer_state(self) -> TimerState:
        return self._timer_state

    @property
    def game_over(self) -> bool:
        """Check if the timer has stopped."""
        return self._timer_state == TimerState.STOPPED

    @property
    def won(self) -> bool:
        return self.game_over and self._field.is_cleared

    @property
    def lost(self) -> bool:
        return self.game_over and self._field.detonated is not None

    @property
    def mines_remaining(self) -> int:
        """
        Mines not yet accounted for by flags.

        Negative when more flags are placed than there are mines.
        """
        return self._field.mine_count - self._field.flagged_cells
