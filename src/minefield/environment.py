"""
Gymnasium environment wrapper for the minefield core.

Drives a Session headlessly through the standard Env interface.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import FLAGGED_CODE, MINE_CODE, Coordinate
from .field import DEFAULT, FieldConfig
from .session import Session


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield.

    Observation:
        (height, width) int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with neighboring mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for clearing the field
        - -10 for revealing a mine
        - -0.1 for a reveal that does nothing (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Field configuration (default: 8x8 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or DEFAULT
        self.session = Session(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new session.

        Args:
            seed: Random seed; the same seed yields the same mine layout
                for the same first reveal.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.session = Session(self.config, rng=rng)
        self._steps = 0

        return self.session.field.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one cell.

        Args:
            action: Cell index (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self.action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.session.field.get_observation()
        terminated = self.session.game_over

        return observation, reward, terminated, False, self._get_info()

    def action_to_position(self, action: int) -> Coordinate:
        """Convert flat action index to (x, y) position."""
        row, col = divmod(int(action), self.config.width)
        return col, row

    def position_to_action(self, x: int, y: int) -> int:
        """Convert (x, y) position to flat action index."""
        return y * self.config.width + x

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal a cell and score the outcome."""
        if self.session.game_over:
            return -0.1

        result = self.session.reveal(x, y)
        if result.is_nothing:
            return -0.1
        if result.is_mine:
            return -10.0
        if self.session.won:
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        session = self.session
        if session.won:
            state = "WON"
        elif session.lost:
            state = "LOST"
        else:
            state = "PLAYING"

        return {
            "steps": self._steps,
            "revealed": session.field.revealed_cells,
            "mines_remaining": session.mines_remaining,
            "elapsed": session.timer().total_seconds(),
            "game_state": state,
        }

    def render(self) -> Optional[str]:
        """Render the current field."""
        if self.render_mode == "ansi":
            return self.session.field.render_ascii()
        if self.render_mode == "human":
            print(self.session.field.render_ascii())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would reveal something.

        Returns:
            Boolean array where True = hidden, unflagged cell.
        """
        field = self.session.field
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in field.coordinates():
            if field.get_cell(x, y).is_hidden:
                mask[self.position_to_action(x, y)] = True
        return mask
