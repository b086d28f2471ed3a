"""
Game Rules
==========

Termination conditions for a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pipe_bird.bird_core.bird import Bird
from pipe_bird.bird_core.config_loader import GameConfig, get_config
from pipe_bird.bird_core.obstacle import Obstacle


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    truncated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, False, reason)

    @staticmethod
    def truncation(reason: str) -> "TerminationResult":
        return TerminationResult(False, True, reason)


class TerminationRules:
    """
    Handles run termination.

    - Fell: bird below the bottom row
    - Hit pipe: bird in the pipe column outside the gap
    - Step cap: the run is truncated once it has lasted max_steps steps
    """

    REASON_FELL = "fell"
    REASON_HIT_PIPE = "hit_pipe"
    REASON_STEP_CAP = "step_cap"

    def __init__(self, config: Optional[GameConfig] = None, max_steps: Optional[int] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
            max_steps: Step cap. Interactive play passes None (no cap).
        """
        if config is None:
            config = get_config()

        self._screen_height = config.screen.height
        self._max_steps = max_steps

    @property
    def screen_height(self) -> int:
        return self._screen_height

    @property
    def max_steps(self) -> Optional[int]:
        return self._max_steps

    def has_fallen(self, bird: Bird) -> bool:
        return bird.y > self._screen_height

    def check_termination(self, bird: Bird, obstacle: Obstacle, steps: int = 0) -> TerminationResult:
        """
        Check all termination conditions.

        Args:
            bird: The bird after this frame's update.
            obstacle: The current pipe.
            steps: Gravity steps taken in the run so far.

        Returns:
            TerminationResult indicating game state.
        """
        if self.has_fallen(bird):
            return TerminationResult.game_over(self.REASON_FELL)

        if obstacle.check_collision(bird):
            return TerminationResult.game_over(self.REASON_HIT_PIPE)

        if self._max_steps is not None and steps >= self._max_steps:
            return TerminationResult.truncation(self.REASON_STEP_CAP)

        return TerminationResult.none()
