"""
Scoring System
==============

One point per pipe passed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoreEvent:
    """Record of a pipe being passed."""
    points: int
    pipe_x: int
    total: int

    def __repr__(self) -> str:
        return f"ScoreEvent(pipe_x={self.pipe_x}, +{self.points} -> {self.total})"


class ScoreTracker:
    """Tracks the score of the current run."""

    POINTS_PER_PIPE = 1

    def __init__(self):
        self._score: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    def apply_pass(self, pipe_x: int) -> ScoreEvent:
        """
        Award the points for passing the pipe at pipe_x.

        Args:
            pipe_x: World column of the pipe that was passed.

        Returns:
            ScoreEvent describing the points awarded.
        """
        self._score += self.POINTS_PER_PIPE
        return ScoreEvent(points=self.POINTS_PER_PIPE, pipe_x=pipe_x, total=self._score)

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
