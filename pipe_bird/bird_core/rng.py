"""
RNG - Gap Generator
===================

Provides deterministic pipe gap placement from a reseedable random source.
The generator is handed to the pipes that need it rather than built inside
them, so tests and agents can replay a run exactly.
"""

from __future__ import annotations

import random
from typing import Optional

from pipe_bird.bird_core.config_loader import GameConfig, get_config


class GapGenerator:
    """
    Uniform gap-center sampler over the configured half-open range.

    Same seed produces the same sequence of gap centers.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the generator.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._low = config.obstacle.gap_center_min
        self._high = config.obstacle.gap_center_max
        self._seed = seed
        self._rng = random.Random(seed)
        self._drawn: int = 0

    def next_gap_center(self) -> int:
        """Draw the next gap center in [gap_center_min, gap_center_max)."""
        self._drawn += 1
        return self._rng.randrange(self._low, self._high)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator.

        Args:
            seed: New seed. Uses the previous seed if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
        self._drawn = 0

    @property
    def seed(self) -> Optional[int]:
        """Seed of the current sequence."""
        return self._seed

    @property
    def drawn(self) -> int:
        """Number of gap centers drawn since the last reset."""
        return self._drawn
