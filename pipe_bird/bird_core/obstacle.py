"""
Obstacle
========

A single pipe: a vertical wall one column wide with a passable gap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pipe_bird.bird_core.bird import Bird
from pipe_bird.bird_core.config_loader import GameConfig, get_config
from pipe_bird.bird_core.console import Console
from pipe_bird.bird_core.rng import GapGenerator


@dataclass(frozen=True)
class WallSegment:
    """Vertical run of wall cells in screen space, rows [y_start, y_end)."""
    screen_x: int
    y_start: int
    y_end: int

    @property
    def rows(self) -> range:
        return range(self.y_start, self.y_end)


@dataclass
class Obstacle:
    """
    Pipe at an absolute world column.

    The gap spans rows gap_center - half .. gap_center + half where
    half = gap_size // 2.
    """
    x: int
    gap_center: int
    gap_size: int

    @classmethod
    def create(
        cls,
        x: int,
        score: int,
        rng: GapGenerator,
        config: Optional[GameConfig] = None
    ) -> "Obstacle":
        """
        Build a new pipe.

        Args:
            x: World column of the pipe.
            score: Current score; the gap narrows by one per point.
            rng: Source of gap centers (anything with next_gap_center()).
            config: Game configuration. Uses default if None.

        Returns:
            New Obstacle.
        """
        if config is None:
            config = get_config()

        return cls(
            x=x,
            gap_center=rng.next_gap_center(),
            gap_size=config.obstacle.gap_size_for(score)
        )

    @property
    def half_size(self) -> int:
        return self.gap_size // 2

    @property
    def gap_top(self) -> int:
        return self.gap_center - self.half_size

    @property
    def gap_bottom(self) -> int:
        return self.gap_center + self.half_size

    def check_collision(self, bird: Bird) -> bool:
        """
        True when the bird is in the pipe's column and outside the gap.

        Only the exact column counts; the bird moves one column per gravity
        step so it always lands on it.
        """
        if bird.x != self.x:
            return False
        return bird.y < self.gap_top or bird.y > self.gap_bottom

    def render_segments(self, bird_x: int, screen_height: int) -> Tuple[WallSegment, WallSegment]:
        """Upper and lower wall spans relative to the bird's column."""
        screen_x = self.x - bird_x
        upper = WallSegment(screen_x, 0, max(0, self.gap_top))
        lower = WallSegment(screen_x, min(screen_height, self.gap_bottom), screen_height)
        return upper, lower

    def wall_cells(self, bird_x: int, screen_height: int) -> List[Tuple[int, int]]:
        """Every (screen_x, y) wall cell."""
        cells = []
        for segment in self.render_segments(bird_x, screen_height):
            cells.extend((segment.screen_x, y) for y in segment.rows)
        return cells

    def draw(self, console: Console, bird_x: int, config: Optional[GameConfig] = None) -> None:
        """Draw both wall segments onto the console."""
        if config is None:
            config = get_config()

        fg = config.colors.wall_fg
        bg = config.colors.cell_bg
        glyph = config.obstacle.glyph
        for screen_x, y in self.wall_cells(bird_x, console.height):
            console.set(screen_x, y, fg, bg, glyph)
