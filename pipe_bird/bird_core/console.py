"""
Cell Console
============

Headless character-cell console that the game controller draws into.

The controller only ever talks to this interface: it sets cells, clears the
screen, prints text and raises the quit flag. Front ends (the pygame window,
the numpy rasterizer) read the buffers back out.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

import numpy as np

from pipe_bird.bird_core.config_loader import GameConfig, get_config


Color = Tuple[int, int, int]

BLANK = " "


class Key(Enum):
    """Discrete key presses the game reacts to."""
    PLAY = "p"
    QUIT = "q"
    FLAP = "space"


class Console:
    """
    Fixed-size grid of cells with glyph, foreground and background planes.

    Writes outside the grid are ignored, which lets pipes that sit partly
    off screen be drawn without clipping at the call site.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize console.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.width = config.screen.width
        self.height = config.screen.height

        self.glyphs = np.full((self.height, self.width), BLANK, dtype="<U1")
        self.fg = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self.bg = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        self._default_fg = np.array(config.colors.text_fg, dtype=np.uint8)
        self._default_bg = np.array(config.colors.menu_bg, dtype=np.uint8)

        self.quitting: bool = False
        self.cls()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, fg: Color, bg: Color, glyph: str) -> None:
        """Set a single cell. Out-of-range coordinates are ignored."""
        if not self.in_bounds(x, y):
            return
        self.glyphs[y, x] = glyph
        self.fg[y, x] = fg
        self.bg[y, x] = bg

    def cls(self) -> None:
        """Clear all glyphs and reset colors to the default menu colors."""
        self.glyphs[:] = BLANK
        self.fg[:] = self._default_fg
        self.bg[:] = self._default_bg

    def cls_bg(self, color: Color) -> None:
        """Clear all glyphs and fill the background with a color."""
        self.glyphs[:] = BLANK
        self.fg[:] = self._default_fg
        self.bg[:] = color

    def print(self, x: int, y: int, text: str) -> None:
        """Print text starting at (x, y) in the default foreground color."""
        if not (0 <= y < self.height):
            return
        for i, ch in enumerate(text):
            cx = x + i
            if 0 <= cx < self.width:
                self.glyphs[y, cx] = ch
                self.fg[y, cx] = self._default_fg

    def print_centered(self, y: int, text: str) -> None:
        """Print text horizontally centered on row y."""
        self.print((self.width - len(text)) // 2, y, text)

    def row_text(self, y: int) -> str:
        """Glyphs of row y as a string (trailing blanks stripped)."""
        return "".join(self.glyphs[y]).rstrip()

    def find_glyph(self, glyph: str) -> Tuple[Tuple[int, int], ...]:
        """All (x, y) cells currently holding the glyph."""
        ys, xs = np.nonzero(self.glyphs == glyph)
        return tuple((int(x), int(y)) for x, y in zip(xs, ys))
