"""
Solid Renderer
==============

Fast numpy-based renderer that rasterizes a Console into an RGB array.
Each cell becomes a block of its background color; cells holding a glyph
get a smaller centered block of their foreground color.
"""

from __future__ import annotations

import numpy as np

from pipe_bird.bird_core.console import BLANK, Console


class SolidRenderer:
    """
    Renders console cells as solid color blocks.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, cell_size: int = 8):
        """
        Initialize renderer.

        Args:
            cell_size: Pixel size of one square cell.
        """
        if cell_size < 2:
            raise ValueError(f"cell_size must be at least 2, got {cell_size}")

        self._cell_size = cell_size
        # Glyph block inset on each side
        self._inset = max(1, cell_size // 4)

    @property
    def cell_size(self) -> int:
        return self._cell_size

    def render(self, console: Console) -> np.ndarray:
        """
        Render the console to an RGB array.

        Args:
            console: Console to rasterize.

        Returns:
            (height * cell_size, width * cell_size, 3) uint8 array.
        """
        size = self._cell_size

        # Background: repeat every cell color into a size x size block
        img = np.repeat(np.repeat(console.bg, size, axis=0), size, axis=1)

        # Foreground: same expansion, masked to the glyph cells' inner blocks
        fg = np.repeat(np.repeat(console.fg, size, axis=0), size, axis=1)
        has_glyph = np.repeat(np.repeat(console.glyphs != BLANK, size, axis=0), size, axis=1)

        inner = np.zeros((size, size), dtype=bool)
        inner[self._inset:size - self._inset, self._inset:size - self._inset] = True
        inner_mask = np.tile(inner, (console.height, console.width))

        mask = has_glyph & inner_mask
        img[mask] = fg[mask]
        return img

    def close(self) -> None:
        """Nothing to release; present for renderer interface parity."""
