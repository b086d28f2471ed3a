"""
Tests for the cell console and the numpy rasterizer.
"""

import numpy as np
import pytest

from pipe_bird.bird_core.config_loader import load_config
from pipe_bird.bird_core.console import BLANK, Console
from pipe_bird.bird_core.render_solid import SolidRenderer


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def console(config):
    return Console(config)


class TestConsole:
    """Test console buffer operations."""

    def test_starts_blank(self, console):
        assert console.glyphs.shape == (50, 80)
        assert np.all(console.glyphs == BLANK)
        assert not console.quitting

    def test_set_cell(self, console):
        console.set(3, 4, (1, 2, 3), (4, 5, 6), "@")

        assert console.glyphs[4, 3] == "@"
        assert tuple(console.fg[4, 3]) == (1, 2, 3)
        assert tuple(console.bg[4, 3]) == (4, 5, 6)

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (80, 0), (0, 50), (200, 200)])
    def test_set_out_of_range_ignored(self, console, x, y):
        console.set(x, y, (1, 2, 3), (4, 5, 6), "@")
        assert console.find_glyph("@") == ()

    def test_cls_bg(self, console, config):
        console.set(0, 0, (1, 2, 3), (4, 5, 6), "@")
        console.cls_bg(config.colors.play_bg)

        assert console.find_glyph("@") == ()
        assert np.all(console.bg == np.array(config.colors.play_bg, dtype=np.uint8))

    def test_print_clips_at_edge(self, console):
        console.print(76, 2, "abcdef")
        assert console.row_text(2) == " " * 76 + "abcd"

    def test_print_centered(self, console):
        console.print_centered(5, "Game Over!")
        row = console.row_text(5)

        assert row.strip() == "Game Over!"
        assert row.index("G") == (80 - 10) // 2


class TestSolidRenderer:
    """Test SolidRenderer output."""

    def test_shape_and_dtype(self, console):
        img = SolidRenderer(cell_size=6).render(console)

        assert img.shape == (50 * 6, 80 * 6, 3)
        assert img.dtype == np.uint8

    def test_cell_colors(self, console):
        """Background fills the whole cell; a glyph paints its inner block."""
        console.set(2, 1, (255, 0, 0), (0, 0, 128), "|")
        img = SolidRenderer(cell_size=8).render(console)

        # Cell (2, 1) covers rows 8..15, cols 16..23
        assert tuple(img[8, 16]) == (0, 0, 128)
        assert tuple(img[12, 20]) == (255, 0, 0)
        # Blank neighbor keeps its background
        assert tuple(img[12, 28]) == tuple(console.bg[1, 3])

    def test_rejects_tiny_cells(self):
        with pytest.raises(ValueError):
            SolidRenderer(cell_size=1)
