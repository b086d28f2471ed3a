"""
Pygame Terminal
===============

Presents a Console in a pygame window, one font glyph per cell, and turns
keyboard events into the game's discrete key presses.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from pipe_bird.bird_core.console import BLANK, Console, Key


WINDOW_TITLE = "pipe-bird"


class PygameTerminal:
    """
    Window sized to the console grid.

    Raises at construction if pygame is missing (ImportError) or the display
    cannot be opened (pygame.error); callers treat either as a startup
    failure.
    """

    def __init__(self, console: Console, cell_size: int = 12, title: str = WINDOW_TITLE):
        """
        Initialize the window.

        Args:
            console: Console whose buffers are presented each frame.
            cell_size: Pixel size of one square cell.
            title: Window caption.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameTerminal. Install: pip install pygame")

        self._console = console
        self._cell_size = cell_size

        if not pygame.get_init():
            pygame.init()

        size = (console.width * cell_size, console.height * cell_size)
        self._screen = pygame.display.set_mode(size)
        pygame.display.set_caption(title)

        pygame.font.init()
        self._font = pygame.font.Font(None, int(cell_size * 1.4))

        self._key_map: Dict[int, Key] = {
            pygame.K_p: Key.PLAY,
            pygame.K_q: Key.QUIT,
            pygame.K_ESCAPE: Key.QUIT,
            pygame.K_SPACE: Key.FLAP,
        }
        self._glyph_cache: Dict[Tuple[str, Tuple[int, int, int]], pygame.Surface] = {}

    @property
    def screen(self) -> "pygame.Surface":
        return self._screen

    def poll_key(self) -> Optional[Key]:
        """
        Drain the event queue and return the first mapped key press.

        Closing the window raises the console quit flag.
        """
        key: Optional[Key] = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._console.quitting = True
            elif event.type == pygame.KEYDOWN and key is None:
                key = self._key_map.get(event.key)
        return key

    def _glyph_surface(self, glyph: str, color: Tuple[int, int, int]) -> "pygame.Surface":
        cache_key = (glyph, color)
        surface = self._glyph_cache.get(cache_key)
        if surface is None:
            surface = self._font.render(glyph, True, color)
            self._glyph_cache[cache_key] = surface
        return surface

    def present(self) -> None:
        """Draw every console cell and flip the display."""
        console = self._console
        size = self._cell_size

        for y in range(console.height):
            for x in range(console.width):
                rect = pygame.Rect(x * size, y * size, size, size)
                bg = tuple(int(c) for c in console.bg[y, x])
                self._screen.fill(bg, rect)

                glyph = console.glyphs[y, x]
                if glyph == BLANK:
                    continue
                fg = tuple(int(c) for c in console.fg[y, x])
                surface = self._glyph_surface(str(glyph), fg)
                self._screen.blit(surface, surface.get_rect(center=rect.center))

        pygame.display.flip()

    def close(self) -> None:
        """Clean up pygame resources."""
        self._glyph_cache.clear()
        pygame.display.quit()
        pygame.quit()
