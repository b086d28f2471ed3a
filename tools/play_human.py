"""
Human Play Mode
================

Play Pipe Bird interactively in an 80x50 cell window.

Controls:
    - P: Play (from the menu or the game over screen)
    - Space: Flap
    - Q / ESC: Quit (from the menu or the game over screen)

Usage:
    python -m tools.play_human [--seed SEED] [--cell-size PX] [--fps FPS]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from pipe_bird.bird_core.config_loader import GameConfig, load_config
from pipe_bird.bird_core.console import Console
from pipe_bird.bird_core.game import GameMode, PipeBirdGame
from pipe_bird.bird_core.render_pygame import PygameTerminal


# Display failures that mean the window could not be opened
WINDOW_ERRORS = (pygame.error,) if PYGAME_AVAILABLE else ()


class HumanPlayer:
    """
    The render/input loop.

    Each frame: measure elapsed time, poll at most one key, tick the game,
    present the console. Stops once the game raises the quit flag.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        cell_size: int = 12,
        target_fps: int = 60,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        self._game = PipeBirdGame(config=config, seed=seed, debug=debug)
        self._console = Console(config)

        # Opening the window is the only step that can fail at startup
        self._terminal = PygameTerminal(self._console, cell_size=cell_size)
        self._clock = pygame.time.Clock()

    def run(self) -> int:
        """Run the game loop. Returns the score of the last run."""
        print("=== Pipe Bird ===")
        print("P to play, Space to flap, Q to quit")
        print()

        last_mode = self._game.mode
        last_score = 0

        try:
            while not self._console.quitting:
                elapsed_ms = float(self._clock.tick(self._target_fps))
                key = self._terminal.poll_key()
                if self._console.quitting:
                    break

                self._game.tick(self._console, elapsed_ms, key)
                self._terminal.present()

                if self._game.score > last_score:
                    print(f"  +{self._game.score - last_score} (Total: {self._game.score})")
                last_score = self._game.score

                mode = self._game.mode
                if mode is not last_mode:
                    if mode is GameMode.END:
                        print(f"\nGAME OVER ({self._game.termination_reason}) - Score: {self._game.score}")
                    elif mode is GameMode.PLAYING:
                        print("\n=== Game Started ===\n")
                        last_score = 0
                    last_mode = mode
        finally:
            self._terminal.close()

        return self._game.score


def main():
    parser = argparse.ArgumentParser(description="Play Pipe Bird interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--cell-size", type=int, default=12, help="Cell size in pixels (default: 12)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--debug", action="store_true", help="Print game events")

    args = parser.parse_args()

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: invalid game configuration: {e}")
        return 1

    try:
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            cell_size=args.cell_size,
            target_fps=args.fps,
            debug=args.debug
        )
    except ImportError as e:
        print(f"Error: {e}")
        return 1
    except WINDOW_ERRORS as e:
        print(f"Error: could not open the game window: {e}")
        return 1

    score = player.run()
    print(f"\nFinal Score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
