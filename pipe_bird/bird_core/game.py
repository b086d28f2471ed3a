"""
Core Game
=========

Game controller: owns the mode, the bird, the current pipe, the score and the
fixed-step frame accumulator, and dispatches each frame to the handler for
the current mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pipe_bird.bird_core.bird import Bird
from pipe_bird.bird_core.config_loader import GameConfig, get_config
from pipe_bird.bird_core.console import Console, Key
from pipe_bird.bird_core.obstacle import Obstacle
from pipe_bird.bird_core.rng import GapGenerator
from pipe_bird.bird_core.rules import TerminationResult, TerminationRules
from pipe_bird.bird_core.scoring import ScoreEvent, ScoreTracker


TITLE = "Welcome to Pipe Bird"


class GameMode(Enum):
    """Closed set of controller modes."""
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


@dataclass
class StepResult:
    """Result of a single headless fixed step."""
    terminated: bool
    truncated: bool
    termination_reason: str
    delta_score: int
    events: List[ScoreEvent] = field(default_factory=list)


class PipeBirdGame:
    """
    Main game state machine.

    Menu --P--> Playing --(fell / hit pipe)--> End --P--> Playing.
    Q in Menu or End raises the console quit flag.

    Physics advance in fixed gravity steps: frame time accumulates until it
    exceeds frame_duration_ms, then exactly one step runs and the
    accumulator restarts from zero.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        debug: bool = False,
        max_steps: Optional[int] = None
    ):
        """
        Initialize game in Menu mode.

        Args:
            config: Game configuration. Uses default if None.
            seed: Seed for pipe gap placement. Random if None.
            debug: If True, print mode transitions and score events.
            max_steps: Truncate a run after this many steps. Uncapped if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._debug = debug

        self._gaps = GapGenerator(config, seed)
        self._scorer = ScoreTracker()
        self._rules = TerminationRules(config, max_steps)

        self._mode = GameMode.MENU
        self._bird = Bird.spawn(config)
        self._obstacle = self._new_obstacle(config.screen.width)
        self._frame_time: float = 0.0
        self._steps: int = 0
        self._termination = TerminationResult.none()

    # -------------------- State --------------------

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def bird(self) -> Bird:
        return self._bird

    @property
    def obstacle(self) -> Obstacle:
        return self._obstacle

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def frame_time(self) -> float:
        """Milliseconds accumulated since the last gravity step."""
        return self._frame_time

    @property
    def steps(self) -> int:
        """Gravity steps taken in the current run."""
        return self._steps

    @property
    def seed(self) -> Optional[int]:
        return self._gaps.seed

    @property
    def is_over(self) -> bool:
        """True if the last run has ended."""
        return self._mode is GameMode.END

    @property
    def is_truncated(self) -> bool:
        """True if the current run hit the step cap."""
        return self._termination.truncated

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination.reason

    def _new_obstacle(self, x: int) -> Obstacle:
        return Obstacle.create(x, self._scorer.score, self._gaps, self._config)

    def restart(self, seed: Optional[int] = None) -> None:
        """
        Start a fresh run in Playing mode.

        Args:
            seed: Reseed pipe placement. Continues the current sequence if None.
        """
        if seed is not None:
            self._gaps.reset(seed)

        self._mode = GameMode.PLAYING
        self._scorer.reset()
        self._bird = Bird.spawn(self._config)
        self._frame_time = 0.0
        self._obstacle = self._new_obstacle(self._config.screen.width)
        self._steps = 0
        self._termination = TerminationResult.none()

        if self._debug:
            print(f"[DEBUG] Run started: seed={self.seed}, first gap at y={self._obstacle.gap_center}")

    # -------------------- Frame dispatch --------------------

    def tick(self, console: Console, elapsed_ms: float, key: Optional[Key] = None) -> None:
        """
        Run one frame.

        Args:
            console: Draw target; its quitting flag is raised on Q.
            elapsed_ms: Real time since the previous frame.
            key: The key pressed this frame, if any.
        """
        if self._mode is GameMode.MENU:
            self._menu(console, key)
        elif self._mode is GameMode.PLAYING:
            self._play(console, elapsed_ms, key)
        elif self._mode is GameMode.END:
            self._end(console, key)

    def _menu(self, console: Console, key: Optional[Key]) -> None:
        console.cls()
        console.print_centered(5, TITLE)
        console.print_centered(8, "(P) Play Game")
        console.print_centered(9, "(Q) Quit Game")
        self._handle_menu_key(console, key)

    def _end(self, console: Console, key: Optional[Key]) -> None:
        console.cls()
        console.print_centered(5, "Game Over!")
        console.print_centered(6, f"Score: {self.score}")
        console.print_centered(8, "(P) Play Game")
        console.print_centered(9, "(Q) Quit Game")
        self._handle_menu_key(console, key)

    def _handle_menu_key(self, console: Console, key: Optional[Key]) -> None:
        if key is Key.PLAY:
            self.restart()
        elif key is Key.QUIT:
            console.quitting = True

    def _play(self, console: Console, elapsed_ms: float, key: Optional[Key]) -> None:
        console.cls_bg(self._config.colors.play_bg)

        self._frame_time += elapsed_ms
        if self._frame_time > self._config.physics.frame_duration_ms:
            self._frame_time = 0.0
            self._gravity_step()

        # Input is read every frame, not only on gravity steps
        if key is Key.FLAP:
            self._bird.impulse()

        self._draw_play(console)
        self._update_progress()

    def _draw_play(self, console: Console) -> None:
        colors = self._config.colors
        console.set(
            self._config.bird.screen_column,
            self._bird.y,
            colors.bird_fg,
            colors.cell_bg,
            self._config.bird.glyph
        )
        console.print(0, 0, "Press (Space) to Flap")
        console.print(0, 1, f"Score: {self.score}")
        self._obstacle.draw(console, self._bird.x, self._config)

    # -------------------- Simulation --------------------

    def _gravity_step(self) -> None:
        self._bird.apply_gravity_step()
        self._steps += 1

    def _update_progress(self) -> List[ScoreEvent]:
        """Score a passed pipe, then check for the end of the run."""
        events: List[ScoreEvent] = []

        if self._bird.x > self._obstacle.x:
            event = self._scorer.apply_pass(self._obstacle.x)
            events.append(event)
            self._obstacle = self._new_obstacle(self._bird.x + self._config.screen.width)
            if self._debug:
                print(f"[DEBUG] {event} next gap y={self._obstacle.gap_center} "
                      f"size={self._obstacle.gap_size}")

        result = self._rules.check_termination(self._bird, self._obstacle, self._steps)
        if result.truncated and not self._termination.truncated:
            self._termination = result
            if self._debug:
                print(f"[DEBUG] Truncated ({result.reason}) after {self._steps} steps, score={self.score}")
        elif result.terminated:
            self._termination = result
            self._mode = GameMode.END
            if self._debug:
                print(f"[DEBUG] Game over ({result.reason}) at x={self._bird.x} "
                      f"y={self._bird.y}, score={self.score}")

        return events

    def advance(self, flap: bool = False) -> StepResult:
        """
        Execute one headless fixed step (for agents).

        Flap first if requested, then one gravity step, scoring and the
        termination check. Nothing is drawn and the frame accumulator is
        left alone.

        Args:
            flap: Whether to flap before the step.

        Returns:
            StepResult for this step.
        """
        if self._mode is not GameMode.PLAYING:
            return StepResult(
                terminated=self.is_over,
                truncated=self._termination.truncated,
                termination_reason=self._termination.reason,
                delta_score=0
            )

        score_before = self.score
        if flap:
            self._bird.impulse()
        self._gravity_step()
        events = self._update_progress()

        return StepResult(
            terminated=self._termination.terminated,
            truncated=self._termination.truncated,
            termination_reason=self._termination.reason,
            delta_score=self.score - score_before,
            events=events
        )

    # -------------------- Introspection --------------------

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "mode": self._mode.value,
            "score": self.score,
            "steps": self._steps,
            "seed": self.seed,
            "terminated_reason": self._termination.reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering or observations.

        Returns:
            Dict with bird, pipe and board info.
        """
        return {
            "screen_width": self._config.screen.width,
            "screen_height": self._config.screen.height,
            "mode": self._mode.value,
            "bird_x": self._bird.x,
            "bird_y": self._bird.y,
            "velocity": self._bird.velocity,
            "obstacle_x": self._obstacle.x,
            "obstacle_dx": self._obstacle.x - self._bird.x,
            "gap_center": self._obstacle.gap_center,
            "gap_size": self._obstacle.gap_size,
            "score": self.score,
        }
