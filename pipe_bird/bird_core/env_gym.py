"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the Pipe Bird game.
One environment step is one fixed gravity step of the game.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from pipe_bird.bird_core.config_loader import GameConfig, load_config
from pipe_bird.bird_core.console import Console
from pipe_bird.bird_core.game import PipeBirdGame


class PipeBirdEnv(gym.Env):
    """
    Pipe Bird as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = flap.

    Observation Space:
        Dict of scalars: bird_y, velocity, obstacle_dx, gap_center, gap_size
        (float32) and score (int32).

    Reward:
        1.0 for each pipe passed during the step, else 0.0.

    Info:
        Contains score, steps, seed, terminated_reason and delta_score.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 13,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        cell_size: int = 8,
        max_steps: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize Pipe Bird environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            cell_size: Pixel size of one cell when rendering.
            max_steps: Truncation limit. Uses caps.max_env_steps if None.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")

        self.render_mode = render_mode
        self._cell_size = cell_size
        self._max_steps = max_steps if max_steps is not None else self._config.caps.max_env_steps
        self._debug = debug

        self._game = PipeBirdGame(config=self._config, debug=debug, max_steps=self._max_steps)
        self._console = Console(self._config)

        # Renderers (lazy)
        self._solid = None
        self._terminal = None

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            screen = self._config.screen
            print(f"[DEBUG] PipeBirdEnv initialized")
            print(f"[DEBUG]   Screen: {screen.width}x{screen.height}")
            print(f"[DEBUG]   Max steps: {self._max_steps}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        screen = self._config.screen
        physics = self._config.physics
        obstacle = self._config.obstacle
        # The bird may sink a few rows past the bottom before the run ends
        max_y = float(screen.height + physics.terminal_velocity + 1)
        max_speed = float(max(abs(physics.flap_velocity), physics.terminal_velocity))

        return spaces.Dict({
            "bird_y": spaces.Box(low=0.0, high=max_y, shape=(), dtype=np.float32),
            "velocity": spaces.Box(low=-max_speed, high=max_speed, shape=(), dtype=np.float32),
            "obstacle_dx": spaces.Box(low=0.0, high=float(screen.width), shape=(), dtype=np.float32),
            "gap_center": spaces.Box(
                low=float(obstacle.gap_center_min),
                high=float(obstacle.gap_center_max),
                shape=(),
                dtype=np.float32
            ),
            "gap_size": spaces.Box(
                low=float(obstacle.min_gap_size),
                high=float(obstacle.base_gap_size),
                shape=(),
                dtype=np.float32
            ),
            "score": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.restart(seed=seed)

        obs = self._get_obs()
        info = self._game.get_info()
        info["delta_score"] = 0

        if self.render_mode == "human":
            self.render()

        return obs, info

    def step(
        self,
        action: Union[int, np.integer]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: 0 to do nothing, 1 to flap.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        assert self.action_space.contains(action), f"Invalid action {action}"

        result = self._game.advance(flap=int(action) == 1)

        obs = self._get_obs()
        reward = float(result.delta_score)
        terminated = bool(result.terminated)
        truncated = bool(result.truncated)

        info = self._game.get_info()
        info["delta_score"] = result.delta_score

        if self._debug:
            print(f"[DEBUG] Step: action={int(action)}, y={obs['bird_y']:.0f}, "
                  f"v={obs['velocity']:.2f}, dx={obs['obstacle_dx']:.0f}, score={obs['score']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {info.get('terminated_reason', 'unknown')}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _get_obs(self) -> Dict[str, np.ndarray]:
        """Convert the game's render data to the observation dict."""
        data = self._game.get_render_data()
        # Clip into the declared bounds
        bird_y = min(float(data["bird_y"]), float(self.observation_space["bird_y"].high))
        return {
            "bird_y": np.array(bird_y, dtype=np.float32),
            "velocity": np.array(data["velocity"], dtype=np.float32),
            "obstacle_dx": np.array(max(0, data["obstacle_dx"]), dtype=np.float32),
            "gap_center": np.array(data["gap_center"], dtype=np.float32),
            "gap_size": np.array(data["gap_size"], dtype=np.float32),
            "score": np.array(data["score"], dtype=np.int32),
        }

    def _draw_console(self) -> None:
        """Draw the current Playing frame without advancing time."""
        self._game.tick(self._console, 0.0)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode is None:
            return None

        self._draw_console()

        if self.render_mode == "rgb_array":
            if self._solid is None:
                from pipe_bird.bird_core.render_solid import SolidRenderer
                self._solid = SolidRenderer(self._cell_size)
            return self._solid.render(self._console)

        if self._terminal is None:
            from pipe_bird.bird_core.render_pygame import PygameTerminal
            self._terminal = PygameTerminal(self._console, cell_size=self._cell_size)
        self._terminal.poll_key()
        self._terminal.present()
        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._solid is not None:
            self._solid.close()
            self._solid = None
        if self._terminal is not None:
            self._terminal.close()
            self._terminal = None

    @property
    def game(self) -> PipeBirdGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
