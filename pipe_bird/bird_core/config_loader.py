"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import yaml


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class ScreenConfig:
    """Console geometry in cells."""
    width: int
    height: int


@dataclass(frozen=True)
class PhysicsConfig:
    """Fixed-step physics parameters."""
    frame_duration_ms: float     # Accumulated ms required for one gravity step
    gravity: float               # Velocity increment per gravity step
    terminal_velocity: float     # Velocity cap
    flap_velocity: float         # Velocity after a flap (negative = up)


@dataclass(frozen=True)
class BirdConfig:
    """Bird spawn and drawing parameters."""
    start_x: int
    start_y: int
    screen_column: int
    glyph: str


@dataclass(frozen=True)
class ObstacleConfig:
    """Pipe generation parameters."""
    gap_center_min: int
    gap_center_max: int
    base_gap_size: int
    min_gap_size: int
    glyph: str

    def gap_size_for(self, score: int) -> int:
        """Gap size for a pipe created at the given score."""
        return max(self.min_gap_size, self.base_gap_size - score)


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits."""
    max_env_steps: int


@dataclass(frozen=True)
class ColorConfig:
    """RGB colors used by the console frames."""
    menu_bg: Color
    play_bg: Color
    text_fg: Color
    bird_fg: Color
    wall_fg: Color
    cell_bg: Color


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    screen: ScreenConfig
    physics: PhysicsConfig
    bird: BirdConfig
    obstacle: ObstacleConfig
    caps: CapsConfig
    colors: ColorConfig


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_glyph(value) -> str:
    glyph = str(value)
    if len(glyph) != 1:
        raise ValueError(f"Glyph must be a single character, got {glyph!r}")
    return glyph


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    screen = config.screen
    if screen.width <= 0 or screen.height <= 0:
        raise ValueError(f"Screen must be non-empty, got {screen.width}x{screen.height}")

    physics = config.physics
    if physics.frame_duration_ms <= 0:
        raise ValueError(f"frame_duration_ms must be positive, got {physics.frame_duration_ms}")
    if physics.gravity <= 0:
        raise ValueError(f"gravity must be positive, got {physics.gravity}")
    if physics.flap_velocity >= 0:
        raise ValueError(f"flap_velocity must be negative (upward), got {physics.flap_velocity}")
    if physics.terminal_velocity <= 0:
        raise ValueError(f"terminal_velocity must be positive, got {physics.terminal_velocity}")

    bird = config.bird
    if not (0 <= bird.start_y < screen.height):
        raise ValueError(f"bird.start_y ({bird.start_y}) outside screen height {screen.height}")
    if not (0 <= bird.screen_column < screen.width):
        raise ValueError(f"bird.screen_column ({bird.screen_column}) outside screen width {screen.width}")

    obstacle = config.obstacle
    if obstacle.gap_center_min >= obstacle.gap_center_max:
        raise ValueError(
            f"Empty gap range [{obstacle.gap_center_min}, {obstacle.gap_center_max})"
        )
    if obstacle.gap_center_min < 0 or obstacle.gap_center_max > screen.height:
        raise ValueError(
            f"Gap range [{obstacle.gap_center_min}, {obstacle.gap_center_max}) "
            f"must lie within the screen height {screen.height}"
        )
    if obstacle.min_gap_size < 0 or obstacle.base_gap_size < obstacle.min_gap_size:
        raise ValueError(
            f"Need 0 <= min_gap_size ({obstacle.min_gap_size}) "
            f"<= base_gap_size ({obstacle.base_gap_size})"
        )

    if config.caps.max_env_steps <= 0:
        raise ValueError(f"max_env_steps must be positive, got {config.caps.max_env_steps}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    screen_data = raw["screen"]
    screen = ScreenConfig(
        width=int(screen_data["width"]),
        height=int(screen_data["height"])
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        frame_duration_ms=float(physics_data["frame_duration_ms"]),
        gravity=float(physics_data["gravity"]),
        terminal_velocity=float(physics_data["terminal_velocity"]),
        flap_velocity=float(physics_data["flap_velocity"])
    )

    bird_data = raw["bird"]
    bird = BirdConfig(
        start_x=int(bird_data["start_x"]),
        start_y=int(bird_data["start_y"]),
        screen_column=int(bird_data.get("screen_column", bird_data["start_x"])),
        glyph=_parse_glyph(bird_data.get("glyph", "@"))
    )

    obstacle_data = raw["obstacle"]
    obstacle = ObstacleConfig(
        gap_center_min=int(obstacle_data["gap_center_min"]),
        gap_center_max=int(obstacle_data["gap_center_max"]),
        base_gap_size=int(obstacle_data["base_gap_size"]),
        min_gap_size=int(obstacle_data.get("min_gap_size", 2)),
        glyph=_parse_glyph(obstacle_data.get("glyph", "|"))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_env_steps=int(caps_data.get("max_env_steps", 5000))
    )

    colors_data = raw["colors"]
    colors = ColorConfig(
        menu_bg=_parse_color(colors_data["menu_bg"]),
        play_bg=_parse_color(colors_data["play_bg"]),
        text_fg=_parse_color(colors_data["text_fg"]),
        bird_fg=_parse_color(colors_data["bird_fg"]),
        wall_fg=_parse_color(colors_data["wall_fg"]),
        cell_bg=_parse_color(colors_data.get("cell_bg", colors_data["menu_bg"]))
    )

    config = GameConfig(
        screen=screen,
        physics=physics,
        bird=bird,
        obstacle=obstacle,
        caps=caps,
        colors=colors
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
