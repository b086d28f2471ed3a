"""
Bird
====

The player-controlled entity: integer cell position plus a real vertical
velocity, advanced one fixed gravity step at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pipe_bird.bird_core.config_loader import GameConfig, PhysicsConfig, get_config


@dataclass
class Bird:
    """
    Falling actor.

    y grows downward; the top row is 0 and the bird can never rise above it.
    There is no lower clamp, falling past the bottom is how a run ends.
    """
    x: int
    y: int
    velocity: float = 0.0
    physics: Optional[PhysicsConfig] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.physics is None:
            self.physics = get_config().physics

    @classmethod
    def spawn(cls, config: Optional[GameConfig] = None) -> "Bird":
        """Create a bird at the configured start position, at rest."""
        if config is None:
            config = get_config()
        return cls(
            x=config.bird.start_x,
            y=config.bird.start_y,
            velocity=0.0,
            physics=config.physics
        )

    def apply_gravity_step(self) -> None:
        """Advance one fixed step: accelerate, fall, move one column right."""
        terminal = self.physics.terminal_velocity
        if self.velocity < terminal:
            # Repeated float increments overshoot the cap, e.g. 1.9999999999999998 + 0.2
            self.velocity = min(self.velocity + self.physics.gravity, terminal)

        self.y += int(self.velocity)
        self.x += 1

        if self.y < 0:
            self.y = 0

    def impulse(self) -> None:
        """Flap: reset velocity to the upward flap velocity."""
        self.velocity = self.physics.flap_velocity
