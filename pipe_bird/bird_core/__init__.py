"""
Bird Core - The game simulation and its front ends.

Main exports:
- PipeBirdGame: Menu/Playing/End state machine, ticked once per frame
- GameMode: The controller's modes
- Console / Key: Cell console the game draws into, and its key presses
- Bird / Obstacle: The falling actor and the pipe it must pass
- PipeBirdEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from pipe_bird.bird_core.config_loader import GameConfig, load_config
from pipe_bird.bird_core.bird import Bird
from pipe_bird.bird_core.obstacle import Obstacle
from pipe_bird.bird_core.console import Console, Key
from pipe_bird.bird_core.game import GameMode, PipeBirdGame
from pipe_bird.bird_core.env_gym import PipeBirdEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Bird",
    "Obstacle",
    "Console",
    "Key",
    "GameMode",
    "PipeBirdGame",
    "PipeBirdEnv",
]
