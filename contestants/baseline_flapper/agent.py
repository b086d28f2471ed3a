"""
Baseline Flapper Agent - Holds the bird at the next gap's center.

This is a simple heuristic agent that compares the bird's row with the
center of the upcoming gap and flaps whenever the bird is below it.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare against
3. A verification that the environment API works correctly

Strategy:
- Read bird_y, velocity and gap_center
- Flap if the bird is below the gap center (rows grow downward)
- Also flap early when falling fast toward the lower edge of the gap
"""

from typing import Any, Dict, Optional


# Rows above the gap center within which a fast fall triggers an early flap
FALL_MARGIN = 2


class BirdAgent:
    """
    Simple baseline agent that tracks the next gap's center.

    A flap costs nothing, so the agent flaps on every step the bird is
    below target and lets gravity do the rest.
    """

    def __init__(self, debug: bool = False):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
        """
        self.debug = debug
        self._steps = 0

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode."""
        self._steps = 0

    def act(self, observation: Dict[str, Any], debug: bool = False) -> int:
        """
        Choose whether to flap.

        Args:
            observation: Dict of numpy scalars from the environment.
            debug: If True, print debug info for this step.

        Returns:
            1 to flap, 0 to do nothing.
        """
        bird_y = float(observation["bird_y"])
        velocity = float(observation["velocity"])
        gap_center = float(observation["gap_center"])

        below_target = bird_y > gap_center
        diving = velocity >= 1.0 and bird_y + FALL_MARGIN > gap_center
        action = 1 if (below_target or diving) else 0

        self._steps += 1

        if debug or self.debug:
            print(f"[Flapper Agent] step={self._steps} y={bird_y:.0f} v={velocity:+.2f} "
                  f"gap={gap_center:.0f} size={float(observation['gap_size']):.0f} "
                  f"-> {'FLAP' if action else 'wait'}")

        return action


# Convenience function to create agent (used by evaluation harness)
def create_agent(**kwargs) -> BirdAgent:
    """Factory function to create an agent instance."""
    return BirdAgent(**kwargs)
