"""
Baseline Flapper Agent Package

A simple heuristic agent that flaps whenever the bird sinks below the
center of the next gap. Serves as a benchmark and example.
"""

from .agent import BirdAgent, create_agent

__all__ = ["BirdAgent", "create_agent"]
