"""
Pipe Bird Package
=================

A small console arcade game: the bird falls under gravity, flaps upward on
Space, and must pass through the gap of each pipe it meets. Every pipe
passed scores a point and narrows the next gap.

- bird_core: game simulation, state machine, rendering and Gymnasium env
- evaluation: seed bank and agent evaluation harness

All tunable parameters are in game_config.yaml.
"""
