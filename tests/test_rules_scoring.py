"""
Tests for termination rules and score tracking.
"""

import pytest

from pipe_bird.bird_core.config_loader import load_config
from pipe_bird.bird_core.bird import Bird
from pipe_bird.bird_core.obstacle import Obstacle
from pipe_bird.bird_core.rules import TerminationResult, TerminationRules
from pipe_bird.bird_core.scoring import ScoreTracker


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def rules(config):
    return TerminationRules(config)


class TestTerminationRules:
    """Test check_termination."""

    def test_alive(self, config, rules):
        bird = Bird(x=5, y=25, physics=config.physics)
        result = rules.check_termination(bird, Obstacle(x=80, gap_center=25, gap_size=20))

        assert result == TerminationResult.none()

    def test_fell(self, config, rules):
        bird = Bird(x=5, y=51, physics=config.physics)
        result = rules.check_termination(bird, Obstacle(x=80, gap_center=25, gap_size=20))

        assert result.terminated
        assert result.reason == TerminationRules.REASON_FELL

    def test_fall_checked_before_collision(self, config, rules):
        """A bird below the screen in the pipe column reports falling."""
        bird = Bird(x=80, y=55, physics=config.physics)
        result = rules.check_termination(bird, Obstacle(x=80, gap_center=25, gap_size=4))

        assert result.reason == TerminationRules.REASON_FELL

    def test_hit_pipe(self, config, rules):
        bird = Bird(x=80, y=5, physics=config.physics)
        result = rules.check_termination(bird, Obstacle(x=80, gap_center=25, gap_size=4))

        assert result.terminated
        assert not result.truncated
        assert result.reason == TerminationRules.REASON_HIT_PIPE

    def test_uncapped_by_default(self, config, rules):
        """Interactive rules never truncate."""
        bird = Bird(x=5, y=25, physics=config.physics)
        result = rules.check_termination(bird, Obstacle(x=80, gap_center=25, gap_size=20), steps=10**6)

        assert rules.max_steps is None
        assert result == TerminationResult.none()

    def test_step_cap_truncates(self, config):
        """Reaching max_steps truncates instead of ending the game."""
        capped = TerminationRules(config, max_steps=10)
        bird = Bird(x=5, y=25, physics=config.physics)
        pipe = Obstacle(x=80, gap_center=25, gap_size=20)

        assert capped.check_termination(bird, pipe, steps=9) == TerminationResult.none()

        result = capped.check_termination(bird, pipe, steps=10)
        assert result.truncated
        assert not result.terminated
        assert result.reason == TerminationRules.REASON_STEP_CAP

    def test_game_over_wins_over_step_cap(self, config):
        """A fall on the capping step is reported as a fall."""
        capped = TerminationRules(config, max_steps=10)
        bird = Bird(x=5, y=51, physics=config.physics)
        result = capped.check_termination(bird, Obstacle(x=80, gap_center=25, gap_size=20), steps=10)

        assert result.terminated
        assert not result.truncated
        assert result.reason == TerminationRules.REASON_FELL


class TestScoreTracker:
    """Test ScoreTracker."""

    def test_one_point_per_pipe(self):
        tracker = ScoreTracker()
        first = tracker.apply_pass(80)
        second = tracker.apply_pass(160)

        assert (first.points, first.total) == (1, 1)
        assert (second.pipe_x, second.total) == (160, 2)
        assert tracker.score == 2

    def test_reset(self):
        tracker = ScoreTracker()
        tracker.apply_pass(80)
        tracker.reset()

        assert tracker.score == 0
