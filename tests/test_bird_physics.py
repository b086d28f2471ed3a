"""
Tests for bird gravity steps and flaps.
"""

import pytest

from pipe_bird.bird_core.config_loader import load_config
from pipe_bird.bird_core.bird import Bird


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def bird(config):
    return Bird.spawn(config)


class TestSpawn:
    """Test initial bird state."""

    def test_spawn_position(self, bird):
        """Bird starts at (5, 25) at rest."""
        assert (bird.x, bird.y) == (5, 25)
        assert bird.velocity == 0.0

    def test_default_physics(self):
        """Bird built without physics uses the default config."""
        bird = Bird(x=0, y=0)
        assert bird.physics.gravity == pytest.approx(0.2)


class TestGravityStep:
    """Test a single fixed gravity step."""

    def test_first_step_from_rest(self, bird):
        """One step from rest: velocity 0.2, y unchanged (0.2 truncates to 0), x + 1."""
        bird.apply_gravity_step()

        assert bird.velocity == pytest.approx(0.2)
        assert bird.y == 25
        assert bird.x == 6

    def test_x_advances_by_one_each_step(self, bird):
        """Every step moves exactly one column right."""
        for i in range(1, 30):
            bird.apply_gravity_step()
            assert bird.x == 5 + i

    def test_velocity_monotonic_and_capped(self, bird):
        """Without flaps velocity never decreases and never exceeds 2.0."""
        previous = bird.velocity
        for _ in range(40):
            bird.apply_gravity_step()
            assert bird.velocity >= previous
            assert bird.velocity <= 2.0
            previous = bird.velocity

        assert bird.velocity == pytest.approx(2.0)

    def test_falls_at_terminal_velocity(self, bird):
        """At the cap the bird drops two rows per step."""
        bird.velocity = 2.0
        bird.apply_gravity_step()
        assert bird.y == 27

    def test_truncates_toward_zero(self, bird):
        """Negative fractional velocity truncates toward zero."""
        bird.velocity = -1.6  # -1.4 after the step
        bird.apply_gravity_step()
        assert bird.y == 24

        bird.velocity = -0.6
        bird.apply_gravity_step()
        assert bird.y == 24

    def test_clamped_at_top(self, config):
        """A step that would put y at -3 stores 0."""
        bird = Bird(x=5, y=0, velocity=-3.2, physics=config.physics)
        bird.apply_gravity_step()
        assert bird.y == 0

    def test_never_above_top(self, config):
        """Repeated flaps at the top row keep y at 0."""
        bird = Bird(x=5, y=1, physics=config.physics)
        for _ in range(20):
            bird.impulse()
            bird.apply_gravity_step()
            assert bird.y >= 0

    def test_no_lower_clamp(self, config):
        """The bird can fall past the bottom of the screen."""
        bird = Bird(x=5, y=49, velocity=2.0, physics=config.physics)
        bird.apply_gravity_step()
        assert bird.y == 51


class TestDataclass:
    """Test Bird value semantics."""

    def test_equality_ignores_physics(self, config):
        """Birds compare by state; the physics they were built with does not matter."""
        other_physics = type(config.physics)(
            frame_duration_ms=50.0, gravity=0.5, terminal_velocity=3.0, flap_velocity=-3.0
        )
        a = Bird(x=5, y=25, velocity=0.2, physics=config.physics)
        b = Bird(x=5, y=25, velocity=0.2, physics=other_physics)

        assert a == b
        assert a != Bird(x=5, y=26, velocity=0.2, physics=config.physics)

    def test_repr_omits_physics(self, bird):
        text = repr(bird)

        assert "physics" not in text
        assert "x=5" in text and "y=25" in text


class TestImpulse:
    """Test flapping."""

    @pytest.mark.parametrize("velocity", [-2.0, -0.4, 0.0, 1.2, 2.0])
    def test_impulse_resets_velocity(self, bird, velocity):
        """Velocity is -2.0 right after a flap, whatever it was."""
        bird.velocity = velocity
        bird.impulse()
        assert bird.velocity == -2.0

    def test_impulse_does_not_move(self, bird):
        """A flap changes velocity only; movement waits for the next step."""
        bird.impulse()
        assert (bird.x, bird.y) == (5, 25)

    def test_flap_then_step_rises(self, bird):
        """After a flap the next step moves the bird up one row."""
        bird.impulse()
        bird.apply_gravity_step()
        assert bird.velocity == pytest.approx(-1.8)
        assert bird.y == 24
