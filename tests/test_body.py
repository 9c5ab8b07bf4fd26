"""Ball integration and boundary handling."""

import random

import pytest

from pidsim.body import Ball

DT = 1 / 60


def test_spawn_is_centred():
    ball = Ball()
    assert ball.position == pytest.approx(385.0)
    assert ball.measured_value == pytest.approx(400.0)
    assert ball.rendered_position == 385


def test_free_fall_tick_is_semi_implicit():
    ball = Ball(gravity=98.0)
    start = ball.position
    ball.update(0.0, DT)
    assert ball.velocity == pytest.approx(-98.0 * DT)
    # Position moves with the already updated velocity
    assert ball.position == pytest.approx(start - 98.0 * DT * DT)


def test_force_is_divided_by_mass():
    ball = Ball(mass=2.0, gravity=0.0)
    ball.update(10.0, 1.0)
    assert ball.velocity == pytest.approx(5.0)


def test_damping_scales_velocity_every_tick():
    ball = Ball(gravity=0.0, velocity=10.0, damping=0.5)
    ball.update(0.0, DT)
    assert ball.velocity == pytest.approx(5.0)


def test_floor_bounce_reverses_velocity():
    ball = Ball(position=0.0, velocity=-50.0, restitution=0.3)
    ball.update(0.0, DT)
    assert ball.position == 0.0
    assert ball.velocity == pytest.approx(0.3 * (50.0 + 98.0 * DT))
    assert ball.velocity >= 0.0


def test_floor_inelastic_zeroes_velocity():
    ball = Ball(position=0.0, velocity=-50.0, restitution=0.0)
    ball.update(0.0, DT)
    assert ball.position == 0.0
    assert ball.velocity == 0.0


def test_ceiling_bounce():
    ball = Ball(position=770.0, velocity=100.0)
    ball.update(0.0, DT)
    assert ball.position == ball.ceiling == 770.0
    assert ball.velocity < 0.0


def test_rendered_position_follows_position():
    ball = Ball(position=100.7, gravity=0.0)
    ball.update(0.0, DT)
    assert ball.rendered_position == 100


@pytest.mark.parametrize("restitution", [0.0, 0.3, 0.9])
def test_position_never_leaves_domain(restitution):
    rng = random.Random(11)
    ball = Ball(restitution=restitution)
    for _ in range(5000):
        ball.update(rng.uniform(-1e5, 1e5), DT)
        assert 0.0 <= ball.position <= ball.ceiling


def test_reset_returns_to_spawn_at_rest():
    ball = Ball()
    for _ in range(30):
        ball.update(0.0, DT)
    ball.reset()
    assert ball.position == pytest.approx(385.0)
    assert ball.velocity == 0.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mass": 0.0},
        {"size": 900.0},
        {"restitution": 1.0},
        {"restitution": -0.1},
        {"damping": 0.0},
        {"damping": 1.5},
    ],
)
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        Ball(**kwargs)
