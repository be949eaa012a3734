import math

import pytest

from obliterator.bullet import Bullet


def make_bullet(**overrides):
    values = dict(
        damage=20,
        critical_hit_chance=0.0,
        critical_damage_coefficient=1.3,
        movement_speed=100,
        max_flight_distance=300,
        penetrating=False,
        movement_unit_vector=(1.0, 0.0),
    )
    values.update(overrides)
    return Bullet(**values)


def test_new_bullet_state():
    bullet = make_bullet()
    assert bullet.animation_state == "idle"
    assert bullet.exploding is False
    assert bullet.damaged_enemies == []
    assert bullet.fps == 10
    assert [s.state_name for s in bullet.animation.animation_states] == ["idle", "burst"]


def test_bullet_moves_along_vector():
    bullet = make_bullet()
    bullet.move_bullet(0.5)
    assert bullet.position == pytest.approx((50.0, 0.0))
    assert bullet.current_flight_distance == pytest.approx(50.0)


def test_flight_distance_matches_displacement():
    bullet = make_bullet(movement_unit_vector=(0.6, 0.8))
    for _ in range(3):
        bullet.move_bullet(0.25)
    x, y = bullet.position
    assert bullet.current_flight_distance == pytest.approx(math.hypot(x, y))


def test_bullet_bursts_at_range_limit():
    bullet = make_bullet(max_flight_distance=50)
    bullet.move_bullet(0.5)
    assert bullet.exploding is False
    bullet.move_bullet(0.1)
    assert bullet.exploding is True
    assert bullet.animation_state == "burst"
    assert bullet.movement_speed == 5.0


def test_blow_up():
    bullet = make_bullet()
    bullet.blow_up()
    assert bullet.exploding is True
    assert bullet.animation_state == "burst"


def test_damage_without_crit_chance():
    bullet = make_bullet(critical_hit_chance=0.0)
    assert all(bullet.roll_damage() == 20 for _ in range(50))


def test_damage_with_certain_crit():
    bullet = make_bullet(critical_hit_chance=2.0)
    assert all(bullet.roll_damage() == pytest.approx(20 * 1.3) for _ in range(50))


def test_movement_speed_is_truncated_to_integer():
    bullet = make_bullet(movement_speed=140.9)
    assert bullet.movement_speed == 140