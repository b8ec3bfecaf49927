import numpy as np
import pytest
from kinematics_sim.entity import MotionEntity
from kinematics_sim.types import EntityStatus


def test_freefall_impact_time():
    """
    Analytic (from rest):
      y(t) = h - 1/2 g t²
      t_impact = sqrt(2h / g)
    h = 20, g = 9.8 -> t_impact ≈ 2.0203 s.
    """
    h, g = 20.0, 9.8
    t_exp = np.sqrt(2 * h / g)
    dt = 1 / 240

    e = MotionEntity(position=(0.0, h, 0.0), motion_type="freefall", gravity=g)
    e.configure(bounce_enabled=False)
    e.launch()

    while e.status is EntityStatus.ACTIVE:
        e.update(dt)

    print("impact t", e.elapsed_time, "exp", t_exp)
    assert t_exp == pytest.approx(2.0203, abs=1e-4)
    assert t_exp <= e.elapsed_time <= t_exp + dt + 1e-9
    assert e.position[1] == 0.0
    assert e.status is EntityStatus.STOPPED


def test_freefall_position_and_velocity():
    e = MotionEntity(position=(3.0, 20.0, -1.0), motion_type="freefall")
    e.launch()
    e.update(1.0)

    assert e.position == pytest.approx(np.array([3.0, 20.0 - 4.9, -1.0]))
    assert e.velocity == pytest.approx(np.array([0.0, -9.8, 0.0]))


def test_freefall_launch_discards_configured_velocity():
    """Freefall always starts at rest under pure gravity."""
    e = MotionEntity(position=(0, 10, 0), velocity=(5.0, 5.0, 5.0), motion_type="freefall")
    e.launch()

    assert np.allclose(e.velocity, 0.0)
    assert np.allclose(e.initial_velocity, 0.0)
    assert np.allclose(e.acceleration, [0.0, -9.8, 0.0])

    e.update(0.5)
    assert e.position[0] == 0.0 and e.position[2] == 0.0


def test_freefall_stats():
    """
    t_impact = sqrt(2h/g), v_impact = g t_impact; time_to_impact counts down.
    """
    h, g = 20.0, 9.8
    e = MotionEntity(position=(0, h, 0), motion_type="freefall", gravity=g)
    e.launch()

    t_imp = np.sqrt(2 * h / g)
    assert e.stats.time_to_impact == pytest.approx(t_imp)
    assert e.stats.impact_velocity == pytest.approx(g * t_imp)

    e.update(0.5)
    assert e.stats.time_to_impact == pytest.approx(t_imp - 0.5)


def test_freefall_stats_guard_non_positive_gravity():
    """g <= 0 suppresses impact stats instead of producing NaN/inf."""
    e = MotionEntity(position=(0, 10, 0), motion_type="freefall", gravity=0.0)
    e.launch()
    e.update(0.1)

    assert e.stats.time_to_impact == 0.0
    assert e.stats.impact_velocity == 0.0
    assert np.isfinite(e.position).all()
