import numpy as np
import pytest
from kinematics_sim.entity import MotionEntity
from kinematics_sim.types import EntityStatus


def _launch_45(g=9.8):
    e = MotionEntity(position=(0.0, 0.0, 0.0))
    e.configure(
        motion_type="projectile",
        velocity_mag=20.0,
        direction_angle=0.0,     # heading +z
        vertical_angle=45.0,
        gravity=g,
        bounce_enabled=False,
    )
    e.launch()
    return e


def test_projectile_stats_45_degrees():
    """
    V = 20 m/s, θ = 45°, g = 9.8:
      R = V² sin(2θ) / g ≈ 40.816
      H = (V sin θ)² / (2g) ≈ 10.204
      T = 2 V sin θ / g ≈ 2.886
    """
    e = _launch_45()
    s = e.stats

    assert s.range == pytest.approx(40.816, abs=1e-3)
    assert s.max_height == pytest.approx(10.204, abs=1e-3)
    assert s.flight_time == pytest.approx(2.886, abs=1e-3)
    # Symmetric flight: lands with the launch speed
    assert s.impact_velocity == pytest.approx(20.0, rel=1e-9)


def test_projectile_flight_matches_stats():
    """Simulated landing point and apex agree with the closed-form stats."""
    e = _launch_45()
    dt = 1 / 1000
    apex = 0.0
    while e.status is EntityStatus.ACTIVE:
        e.update(dt)
        apex = max(apex, e.position[1])

    vz = 20.0 * np.cos(np.radians(45.0))
    print("landing z", e.position[2], "apex", apex)
    assert e.position[2] == pytest.approx(40.816, abs=vz * dt + 1e-3)
    assert apex == pytest.approx(10.204, abs=1e-3)
    assert e.position[0] == pytest.approx(0.0, abs=1e-9)


def test_projectile_velocity_components():
    """vx, vz constant; vy = uy - g t."""
    e = _launch_45()
    u = e.initial_velocity.copy()
    e.update(1.0)

    assert e.velocity[0] == pytest.approx(u[0])
    assert e.velocity[2] == pytest.approx(u[2])
    assert e.velocity[1] == pytest.approx(u[1] - 9.8)
    assert e.stats.time_to_impact == pytest.approx(e.stats.flight_time - 1.0)


def test_projectile_downward_launch_has_no_flight_time():
    e = MotionEntity(position=(0, 10, 0), motion_type="projectile", velocity=(3.0, -4.0, 0.0))
    e.launch()

    assert e.stats.flight_time == 0.0
    assert e.stats.max_height == 0.0
    assert e.stats.range == 0.0
    assert e.stats.impact_velocity == pytest.approx(5.0)
