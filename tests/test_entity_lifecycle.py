import logging

import numpy as np
import pytest
from kinematics_sim.entity import MotionEntity
from kinematics_sim.renderer import VisualHandle
from kinematics_sim.types import EntityStatus, MotionType


def test_configure_builds_velocity_from_angles():
    """
    v = V (cos e sin h, sin e, cos e cos h)
    heading 90°, elevation 0 -> +x
    """
    e = MotionEntity()
    e.configure(velocity_mag=10.0, direction_angle=90.0)

    assert e.velocity == pytest.approx(np.array([10.0, 0.0, 0.0]), abs=1e-12)
    assert np.allclose(e.initial_velocity, e.velocity)


def test_configure_merges_only_supplied_keys():
    e = MotionEntity()
    e.configure(restitution=0.3, gravity=5.0)
    e.configure(gravity=3.0)

    assert e.gravity == 3.0
    assert e.material.restitution == 0.3
    assert e.motion_type is MotionType.LINEAR


def test_configure_axis_components_and_drop_height():
    e = MotionEntity(position=(1.0, 2.0, 3.0))
    e.configure(vy=4.0, az=-1.0, drop_height=12.0)

    assert e.velocity == pytest.approx(np.array([0.0, 4.0, 0.0]))
    assert e.acceleration == pytest.approx(np.array([0.0, 0.0, -1.0]))
    assert e.position[1] == 12.0
    assert e.initial_position[1] == 12.0


def test_configure_unknown_key_raises():
    e = MotionEntity()
    with pytest.raises(TypeError):
        e.configure(warp_factor=9)


def test_invalid_motion_type_falls_back_to_linear(caplog):
    with caplog.at_level(logging.WARNING):
        e = MotionEntity(motion_type="teleport")
    assert e.motion_type is MotionType.LINEAR
    assert "teleport" in caplog.text

    e.configure(motion_type="circular")
    assert e.motion_type is MotionType.CIRCULAR


def test_non_positive_mass_is_rejected():
    e = MotionEntity(mass=0.0)
    assert e.mass == 1.0
    e.configure(mass=-3.0)
    assert e.mass == 1.0
    e.configure(mass=2.5)
    assert e.mass == 2.5


def test_launch_is_idempotent():
    e = MotionEntity(position=(0, 5, 0), velocity=(1.0, 0.0, 0.0))
    e.launch()
    e.update(0.5)
    e.launch()

    assert e.elapsed_time == 0.5
    assert e.position[0] == pytest.approx(0.5)


def test_update_before_launch_is_noop():
    e = MotionEntity(position=(0, 5, 0), velocity=(1.0, 0.0, 0.0))
    assert e.update(1.0) is EntityStatus.IDLE
    assert e.position == pytest.approx(np.array([0.0, 5.0, 0.0]))
    assert e.elapsed_time == 0.0


def test_non_positive_dt_leaves_state_untouched():
    e = MotionEntity(position=(0, 5, 0), velocity=(1.0, 2.0, 0.0), motion_type="projectile")
    e.launch()
    e.update(0.2)
    before = (e.position.copy(), e.velocity.copy(), e.elapsed_time, len(e.trail))

    e.update(0.0)
    e.update(-1.0)

    assert np.array_equal(e.position, before[0])
    assert np.array_equal(e.velocity, before[1])
    assert e.elapsed_time == before[2]
    assert len(e.trail) == before[3]


def test_reset_restores_true_spawn_after_bounce():
    """Bounces re-base the snapshot; reset still goes back to the spawn point."""
    e = MotionEntity(position=(0.0, 5.0, 0.0), motion_type="freefall")
    e.configure(restitution=0.8)
    e.launch()

    bounced = False
    for _ in range(2000):
        prev = e.elapsed_time
        e.update(1 / 240)
        if e.elapsed_time < prev:
            bounced = True
            e.update(0.1)
            break
    assert bounced
    assert e.initial_position[1] == 0.0

    e.reset()
    assert e.status is EntityStatus.IDLE
    assert not e.launched
    assert e.position == pytest.approx(np.array([0.0, 5.0, 0.0]))
    assert e.initial_position == pytest.approx(np.array([0.0, 5.0, 0.0]))
    assert e.elapsed_time == 0.0
    assert len(e.trail) == 0

    # And it can be launched again for an identical run
    e.launch()
    e.update(0.5)
    assert e.position[1] == pytest.approx(5.0 - 0.5 * 9.8 * 0.25)


def test_reset_circular_returns_to_centre():
    e = MotionEntity(position=(1.0, 0.0, 1.0), motion_type="circular")
    e.launch()
    e.update(1.0)
    e.reset()

    assert e.position == pytest.approx(np.array([1.0, 0.0, 1.0]))
    assert e.orbit_center == pytest.approx(np.array([1.0, 0.0, 1.0]))


def test_mode_change_mid_flight_is_permitted(caplog):
    e = MotionEntity(position=(0, 10, 0), velocity=(1.0, 0.0, 0.0))
    e.launch()
    e.update(0.5)

    with caplog.at_level(logging.WARNING):
        e.configure(motion_type="projectile")

    assert e.motion_type is MotionType.PROJECTILE
    assert e.status is EntityStatus.ACTIVE
    assert e.elapsed_time == 0.5
    assert "mid-flight" in caplog.text


def test_dispose_releases_visuals_once():
    released = []
    mesh = VisualHandle("mesh", on_release=released.append)
    trail = VisualHandle("trail", on_release=released.append)
    e = MotionEntity(mesh=mesh, trail_visual=trail)
    e.launch()
    e.update(0.1)

    e.dispose()
    e.dispose()

    assert released == [mesh, trail]
    assert len(e.trail) == 0


def test_trail_is_bounded():
    e = MotionEntity(position=(0, 100, 0), velocity=(1.0, 0.0, 0.0))
    e.launch()
    for _ in range(500):
        e.update(0.01)

    assert len(e.trail) == 200
    assert np.allclose(e.trail[-1], e.position)


def test_preview_does_not_mutate_state():
    e = MotionEntity(position=(0, 2, 0), motion_type="projectile", velocity=(3.0, 8.0, 0.0))
    e.launch()
    for _ in range(10):
        e.update(1 / 60)

    before = (e.position.copy(), e.velocity.copy(), e.initial_position.copy(), e.elapsed_time, e.status)
    pts = e.compute_preview_points(30)

    assert pts.ndim == 2 and pts.shape[1] == 3
    assert 0 < len(pts) <= 30
    assert pts[0] == pytest.approx(e.initial_position)
    assert np.array_equal(e.position, before[0])
    assert np.array_equal(e.velocity, before[1])
    assert np.array_equal(e.initial_position, before[2])
    assert e.elapsed_time == before[3]
    assert e.status is before[4]


def test_preview_freefall_stops_at_ground():
    """
    y(t) = 20 - 4.9 t², sampled every 0.05 s.
    t = 2.00 -> y = 0.4; t = 2.05 -> below ground, clamped, last sample.
    """
    e = MotionEntity(position=(0, 20, 0), motion_type="freefall", velocity=(4.0, 4.0, 0.0))
    pts = e.compute_preview_points()

    assert len(pts) == 42
    assert pts[-1][1] == 0.0
    assert np.all(pts[:, 1] >= 0.0)
    assert np.all(pts[:, 0] == 0.0)


def test_preview_circular_never_lands():
    e = MotionEntity(position=(0, 0, 0), motion_type="circular")
    pts = e.compute_preview_points(n=60)

    assert len(pts) == 60
    r = np.hypot(pts[:, 0], pts[:, 2])
    assert np.allclose(r, 5.0)


def test_non_finite_state_stops_entity(caplog):
    e = MotionEntity(position=(0, 5, 0), velocity=(1.0, 0.0, 0.0), motion_type="accelerated")
    e.configure(acceleration=(np.inf, 0.0, 0.0))
    e.launch()
    with caplog.at_level(logging.ERROR):
        status = e.update(0.1)

    assert status is EntityStatus.STOPPED
    # No finite frame yet: back to the launch point
    assert e.position == pytest.approx(np.array([0.0, 5.0, 0.0]))
    assert np.all(e.velocity == 0.0)
    assert "non-finite" in caplog.text


def test_non_finite_state_keeps_last_finite_position():
    e = MotionEntity(position=(0, 5, 0), velocity=(1.0, 0.0, 0.0))
    e.launch()
    e.update(0.5)
    last = e.position.copy()

    e.initial_velocity = np.array([np.nan, 0.0, 0.0])
    assert e.update(0.1) is EntityStatus.STOPPED
    assert np.array_equal(e.position, last)
    assert np.isfinite(e.trail[-1]).all()


def test_restitution_clamped_to_unit_interval(caplog):
    e = MotionEntity()
    with caplog.at_level(logging.WARNING):
        e.configure(restitution=1.5)
    assert e.material.restitution == 1.0
    assert "clamped" in caplog.text

    e.configure(restitution=-0.2)
    assert e.material.restitution == 0.0

    e.configure(restitution=0.4)
    assert e.material.restitution == 0.4


def test_super_elastic_input_never_gains_height():
    """Clamped at e = 1 the rebound apex stays at the drop height (to within one frame)."""
    e = MotionEntity(position=(0.0, 5.0, 0.0), motion_type="freefall")
    e.configure(restitution=3.0)
    e.launch()
    apex = 0.0
    bounced = False
    dt = 1 / 2000
    for _ in range(int(4 / dt)):
        prev = e.elapsed_time
        e.update(dt)
        bounced = bounced or e.elapsed_time < prev
        if bounced:
            apex = max(apex, e.position[1])

    assert bounced
    # Unclamped, e = 3 would rebound to 45 m
    assert apex < 5.1
