import numpy as np
from kinematics_sim.entity import MotionEntity
from kinematics_sim.types import EntityStatus


def test_linear_matches_closed_form():
    """
    Uniform motion, no drag:
      p(t) = p0 + u t
    Checked at every frame, not just the end.
    """
    p0 = np.array([1.0, 50.0, -2.0])
    u = np.array([3.0, -0.5, 4.0])
    e = MotionEntity(position=p0, velocity=u)
    e.launch()

    dt = 1 / 60
    for _ in range(600):
        e.update(dt)
        expected = p0 + u * e.elapsed_time
        assert np.allclose(e.position, expected, atol=1e-9)
        assert np.allclose(e.velocity, u)


def test_linear_independent_of_frame_slicing():
    """The analytic path gives the same answer for one big step or many small ones."""
    a = MotionEntity(position=(0, 10, 0), velocity=(2.0, 0.0, 1.0))
    b = MotionEntity(position=(0, 10, 0), velocity=(2.0, 0.0, 1.0))
    a.launch(); b.launch()

    a.update(3.0)
    for _ in range(300):
        b.update(0.01)

    assert np.allclose(a.position, b.position, atol=1e-9)


def test_accelerated_suvat():
    """
    s = p0 + u t + 1/2 a t²
    v = u + a t
    """
    p0 = np.array([0.0, 100.0, 0.0])
    u = np.array([1.0, 2.0, 0.0])
    a = np.array([0.5, -1.0, 2.0])
    e = MotionEntity(position=p0, velocity=u, acceleration=a, motion_type="accelerated")
    e.launch()

    for _ in range(5):
        e.update(0.4)

    t = e.elapsed_time
    assert np.allclose(e.position, p0 + u * t + 0.5 * a * t * t, atol=1e-9)
    assert np.allclose(e.velocity, u + a * t, atol=1e-9)
    assert e.stats.acceleration_mag == np.linalg.norm(a)


def test_linear_descends_into_ground_and_stops():
    """A linear mover heading down hits the ground plane; bounce disabled stops it."""
    e = MotionEntity(position=(0, 1.0, 0), velocity=(1.0, -1.0, 0.0))
    e.configure(bounce_enabled=False)
    e.launch()

    for _ in range(200):
        e.update(0.01)

    assert e.status is EntityStatus.STOPPED
    assert e.position[1] == 0.0
    assert e.velocity[1] == 0.0
    # Horizontal velocity is untouched by ground contact
    assert e.velocity[0] == 1.0
