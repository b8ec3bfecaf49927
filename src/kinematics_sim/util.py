# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

All vectors are 3D numpy arrays of shape (3,) in world space, with +y up.
Horizontal headings are measured in the XZ plane from +z towards +x.
"""
from __future__ import annotations
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples/lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def zeros3() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 3D vector."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps.
    """
    n = norm(v)
    if n < eps:
        return zeros3()
    return v / n


def horizontal_unit(v) -> np.ndarray:
    """Project v onto the XZ plane and normalize it."""
    flat = f64((v[0], 0.0, v[2]))
    return unit(flat)


def direction_vector(magnitude: float, heading_deg: float, elevation_deg: float = 0.0) -> np.ndarray:
    """
    Build a vector from a magnitude and two angles in degrees.

    heading is the horizontal angle (0 = +z, 90 = +x) and elevation the
    angle above the XZ plane:
        v = |v| * (cos(e) sin(h), sin(e), cos(e) cos(h))
    """
    h = np.radians(heading_deg)
    e = np.radians(elevation_deg)
    return magnitude * np.array(
        [np.cos(e) * np.sin(h), np.sin(e), np.cos(e) * np.cos(h)],
        dtype=np.float64,
    )


def is_finite(v: np.ndarray) -> bool:
    return bool(np.all(np.isfinite(v)))


def profiling_enabled() -> bool:
    """Check if orchestrators should attach a Profiler by default."""
    return os.environ.get("KINEMATICS_SIM_PROFILE", "0") == "1"
