# MIT License (see LICENSE)
"""
Time-series recording for kinematics graphs.

A MotionRecorder follows one entity and keeps the most recent samples of
height, speed and acceleration against elapsed time, for position /
velocity / acceleration plots. Storage is a fixed-size ring buffer so a
long run never grows memory.

Example:
    recorder = MotionRecorder()
    recorder.attach(entity)
    while running:
        sim.update(dt)
        recorder.push_sample()
    data = recorder.as_arrays()
"""
from __future__ import annotations
from collections import deque

import numpy as np

from .constants import GRAPH_MAX_SAMPLES
from .entity import MotionEntity
from .types import MotionType
from .util import norm

SERIES = ("time", "position", "velocity", "acceleration")


class MotionRecorder:
    """
    Ring buffer of (t, y, |v|, a) samples for one entity.

    The acceleration column is the magnitude the model actually applies:
    g for freefall, ω² r for circular, |a| otherwise.
    """

    def __init__(self, max_samples: int = GRAPH_MAX_SAMPLES):
        self.max_samples = max_samples
        self.entity: MotionEntity | None = None
        self._samples: deque[tuple[float, float, float, float]] = deque(maxlen=max_samples)

    def attach(self, entity: MotionEntity | None) -> None:
        """Follow a different entity (or none). Clears recorded data."""
        self.entity = entity
        self.clear()

    def clear(self) -> None:
        self._samples.clear()

    def push_sample(self) -> bool:
        """
        Record the attached entity's current state.

        Returns:
            False if nothing was recorded (no entity, or not launched).
        """
        e = self.entity
        if e is None or not e.launched:
            return False

        if e.motion_type is MotionType.FREEFALL:
            accel = e.gravity
        elif e.motion_type is MotionType.CIRCULAR:
            accel = e.stats.centripetal_accel
        else:
            accel = norm(e.acceleration)

        self._samples.append((e.elapsed_time, float(e.position[1]), norm(e.velocity), float(accel)))
        return True

    def __len__(self) -> int:
        return len(self._samples)

    def as_arrays(self) -> dict[str, np.ndarray]:
        """Recorded data as one float64 array per series."""
        if not self._samples:
            return {name: np.zeros(0, dtype=np.float64) for name in SERIES}
        table = np.array(self._samples, dtype=np.float64)
        return {name: table[:, i] for i, name in enumerate(SERIES)}

    def bounds(self, series: str, pad: float = 0.1, min_span: float = 0.01) -> tuple[float, float]:
        """
        Plot range for a series, padded by a fraction of its span.

        Flat or empty series get a span of at least min_span so an axis can
        always be drawn.

        Raises:
            KeyError: If series is not one of SERIES.
        """
        if series not in SERIES:
            raise KeyError(f"Unknown series: {series!r}")
        values = self.as_arrays()[series]
        if values.size == 0:
            return 0.0, min_span
        lo, hi = float(values.min()), float(values.max())
        if hi - lo < min_span:
            mid = 0.5 * (lo + hi)
            lo, hi = mid - 0.5 * min_span, mid + 0.5 * min_span
        span = hi - lo
        return lo - pad * span, hi + pad * span
