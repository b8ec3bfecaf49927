# MIT License (see LICENSE)
"""
Renderer adapters for kinematics visualization.

This module provides an abstract base class for rendering and concrete
debug implementations. The engine has no rendering dependency; a host
renderer reads display_position, velocity, status and opacity from each
entity after the orchestrator's update() and copies them to its visuals.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TextIO
import sys

import numpy as np

if TYPE_CHECKING:
    from ..orchestrator import Orchestrator


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer = MyRenderer()
        renderer.begin_frame(sim.time)
        for entity in sim.entities:
            renderer.draw_entity(entity)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render(sim)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Accumulated simulation time in seconds.
        """
        ...

    @abstractmethod
    def draw_entity(self, entity: Any) -> None:
        """Draw one MotionEntity or Projectile."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render(self, orchestrator: "Orchestrator") -> None:
        """Draw every live entity of an orchestrator as one frame."""
        self.begin_frame(orchestrator.time)
        for entity in orchestrator.entities:
            self.draw_entity(entity)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === Frame t=0.5000 ===
        [1] active @ (0.00, 18.78, 0.00) v=(0.00, -4.90, 0.00)
        [2] landed @ (40.77, 0.00, 0.00) a=0.75
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include velocity.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_entity(self, entity: Any) -> None:
        pos = entity.display_position
        status = getattr(entity.status, "value", entity.status)
        line = f"[{entity.id}] {status} @ ({pos[0]:.2f}, {pos[1]:.2f}, {pos[2]:.2f})"
        if self.verbose:
            vel = entity.velocity
            line += f" v=({vel[0]:.2f}, {vel[1]:.2f}, {vel[2]:.2f})"
        if entity.opacity < 1.0:
            line += f" a={entity.opacity:.2f}"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for timing runs without drawing overhead."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_entity(self, entity: Any) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records per-frame entity state for playback or export.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            sim.update(1 / 60)
            renderer.render(sim)
        heights = [f["entities"][0]["position"][1] for f in renderer.frames]
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {
            "time": time,
            "entities": [],
        }

    def draw_entity(self, entity: Any) -> None:
        if self._current_frame is None:
            return
        self._current_frame["entities"].append({
            "id": entity.id,
            "position": np.asarray(entity.display_position, dtype=np.float64).tolist(),
            "velocity": np.asarray(entity.velocity, dtype=np.float64).tolist(),
            "status": getattr(entity.status, "value", entity.status),
            "opacity": float(entity.opacity),
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
