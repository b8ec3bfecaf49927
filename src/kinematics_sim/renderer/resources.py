# MIT License (see LICENSE)
"""
Handles for visual resources owned by entities.

The engine never touches rendering state. An entity only holds handles to
whatever the host created for it (a mesh, a trail line, a launch ring) and
releases them on dispose. The host reacts through on_release.
"""
from __future__ import annotations
from typing import Callable


class VisualHandle:
    """
    One host-side visual resource.

    Args:
        kind: Free-form label ("mesh", "trail", "ring", "trajectory").
        on_release: Called once when the resource is released.
    """

    def __init__(self, kind: str, on_release: Callable[[VisualHandle], None] | None = None):
        self.kind = kind
        self.on_release = on_release
        self.released = False

    def release(self) -> None:
        """Release the resource. Subsequent calls do nothing."""
        if self.released:
            return
        self.released = True
        if self.on_release is not None:
            self.on_release(self)

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"VisualHandle({self.kind!r}, {state})"
