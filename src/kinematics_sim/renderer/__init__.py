# MIT License (see LICENSE)
"""
Visual resource handles and rendering adapters.

This subpackage provides:
    - VisualHandle: A host-side resource owned by an entity, released on dispose.
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for performance testing.
    - BufferedRenderer: Records frames for playback or export.

The engine has no rendering dependency; these adapters are optional.

Typical usage:
    from kinematics_sim.renderer import DebugRenderer

    renderer = DebugRenderer()
    renderer.render(sim)
"""
from .resources import VisualHandle
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "VisualHandle",
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
