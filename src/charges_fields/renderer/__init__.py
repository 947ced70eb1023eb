# MIT License (see LICENSE)
"""
Consumers of the change queue and of traced curves.

    - RendererAdapter: drains a ChargeTracker once per frame, then draws curves.
    - DebugRenderer: writes deltas and curve summaries as text.
    - NullRenderer: drains the queue and draws nothing.
    - BufferedRenderer: keeps charge state rebuilt from deltas alone and
      records each frame.

Example:
    from charges_fields.renderer import BufferedRenderer

    renderer = BufferedRenderer()
    renderer.render_frame(tracker, field_lines.trace_from_charges())
    renderer.charges    # {charge_id: (charge, (x, y))}
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
