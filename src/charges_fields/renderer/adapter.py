# MIT License (see LICENSE)
"""
Renderer adapters that consume the field kernel's output.

A renderer never reads the charge configuration directly. Once per frame it
drains a ChargeTracker (repositioning charge icons from the deltas) and draws
whatever traced curves the caller hands it. The kernel has no rendering
dependency; these adapters are optional.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, TextIO
import sys

from ..types import DeltaEntry, TracedCurve

if TYPE_CHECKING:
    from ..tracker import ChargeTracker


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses integrate with a graphics backend (matplotlib, a canvas,
    a web frontend, ...).

    Usage:
        renderer = MyRenderer()
        renderer.begin_frame(frame)
        for entry in tracker:
            renderer.apply_delta(entry)
        tracker.clear()
        for curve in curves:
            renderer.draw_curve(curve)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_frame(tracker, curves)
    """

    def __init__(self) -> None:
        self.frame = 0

    @abstractmethod
    def begin_frame(self, frame: int) -> None:
        """
        Begin a new frame.

        Args:
            frame: Frame counter, starting at 0.
        """
        ...

    @abstractmethod
    def apply_delta(self, entry: DeltaEntry) -> None:
        """
        Bring the renderer's copy of one charge up to date.

        Args:
            entry: An added, moved or removed charge.
        """
        ...

    @abstractmethod
    def draw_curve(self, curve: TracedCurve) -> None:
        """
        Draw a traced field or equipotential line.

        Args:
            curve: The curve to draw.
        """
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_frame(self, tracker: "ChargeTracker", curves: Iterable[TracedCurve] = ()) -> None:
        """
        Apply pending deltas, clear the tracker, then draw the curves.

        Args:
            tracker: Tracker to drain.
            curves: Curves to draw this frame.
        """
        self.begin_frame(self.frame)
        for entry in tracker:
            self.apply_delta(entry)
        tracker.clear()
        for curve in curves:
            self.draw_curve(curve)
        self.end_frame()
        self.frame += 1


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === Frame 3 ===
        + [1] +1 @ (-1.00, 0.00)
        ~ [2] -1 (1.00, 0.00) -> (1.20, 0.10)
        - [3] +1 @ (0.00, 2.00)
        | curve 412 pts captured
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also report arrows and curve end points.
        """
        super().__init__()
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, frame: int) -> None:
        self.output.write(f"=== Frame {frame} ===\n")

    def apply_delta(self, entry: DeltaEntry) -> None:
        if entry.is_added:
            p = entry.new_position
            line = f"+ [{entry.charge_id}] {entry.charge:+d} @ ({p[0]:.2f}, {p[1]:.2f})"
        elif entry.is_removed:
            p = entry.old_position
            line = f"- [{entry.charge_id}] {entry.charge:+d} @ ({p[0]:.2f}, {p[1]:.2f})"
        else:
            a, b = entry.old_position, entry.new_position
            line = (
                f"~ [{entry.charge_id}] {entry.charge:+d} "
                f"({a[0]:.2f}, {a[1]:.2f}) -> ({b[0]:.2f}, {b[1]:.2f})"
            )
        self.output.write(line + "\n")

    def draw_curve(self, curve: TracedCurve) -> None:
        line = f"| curve {len(curve)} pts {curve.reason.value}"
        if self.verbose:
            end = curve.end
            line += f" end=({end[0]:.2f}, {end[1]:.2f}) arrows={len(curve.arrows)}"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer. Still drains the tracker through render_frame().
    """

    def begin_frame(self, frame: int) -> None:
        pass

    def apply_delta(self, entry: DeltaEntry) -> None:
        pass

    def draw_curve(self, curve: TracedCurve) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that rebuilds charge state purely from deltas and records frames.

    `charges` maps charge id to (charge, (x, y)); after every frame it equals
    the active charges of the observed configuration.

    Example:
        renderer = BufferedRenderer()
        renderer.render_frame(tracker, curves)
        renderer.frames[-1]["deltas"]   # number of entries applied
    """

    def __init__(self):
        super().__init__()
        self.charges: dict[int, tuple[int, tuple[float, float]]] = {}
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, frame: int) -> None:
        self._current_frame = {
            "frame": frame,
            "deltas": 0,
            "curves": [],
        }

    def apply_delta(self, entry: DeltaEntry) -> None:
        if entry.new_position is None:
            self.charges.pop(entry.charge_id, None)
        else:
            p = entry.new_position
            self.charges[entry.charge_id] = (entry.charge, (float(p[0]), float(p[1])))
        if self._current_frame is not None:
            self._current_frame["deltas"] += 1

    def draw_curve(self, curve: TracedCurve) -> None:
        if self._current_frame is None:
            return
        self._current_frame["curves"].append({
            "points": curve.points.tolist(),
            "reason": curve.reason.value,
            "closed": curve.closed,
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Forget recorded frames (charge state is kept)."""
        self.frames.clear()
