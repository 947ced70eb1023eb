import io

from charges_fields import ChargeTracker, FieldLineService
from charges_fields.renderer import BufferedRenderer, DebugRenderer, NullRenderer


def test_debug_renderer_output(dipole, dipole_field):
    tracker = ChargeTracker(dipole)
    out = io.StringIO()
    renderer = DebugRenderer(out, verbose=False)
    curve = FieldLineService(dipole_field).trace((-0.9, 0.0))

    renderer.render_frame(tracker, [curve])
    positive = next(c for c in dipole if c.charge > 0)
    dipole.move(positive.id, (-1.0, 0.5))
    renderer.render_frame(tracker)

    text = out.getvalue()
    assert "=== Frame 0 ===" in text
    assert "+ [1] +1 @ (-1.00, 0.00)" in text
    assert "+ [2] -1 @ (1.00, 0.00)" in text
    assert f"| curve {len(curve)} pts captured" in text
    assert "~ [1] +1 (-1.00, 0.00) -> (-1.00, 0.50)" in text
    assert renderer.frame == 2


def test_null_renderer_drains_tracker(dipole):
    tracker = ChargeTracker(dipole)
    NullRenderer().render_frame(tracker)
    assert len(tracker) == 0


def test_buffered_renderer_records_frames(dipole, dipole_field):
    tracker = ChargeTracker(dipole)
    renderer = BufferedRenderer()
    curve = FieldLineService(dipole_field).trace((-0.9, 0.1))
    renderer.render_frame(tracker, [curve])

    frame = renderer.frames[0]
    assert frame["deltas"] == 2
    assert frame["curves"][0]["reason"] == "captured"
    assert len(frame["curves"][0]["points"]) == len(curve)
    assert renderer.charges[2] == (-1, (1.0, 0.0))

    dipole.remove(2)
    renderer.render_frame(tracker)
    assert 2 not in renderer.charges
    renderer.clear()
    assert renderer.frames == []
    assert 1 in renderer.charges
