import numpy as np
import pytest

from charges_fields import (
    ChargeConfiguration,
    EquipotentialLineService,
    FieldMath,
    PointCharge,
    TerminationReason,
)


def test_closed_loop_around_charge(dipole_field):
    service = EquipotentialLineService(dipole_field)
    curve = service.trace((-1.5, 0.0))
    print("loop points", len(curve), "reason", curve.reason)
    assert curve.closed
    assert curve.reason is TerminationReason.CLOSED_LOOP
    assert curve.start_reason is None
    assert np.linalg.norm(curve.end - curve.start) <= service.config.close_tolerance


def test_potential_is_constant_along_curve(dipole_field):
    """Ten evenly spaced samples agree with each other and with V(seed)."""
    seed = (-1.5, 0.0)
    v_seed = dipole_field.potential_at(seed)
    assert v_seed == pytest.approx(1.6)

    curve = EquipotentialLineService(dipole_field).trace(seed)
    idx = np.linspace(0, len(curve) - 1, 10).astype(int)
    v = dipole_field.potentials_at(curve.points[idx])
    print("V along curve", v)
    assert np.all(np.abs(v - v_seed) < 1e-3)
    assert np.ptp(v) < 1e-3


def test_curve_is_perpendicular_to_field(dipole_field):
    curve = EquipotentialLineService(dipole_field).trace((-0.6, 0.4))
    for a, b in zip(curve.points[:-1], curve.points[1:]):
        e = dipole_field.field_at(a)
        seg = b - a
        cos = np.dot(seg, e) / (np.linalg.norm(seg) * np.linalg.norm(e))
        assert abs(cos) < 0.05


def test_open_contour_joins_both_halves(dipole_field):
    """The V = 0 line of a symmetric dipole is the y axis, cut by the bounds."""
    seed = np.array([0.0, 0.5])
    curve = EquipotentialLineService(dipole_field).trace(seed)
    assert not curve.closed
    assert curve.reason is TerminationReason.OUT_OF_BOUNDS
    assert curve.start_reason is TerminationReason.OUT_OF_BOUNDS
    # Backward half first (downwards), forward half last (upwards)
    assert curve.start[1] < -5.0
    assert curve.end[1] > 5.0
    assert np.all(np.diff(curve.points[:, 1]) > 0)
    # Seed appears exactly once, at the join
    assert np.sum(np.all(curve.points == seed, axis=1)) == 1
    assert np.allclose(curve.points[:, 0], 0.0)
    assert np.all(np.abs(dipole_field.potentials_at(curve.points)) < 1e-9)


def test_field_free_seed_is_degenerate():
    board = ChargeConfiguration([PointCharge(+1, (-1.0, 0.0)), PointCharge(+1, (1.0, 0.0))])
    curve = EquipotentialLineService(FieldMath(board)).trace((0.0, 0.0))
    assert curve.reason is TerminationReason.DEGENERATE_FIELD
    assert len(curve) == 1


def test_empty_board():
    curve = EquipotentialLineService(FieldMath(ChargeConfiguration())).trace((1.0, 1.0))
    assert len(curve) == 1
    assert curve.reason is TerminationReason.DEGENERATE_FIELD


def test_deterministic(dipole_field):
    service = EquipotentialLineService(dipole_field)
    a = service.trace((0.4, 0.9))
    b = service.trace((0.4, 0.9))
    assert np.array_equal(a.points, b.points)
    assert a.reason is b.reason


def test_lines_are_kept_cleared_and_retraced(dipole):
    fm = FieldMath(dipole)
    service = EquipotentialLineService(fm)
    first = service.add_line((-1.5, 0.0))
    service.add_line((1.5, 0.0))
    assert len(service.lines) == 2

    positive = [c for c in dipole if c.charge > 0][0]
    dipole.move(positive.id, (-1.0, 0.5))
    service.retrace()
    assert len(service.lines) == 2
    assert service.lines[0] is not first
    assert service.lines[0].seed == first.seed
    assert not np.array_equal(service.lines[0].points[:10], first.points[:10])

    service.clear_lines()
    assert service.lines == []


@pytest.mark.parametrize("seed", [(-1.0, 0.0), (1.0, 0.0), (-0.995, 0.003)])
def test_seed_on_charge_is_degenerate(dipole_field, seed):
    curve = EquipotentialLineService(dipole_field).trace(seed)
    assert curve.reason is TerminationReason.DEGENERATE_FIELD
    assert len(curve) == 1
    assert np.allclose(curve.points[0], seed)


def test_seed_near_charge_still_closes(dipole_field):
    curve = EquipotentialLineService(dipole_field).trace((-1.1, 0.0))
    assert curve.closed
    v = dipole_field.potentials_at(curve.points)
    assert np.ptp(v) < 1e-2 * abs(v[0])
