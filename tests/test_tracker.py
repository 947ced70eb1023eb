import logging

import numpy as np
import pytest

from charges_fields import ChargeConfiguration, ChargeTracker, PointCharge
from charges_fields.renderer import BufferedRenderer


def active_state(board):
    return {
        c.id: (c.charge, (float(c.position[0]), float(c.position[1])))
        for c in board.active_charges()
    }


def test_construction_queues_existing_charges(dipole):
    tracker = ChargeTracker(dipole)
    assert len(tracker) == 2
    assert all(e.is_added for e in tracker)


def test_moves_collapse_into_one_entry():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_positive((0.0, 0.0))
    tracker.clear()

    board.move(c.id, (1.0, 0.0))
    board.move(c.id, (2.0, 0.0))
    board.move(c.id, (3.0, 1.0))

    assert len(tracker) == 1
    entry = tracker.entry_for(c.id)
    assert entry.is_moved
    assert np.array_equal(entry.old_position, [0.0, 0.0])
    assert np.array_equal(entry.new_position, [3.0, 1.0])


def test_add_then_move_stays_an_add():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_negative((0.0, 0.0))
    board.move(c.id, (0.5, 0.5))
    assert len(tracker) == 1
    entry = tracker.entry_for(c.id)
    assert entry.kind == "added"
    assert np.array_equal(entry.new_position, [0.5, 0.5])


def test_add_then_remove_cancels():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_positive((0.0, 0.0))
    board.move(c.id, (1.0, 1.0))
    board.remove(c.id)
    assert len(tracker) == 0
    assert tracker.entry_for(c.id) is None


def test_move_then_remove_reports_original_position():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_positive((0.0, 0.0))
    tracker.clear()

    board.move(c.id, (1.0, 0.0))
    board.remove(c.id)

    (entry,) = list(tracker)
    assert entry.is_removed
    assert np.array_equal(entry.old_position, [0.0, 0.0])


def test_remove_without_pending_entry():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_positive((2.0, -1.0))
    tracker.clear()
    board.remove(c.id)
    (entry,) = list(tracker)
    assert entry.kind == "removed"
    assert np.array_equal(entry.old_position, [2.0, -1.0])


def test_remove_then_readd_becomes_move():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_positive((0.0, 0.0))
    tracker.clear()
    board.remove(c.id)
    c.position = np.array([4.0, 0.0])
    board.add(c)
    (entry,) = list(tracker)
    assert entry.is_moved
    assert np.array_equal(entry.new_position, [4.0, 0.0])


def test_inactive_charges_are_invisible():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    board.add(PointCharge(+1, (0.0, 0.0), active=False))
    assert len(tracker) == 0

    c = board.add_negative((1.0, 0.0))
    tracker.clear()
    board.set_active(c.id, False)
    assert list(tracker)[0].is_removed
    board.move(c.id, (2.0, 0.0))
    assert len(tracker) == 1

    tracker.clear()
    board.set_active(c.id, True)
    (entry,) = list(tracker)
    assert entry.is_added
    assert np.array_equal(entry.new_position, [2.0, 0.0])


def test_mismatched_move_logs_warning(caplog):
    tracker = ChargeTracker()
    c = PointCharge(+1, (0.0, 0.0), id=7)
    tracker.add_particle(c)
    with caplog.at_level(logging.WARNING, logger="charges_fields.tracker"):
        tracker.on_moved(c, (5.0, 5.0), (6.0, 6.0))
    assert "Charge 7 moved" in caplog.text
    assert np.array_equal(tracker.entry_for(7).new_position, [6.0, 6.0])


def test_reset_rebuilds_queue(dipole):
    tracker = ChargeTracker(dipole)
    tracker.clear()
    dipole.reset([PointCharge(+1, (0.0, 1.0)), PointCharge(+1, (0.0, -1.0), active=False)])
    assert len(tracker) == 1
    assert list(tracker)[0].is_added


def test_dispose_stops_observing(dipole):
    tracker = ChargeTracker(dipole)
    tracker.dispose()
    tracker.clear()
    dipole.add_positive((3.0, 3.0))
    assert len(tracker) == 0
    assert tracker.configuration is None


def test_iteration_is_over_a_snapshot(dipole):
    tracker = ChargeTracker(dipole)
    seen = []
    for entry in tracker:
        seen.append(entry.charge_id)
        tracker.clear()
    assert len(seen) == 2


def test_random_edits_replay_to_active_state():
    """Applying each frame's deltas to a blank renderer reproduces the board."""
    rng = np.random.default_rng(12345)
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    renderer = BufferedRenderer()

    for frame in range(60):
        for _ in range(rng.integers(0, 8)):
            ids = [c.id for c in board]
            op = rng.integers(0, 4) if ids else 0
            if op == 0:
                sign = 1 if rng.random() < 0.5 else -1
                board.add(PointCharge(sign, rng.uniform(-3, 3, size=2)))
            elif op == 1:
                board.move(int(rng.choice(ids)), rng.uniform(-3, 3, size=2))
            elif op == 2:
                board.remove(int(rng.choice(ids)))
            else:
                cid = int(rng.choice(ids))
                board.set_active(cid, not board.get(cid).active)
        # At most one entry per charge
        assert len({e.charge_id for e in tracker}) == len(tracker)
        renderer.render_frame(tracker)
        assert len(tracker) == 0
        assert renderer.charges == active_state(board)

    assert len(renderer.frames) == 60


@pytest.mark.parametrize("n", [1, 5, 20])
def test_rebuild_matches_configuration(n):
    board = ChargeConfiguration()
    for i in range(n):
        board.add(PointCharge(1 if i % 2 else -1, (float(i), 0.0)))
    tracker = ChargeTracker(board)
    renderer = BufferedRenderer()
    renderer.render_frame(tracker)
    assert renderer.charges == active_state(board)


def test_remove_and_readd_in_place_leaves_nothing():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_positive((1.0, 2.0))
    tracker.clear()
    board.remove(c.id)
    board.add(c)
    assert len(tracker) == 0
    assert tracker.entry_for(c.id) is None


def test_move_back_to_start_leaves_nothing():
    board = ChargeConfiguration()
    tracker = ChargeTracker(board)
    c = board.add_negative((0.0, 0.0))
    tracker.clear()
    board.move(c.id, (1.0, 0.0))
    board.move(c.id, (0.0, 0.0))
    assert len(tracker) == 0
    # A later move starts a fresh entry from the shown position
    board.move(c.id, (0.5, 0.5))
    (entry,) = list(tracker)
    assert np.array_equal(entry.old_position, [0.0, 0.0])


def test_deactivate_and_reactivate_in_place_leaves_nothing(dipole):
    tracker = ChargeTracker(dipole)
    tracker.clear()
    dipole.set_active(1, False)
    dipole.set_active(1, True)
    assert len(tracker) == 0
