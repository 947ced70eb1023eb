# MIT License (see LICENSE)
"""
Coalesced change tracking for incremental rendering.

ChargeTracker turns a stream of add/move/remove events into a queue of
DeltaEntry items, at most one per charge, which a renderer applies once per
frame:

    for entry in tracker:
        apply(entry)
    tracker.clear()

Merging rules for a charge that already has a queued entry:
    move    → the entry's new_position becomes the new position
              (several moves in one frame collapse into one entry)
    remove  → the entry's new_position becomes None; an entry that was an
              add is dropped entirely (added and removed in the same frame)
    add     → the entry's new_position is set again (removed and re-added
              in the same frame becomes a move)

An entry whose new_position ends up equal to its old_position is dropped,
since the consumer already shows the charge there.

Applying the queue in order to a blank external state reproduces the
active charges exactly. Entries are indexed by charge id, so merging is a
dict lookup rather than a scan of the queue.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator

from .types import DeltaEntry, PointCharge
from .util import f64, same_point

if TYPE_CHECKING:
    from .configuration import ChargeConfiguration

logger = logging.getLogger(__name__)


class ChargeTracker:
    """
    Queue of pending positional deltas.

    Attributes:
        configuration: The observed configuration, or None for a tracker fed
                       by hand.
        queue: Pending entries in FIFO order.
    """

    def __init__(self, configuration: "ChargeConfiguration | None" = None) -> None:
        self.configuration = configuration
        self.queue: list[DeltaEntry] = []
        self._entries: dict[int, DeltaEntry] = {}
        if configuration is not None:
            configuration.attach_tracker(self)
        self.rebuild()

    def __iter__(self) -> Iterator[DeltaEntry]:
        return iter(list(self.queue))

    def __len__(self) -> int:
        return len(self.queue)

    def entry_for(self, charge_id: int) -> DeltaEntry | None:
        """The queued entry for a charge, if any."""
        return self._entries.get(charge_id)

    def clear(self) -> None:
        """The consumer has applied every pending delta."""
        self.queue.clear()
        self._entries.clear()

    def rebuild(self) -> None:
        """
        Clear, then queue an add for every active charge, as if the external
        state had been reset to empty.
        """
        self.clear()
        if self.configuration is None:
            return
        for charge in self.configuration.active_charges():
            self.add_particle(charge)
        logger.debug("Rebuilt change queue with %d entries", len(self.queue))

    def dispose(self) -> None:
        """Stop observing the configuration."""
        if self.configuration is not None:
            self.configuration.detach_tracker(self)
            self.configuration = None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _push(self, charge: PointCharge, old, new) -> DeltaEntry:
        entry = DeltaEntry(
            charge_id=charge.id,
            charge=charge.charge,
            old_position=None if old is None else f64(old),
            new_position=None if new is None else f64(new),
        )
        self.queue.append(entry)
        self._entries[charge.id] = entry
        return entry

    def _drop(self, entry: DeltaEntry) -> None:
        self.queue.remove(entry)
        del self._entries[entry.charge_id]

    def add_particle(self, charge: PointCharge) -> None:
        """Queue the appearance of a charge at its current position."""
        entry = self._entries.get(charge.id)
        if entry is None:
            self._push(charge, None, charge.position)
            return
        if entry.new_position is not None:
            logger.warning("Charge %d added while already present; updating its entry", charge.id)
        entry.new_position = f64(charge.position)
        if entry.old_position is not None and same_point(entry.old_position, entry.new_position):
            # Removed and put back where it was
            self._drop(entry)

    def on_moved(self, charge: PointCharge, old_position, new_position) -> None:
        """
        Queue a move, collapsing it into the charge's pending entry when there
        is one.
        """
        entry = self._entries.get(charge.id)
        if entry is None:
            self._push(charge, old_position, new_position)
            return
        if not same_point(entry.new_position, f64(old_position)):
            logger.warning(
                "Charge %d moved from %s but its queued position is %s",
                charge.id, old_position, entry.new_position,
            )
        entry.new_position = f64(new_position)
        if entry.old_position is not None and same_point(entry.old_position, entry.new_position):
            self._drop(entry)

    def on_removed(self, charge: PointCharge) -> None:
        """
        Queue the disappearance of a charge from its current position.

        An add that has not been consumed yet simply cancels out.
        """
        entry = self._entries.get(charge.id)
        if entry is None:
            self._push(charge, charge.position, None)
            return
        if not same_point(entry.new_position, charge.position):
            logger.warning(
                "Charge %d removed at %s but its queued position is %s",
                charge.id, charge.position, entry.new_position,
            )
        entry.new_position = None
        if entry.old_position is None:
            self._drop(entry)
