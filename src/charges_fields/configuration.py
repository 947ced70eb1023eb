# MIT License (see LICENSE)
"""
The mutable set of point charges on the board.

ChargeConfiguration is the board model: it owns
the charges, assigns their ids and is the only place they are mutated.
Every mutation bumps `revision` (so FieldMath knows to repack its arrays)
and is forwarded, as a direct method call, to the attached ChargeTrackers:

    add (active)        → tracker.add_particle(charge)
    move (active)       → tracker.on_moved(charge, old, new)
    remove (active)     → tracker.on_removed(charge)
    set_active(False)   → tracker.on_removed(charge)
    set_active(True)    → tracker.add_particle(charge)
    reset()             → tracker.rebuild()

Inactive charges are invisible to both the field kernel and the trackers.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator

import numpy as np

from .types import PointCharge
from .util import f64

if TYPE_CHECKING:
    from .tracker import ChargeTracker

logger = logging.getLogger(__name__)


class ChargeConfiguration:
    """
    Ordered collection of unit point charges.

    Insertion order has no physical meaning; it only fixes iteration order
    so that field sums and tests are deterministic.

    Attributes:
        revision: Incremented on every mutation.
    """

    def __init__(self, charges: list[PointCharge] | None = None) -> None:
        self._charges: dict[int, PointCharge] = {}
        self._trackers: list["ChargeTracker"] = []
        self._next_id = 1
        self.revision = 0
        for c in charges or []:
            self.add(c)

    # ------------------------------------------------------------------
    # Collection protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[PointCharge]:
        return iter(list(self._charges.values()))

    def __len__(self) -> int:
        return len(self._charges)

    def __contains__(self, charge_id: int) -> bool:
        return charge_id in self._charges

    def get(self, charge_id: int) -> PointCharge:
        """Look up a charge by id. Raises KeyError for unknown ids."""
        try:
            return self._charges[charge_id]
        except KeyError:
            raise KeyError(f"No charge with id {charge_id}") from None

    def active_charges(self) -> list[PointCharge]:
        """Charges that contribute to the field, in insertion order."""
        return [c for c in self._charges.values() if c.active]

    def total_charge(self) -> int:
        return sum(c.charge for c in self._charges.values() if c.active)

    # ------------------------------------------------------------------
    # Trackers
    # ------------------------------------------------------------------

    def attach_tracker(self, tracker: "ChargeTracker") -> None:
        if tracker not in self._trackers:
            self._trackers.append(tracker)

    def detach_tracker(self, tracker: "ChargeTracker") -> None:
        if tracker in self._trackers:
            self._trackers.remove(tracker)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, charge: PointCharge) -> int:
        """
        Add a charge to the board.

        Assigns the next free id unless the charge already carries one.

        Returns:
            The charge id.

        Raises:
            ValueError: If the id is already in use.
        """
        if charge.id < 0:
            while self._next_id in self._charges:
                self._next_id += 1
            charge.id = self._next_id
            self._next_id += 1
        elif charge.id in self._charges:
            raise ValueError(f"Duplicate charge id {charge.id}")

        self._charges[charge.id] = charge
        self.revision += 1
        logger.debug("Added charge %d (%+d) at %s", charge.id, charge.charge, charge.position)

        if charge.active:
            for t in self._trackers:
                t.add_particle(charge)
        return charge.id

    def add_positive(self, position) -> PointCharge:
        charge = PointCharge(1, position)
        self.add(charge)
        return charge

    def add_negative(self, position) -> PointCharge:
        charge = PointCharge(-1, position)
        self.add(charge)
        return charge

    def move(self, charge_id: int, position) -> None:
        """Move a charge. Moving to its current position is a no-op."""
        charge = self.get(charge_id)
        new = f64(position)
        old = charge.position
        if np.array_equal(old, new):
            return
        charge.position = new
        self.revision += 1
        if charge.active:
            for t in self._trackers:
                t.on_moved(charge, old, new)

    def remove(self, charge_id: int) -> PointCharge:
        """Remove a charge from the board and return it."""
        charge = self.get(charge_id)
        if charge.active:
            for t in self._trackers:
                t.on_removed(charge)
        del self._charges[charge_id]
        self.revision += 1
        logger.debug("Removed charge %d", charge_id)
        return charge

    def set_active(self, charge_id: int, active: bool) -> None:
        """Include or exclude a charge from field computation."""
        charge = self.get(charge_id)
        if charge.active == bool(active):
            return
        if not active:
            for t in self._trackers:
                t.on_removed(charge)
        charge.active = bool(active)
        self.revision += 1
        if active:
            for t in self._trackers:
                t.add_particle(charge)

    def clear(self) -> None:
        """Remove every charge."""
        for charge_id in list(self._charges):
            self.remove(charge_id)

    def reset(self, charges: list[PointCharge] | None = None) -> None:
        """
        Replace the whole board in one go.

        Trackers are not fed one event per charge; they are rebuilt from the
        new contents instead. If any charge is rejected the board is left
        as it was.
        """
        new = list(charges or [])
        given_ids = [c.id for c in new]
        old_charges, old_next_id = self._charges, self._next_id
        self._charges = {}
        self._next_id = 1
        trackers, self._trackers = self._trackers, []
        try:
            for c in new:
                self.add(c)
        except ValueError:
            for c, cid in zip(new, given_ids):
                c.id = cid
            self._charges, self._next_id = old_charges, old_next_id
            raise
        finally:
            self._trackers = trackers
        self.revision += 1
        for t in self._trackers:
            t.rebuild()
        logger.debug("Reset configuration with %d charges", len(self._charges))
