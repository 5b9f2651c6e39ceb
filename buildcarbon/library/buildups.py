"""BuildUpLibrary — in-memory collection of saved build-ups.

The library owns naming rules (unique names with a ``(n)`` suffix, copy
names), re-derives the totals of every stored build-up from its layers and
publishes a change event on every mutation.  Where and how the
records are stored is up to the caller: ``to_records`` / ``from_records``
exchange plain dicts with the external store.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from buildcarbon.carbon.aggregator import aggregate
from buildcarbon.config import COPY_PREFIX, ROUND_DECIMALS
from buildcarbon.library.notifications import ChangeNotifier
from buildcarbon.models.buildup import AssemblyTotals, BuildUp, new_id

logger = logging.getLogger(__name__)


def unique_name(base: str, existing_names: Iterable[str]) -> str:
    """Return *base*, or *base* with the next free ``(n)`` suffix.

    ``"Wall"`` -> ``"Wall (2)"`` when ``"Wall"`` exists, then ``"Wall (3)"``
    once ``"Wall (2)"`` exists, and so on.
    """
    names = list(existing_names)
    if base not in names:
        return base

    pattern = re.compile(rf"^{re.escape(base)}\s*\((\d+)\)$")
    suffixes = [int(m.group(1)) for m in map(pattern.match, names) if m]
    suffixes = [n for n in suffixes if n > 0]
    if not suffixes:
        return f"{base} (2)"
    return f"{base} ({max(suffixes) + 1})"


class BuildUpLibrary:
    """Manage the collection of saved build-ups.

    Parameters
    ----------
    buildups:
        Initial records, in display order.
    notifier:
        Receives change events.  A private one is created if omitted.
    decimals:
        Rounding of the totals derived on save and load.
    """

    def __init__(
        self,
        buildups: Iterable[BuildUp] = (),
        *,
        notifier: ChangeNotifier | None = None,
        decimals: int = ROUND_DECIMALS,
    ) -> None:
        self.decimals = decimals
        self._buildups: list[BuildUp] = [self._with_totals(b) for b in buildups]
        self.notifier = notifier or ChangeNotifier()

    # -- helpers --------------------------------------------------------------

    def _index(self, buildup_id: str) -> int:
        for i, buildup in enumerate(self._buildups):
            if buildup.id == buildup_id:
                return i
        raise KeyError(f"Build-up not found: {buildup_id}")

    def _with_totals(self, buildup: BuildUp) -> BuildUp:
        totals = aggregate(buildup.layers, self.decimals)
        if totals == buildup.totals:
            return buildup
        logger.debug("Build-up %s: stored totals replaced by the layer sums", buildup.id)
        return buildup.model_copy(update={"totals": totals})

    def _publish(self, event_type: str, buildup: BuildUp) -> None:
        self.notifier.publish({"type": event_type, "buildup_id": buildup.id, "name": buildup.name})

    # -- queries --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._buildups)

    def all(self) -> list[BuildUp]:
        return list(self._buildups)

    def get(self, buildup_id: str) -> BuildUp | None:
        """Return the build-up with *buildup_id*, or *None*."""
        for buildup in self._buildups:
            if buildup.id == buildup_id:
                return buildup
        return None

    def names(self) -> list[str]:
        return [b.name for b in self._buildups]

    def search(self, term: str = "") -> list[BuildUp]:
        """Case-insensitive substring match on the build-up name."""
        needle = term.lower()
        return [b for b in self._buildups if needle in b.name.lower()]

    # -- mutations ------------------------------------------------------------

    def create(self, name: str, classification_codes: Iterable[str] = ()) -> BuildUp:
        """Add a new empty build-up under a unique version of *name*."""
        buildup = BuildUp(
            name=unique_name(name, self.names()),
            classification_codes=list(classification_codes),
            totals=AssemblyTotals(),
        )
        self._buildups.append(buildup)
        logger.info("Created build-up %s (%s)", buildup.name, buildup.id)
        self._publish("created", buildup)
        return buildup

    def save(self, buildup: BuildUp) -> BuildUp:
        """Replace the record with the same id, or append a new one.

        The totals are re-derived from the layers; the stored build-up is
        returned.
        """
        buildup = self._with_totals(buildup)
        try:
            self._buildups[self._index(buildup.id)] = buildup
        except KeyError:
            self._buildups.append(buildup)
        logger.info("Saved build-up %s (%s)", buildup.name, buildup.id)
        self._publish("saved", buildup)
        return buildup

    def duplicate(self, buildup_id: str) -> BuildUp:
        """Copy a build-up under a new id and a ``Copy of ...`` name.

        Raises
        ------
        KeyError
            If *buildup_id* is not in the library.
        """
        source = self._buildups[self._index(buildup_id)]
        copy = source.model_copy(
            update={
                "id": new_id(),
                "name": unique_name(f"{COPY_PREFIX}{source.name}", self.names()),
                "layers": [layer.model_copy(update={"id": new_id()}) for layer in source.layers],
                "classification_codes": list(source.classification_codes),
                "totals": source.totals.model_copy(),
            }
        )
        self._buildups.append(copy)
        logger.info("Duplicated build-up %s -> %s", source.id, copy.id)
        self._publish("duplicated", copy)
        return copy

    def remove(self, buildup_id: str) -> BuildUp:
        """Delete a build-up and return it.

        Raises
        ------
        KeyError
            If *buildup_id* is not in the library.
        """
        removed = self._buildups.pop(self._index(buildup_id))
        logger.info("Removed build-up %s (%s)", removed.name, removed.id)
        self._publish("removed", removed)
        return removed

    # -- exchange with the external store ---------------------------------------

    def to_records(self) -> list[dict[str, Any]]:
        return [b.model_dump(mode="json") for b in self._buildups]

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        *,
        notifier: ChangeNotifier | None = None,
        decimals: int = ROUND_DECIMALS,
    ) -> BuildUpLibrary:
        return cls(
            (BuildUp.model_validate(r) for r in records),
            notifier=notifier,
            decimals=decimals,
        )
