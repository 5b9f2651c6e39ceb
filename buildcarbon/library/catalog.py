"""MaterialCatalog — read-only lookup over the external material feed."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from buildcarbon.models.material import Material

logger = logging.getLogger(__name__)


class MaterialCatalog:
    """Materials addressable by their stable key.

    Parameters
    ----------
    materials:
        Material records.  When two share a key the later one wins.
    """

    def __init__(self, materials: Iterable[Material] = ()) -> None:
        self._materials: dict[str, Material] = {}
        for material in materials:
            if material.key in self._materials:
                logger.warning("Duplicate material key %s, keeping the last record", material.key)
            self._materials[material.key] = material

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> MaterialCatalog:
        """Build a catalog from raw dicts (validated as :class:`Material`)."""
        return cls(Material.model_validate(r) for r in records)

    def __len__(self) -> int:
        return len(self._materials)

    def __contains__(self, key: object) -> bool:
        return key in self._materials

    def __iter__(self) -> Iterator[Material]:
        return iter(self._materials.values())

    def get(self, key: str | None) -> Material | None:
        """Return the material for *key*, or *None* if unknown or empty."""
        if not key:
            return None
        return self._materials.get(key)

    def groups(self) -> dict[str, list[Material]]:
        """Materials grouped by ``group_name``, in catalog order."""
        grouped: dict[str, list[Material]] = {}
        for material in self._materials.values():
            grouped.setdefault(material.group_name, []).append(material)
        return grouped

    def search(self, term: str) -> list[Material]:
        """Case-insensitive substring match on the display name."""
        needle = term.lower()
        return [m for m in self._materials.values() if needle in m.display_name.lower()]
