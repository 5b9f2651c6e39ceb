"""Project building elements seeded from the NRM taxonomy.

Each taxonomy node becomes a :class:`BuildingElement` that a project can
size (width x length, or an area entered directly) and link to a build-up.
Element ids join the labels of the path with ``-``; display names join them
with `` - ``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from buildcarbon.config import AREA_DECIMALS, DEFAULT_ELEMENT_ROOTS
from buildcarbon.taxonomy.codes import sort_labels


class BuildingElement(BaseModel):
    """One sizable element of a project."""

    id: str
    name: str
    width: float | None = None
    length: float | None = None
    area: float | None = None
    buildup_id: str | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.buildup_id or self.width or self.length or self.area)


def flatten_elements(
    definition: Mapping[str, Any],
    roots: Iterable[str] | None = DEFAULT_ELEMENT_ROOTS,
) -> dict[str, BuildingElement]:
    """Flatten a taxonomy definition into building elements keyed by id.

    Parameters
    ----------
    definition:
        Nested label hierarchy.
    roots:
        Keep only top-level labels starting with one of these prefixes.
        *None* keeps everything.
    """
    prefixes = tuple(roots) if roots is not None else None
    elements: dict[str, BuildingElement] = {}

    def visit(entries: Mapping[str, Any], parent_id: str, parent_name: str) -> None:
        entries = {str(k): v for k, v in entries.items()}
        for label in sort_labels(entries):
            element_id = f"{parent_id}-{label}" if parent_id else label
            name = f"{parent_name} - {label}" if parent_name else label
            elements[element_id] = BuildingElement(id=element_id, name=name)
            sub = entries[label]
            if isinstance(sub, Mapping) and sub:
                visit(sub, element_id, name)

    top = {
        str(k): v
        for k, v in definition.items()
        if prefixes is None or str(k).startswith(prefixes)
    }
    visit(top, "", "")
    return elements


def update_element(element: BuildingElement, **updates: Any) -> BuildingElement:
    """Return a copy of *element* with *updates* applied.

    Changing ``width`` or ``length`` recomputes the area when both are
    set.  Setting ``area`` directly clears ``width`` and ``length``.
    """
    unknown = set(updates) - set(BuildingElement.model_fields)
    if unknown:
        raise KeyError(f"Unknown building element fields: {sorted(unknown)}")

    area = element.area
    if "width" in updates or "length" in updates:
        width = updates.get("width", element.width)
        length = updates.get("length", element.length)
        area = round(width * length, AREA_DECIMALS) if width and length else None

    if "area" in updates:
        updates = {**updates, "width": None, "length": None}
        area = updates["area"]

    return element.model_copy(update={**updates, "area": area})


def group_by_buildup(elements: Iterable[BuildingElement]) -> dict[str, list[BuildingElement]]:
    """Elements per linked build-up id; unlinked elements are skipped."""
    grouped: dict[str, list[BuildingElement]] = {}
    for element in elements:
        if element.buildup_id:
            grouped.setdefault(element.buildup_id, []).append(element)
    return grouped


def assigned_elements(elements: Iterable[BuildingElement]) -> list[BuildingElement]:
    """Elements carrying a build-up link or any dimension."""
    return [e for e in elements if e.has_data]
