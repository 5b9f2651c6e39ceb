"""Comparison rows for materials and build-ups.

Materials are compared on their per-kg factors, build-ups on their
per-m2 totals.  Chart rows show product-stage carbon as a positive bar and
biogenic carbon as a negative one.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pydantic import BaseModel

from buildcarbon.library.catalog import MaterialCatalog
from buildcarbon.models.buildup import BuildUp
from buildcarbon.models.material import Material


class ComparisonItem(BaseModel):
    """One material or build-up selected for comparison."""

    id: str
    name: str
    ecf_inc_biogenic: float = 0.0
    ecf_biogenic: float = 0.0
    kind: Literal["material", "buildup"] = "material"


def item_from_material(material: Material) -> ComparisonItem:
    return ComparisonItem(
        id=material.key,
        name=material.display_name,
        ecf_inc_biogenic=material.ecf_inc_biogenic,
        ecf_biogenic=material.ecf_biogenic,
        kind="material",
    )


def item_from_buildup(buildup: BuildUp) -> ComparisonItem:
    return ComparisonItem(
        id=buildup.id,
        name=buildup.name,
        ecf_inc_biogenic=buildup.totals.total_carbon_inc_biogenic,
        ecf_biogenic=buildup.totals.total_carbon_biogenic,
        kind="buildup",
    )


def filter_items(items: Iterable[ComparisonItem], term: str = "") -> list[ComparisonItem]:
    """Case-insensitive substring match on the item name."""
    needle = term.lower()
    return [item for item in items if needle in item.name.lower()]


def group_materials(catalog: MaterialCatalog, term: str = "") -> dict[str, list[ComparisonItem]]:
    """Comparison items per material group, dropping groups with no match."""
    grouped: dict[str, list[ComparisonItem]] = {}
    for group, materials in catalog.groups().items():
        matches = filter_items((item_from_material(m) for m in materials), term)
        if matches:
            grouped[group] = matches
    return grouped


def chart_rows(items: Iterable[ComparisonItem]) -> list[dict[str, Any]]:
    """Numbered chart rows with a positive product-stage bar and a negative biogenic bar."""
    rows: list[dict[str, Any]] = []
    for index, item in enumerate(items, start=1):
        rows.append({
            "label": str(index),
            "full_name": item.name,
            "kind": item.kind,
            "product_stage": abs(item.ecf_inc_biogenic - item.ecf_biogenic),
            "biogenic": -abs(item.ecf_biogenic),
        })
    return rows
