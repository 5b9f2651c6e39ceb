"""CarbonEngine — main entry point for build-up carbon accounting.

Usage::

    from buildcarbon.carbon import CarbonEngine

    engine = CarbonEngine(catalog)
    buildup = engine.add_layer(buildup, material_key="brick", thickness_mm=102.5)
    report = engine.report(buildup)

Every editing method returns a new :class:`BuildUp` with its layers
recomputed and its totals replaced; the input build-up is left untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from buildcarbon.carbon.aggregator import aggregate
from buildcarbon.carbon.calculator import coerce_thickness, compute_layer
from buildcarbon.carbon.contribution import ContributionResult, layer_contribution
from buildcarbon.carbon.report import CarbonReport
from buildcarbon.config import CHART_HEIGHT, ROUND_DECIMALS
from buildcarbon.library.catalog import MaterialCatalog
from buildcarbon.models.buildup import BuildUp, Layer
from buildcarbon.settings import Settings

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class CarbonEngine:
    """Embodied-carbon engine for build-ups.

    Parameters
    ----------
    catalog:
        Material catalog used to resolve ``Layer.material_key``.
    decimals:
        Rounding applied to derived layer values and totals.
    chart_height:
        Full height of the contribution chart.
    """

    def __init__(
        self,
        catalog: MaterialCatalog,
        *,
        decimals: int = ROUND_DECIMALS,
        chart_height: float = CHART_HEIGHT,
    ) -> None:
        self.catalog = catalog
        self.decimals = decimals
        self.chart_height = chart_height

    @classmethod
    def from_settings(cls, catalog: MaterialCatalog, settings: Settings) -> CarbonEngine:
        """Create an engine using the rounding and chart height of *settings*."""
        return cls(catalog, decimals=settings.decimals, chart_height=settings.chart_height)

    # -- single layers --------------------------------------------------------

    def compute(self, layer: Layer) -> Layer:
        """Return a copy of *layer* with its derived fields recomputed."""
        material = self.catalog.get(layer.material_key)
        if material is None and layer.material_key:
            logger.debug("Unknown material %s on layer %s", layer.material_key, layer.id)
        derived = compute_layer(material, layer.thickness_mm, self.decimals)
        return layer.model_copy(update=derived.model_dump())

    # -- build-ups ------------------------------------------------------------

    def recompute(self, buildup: BuildUp) -> BuildUp:
        """Recompute every layer and replace the totals."""
        layers = [self.compute(layer) for layer in buildup.layers]
        return buildup.model_copy(
            update={"layers": layers, "totals": aggregate(layers, self.decimals)}
        )

    def add_layer(
        self,
        buildup: BuildUp,
        *,
        material_key: str | None = None,
        thickness_mm: Any = 0.0,
        item_name: str = "",
    ) -> BuildUp:
        """Append a layer and recompute."""
        layer = Layer(
            item_name=item_name,
            material_key=material_key or None,
            thickness_mm=_thickness_or_zero(thickness_mm),
        )
        return self.recompute(buildup.model_copy(update={"layers": [*buildup.layers, layer]}))

    def update_layer(
        self,
        buildup: BuildUp,
        layer_id: str,
        *,
        material_key: str | None = _UNSET,
        thickness_mm: Any = _UNSET,
        item_name: str = _UNSET,
    ) -> BuildUp:
        """Change a layer's material, thickness or name and recompute.

        Raises
        ------
        KeyError
            If *layer_id* is not a layer of *buildup*.
        """
        if buildup.layer(layer_id) is None:
            raise KeyError(f"Layer not found: {layer_id}")

        changes: dict[str, Any] = {}
        if material_key is not _UNSET:
            changes["material_key"] = material_key or None
        if thickness_mm is not _UNSET:
            changes["thickness_mm"] = _thickness_or_zero(thickness_mm)
        if item_name is not _UNSET:
            changes["item_name"] = item_name

        layers = [
            layer.model_copy(update=changes) if layer.id == layer_id else layer
            for layer in buildup.layers
        ]
        return self.recompute(buildup.model_copy(update={"layers": layers}))

    def remove_layer(self, buildup: BuildUp, layer_id: str) -> BuildUp:
        """Delete a layer and recompute.

        Raises
        ------
        KeyError
            If *layer_id* is not a layer of *buildup*.
        """
        if buildup.layer(layer_id) is None:
            raise KeyError(f"Layer not found: {layer_id}")
        layers = [layer for layer in buildup.layers if layer.id != layer_id]
        return self.recompute(buildup.model_copy(update={"layers": layers}))

    # -- outputs --------------------------------------------------------------

    def contribution(self, buildup: BuildUp, toggled_layer_ids: Iterable[str]) -> ContributionResult:
        """Chart geometry for the toggled layers of *buildup*."""
        return layer_contribution(buildup.layers, toggled_layer_ids, self.chart_height)

    def report(self, buildup: BuildUp) -> CarbonReport:
        """Build a :class:`CarbonReport` from a recomputed copy of *buildup*."""
        fresh = self.recompute(buildup)
        return CarbonReport(
            buildup_id=fresh.id,
            name=fresh.name,
            layers=[self._layer_row(layer) for layer in fresh.layers],
            totals=fresh.totals,
            classification_codes=fresh.unique_codes(),
        )

    def _layer_row(self, layer: Layer) -> dict[str, Any]:
        material = self.catalog.get(layer.material_key)
        return {
            "item_name": layer.item_name,
            "material": material.display_name if material else "",
            "thickness_mm": layer.thickness_mm,
            "mass_per_area": layer.mass_per_area,
            "carbon_inc_biogenic_per_area": layer.carbon_inc_biogenic_per_area,
            "carbon_biogenic_per_area": layer.carbon_biogenic_per_area,
            "carbon_exc_biogenic_per_area": layer.carbon_exc_biogenic_per_area,
        }


def _thickness_or_zero(value: Any) -> float:
    thickness = coerce_thickness(value)
    if thickness is None:
        logger.debug("Storing invalid thickness %r as 0 mm", value)
        return 0.0
    return thickness
