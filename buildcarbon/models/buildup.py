"""Build-up models: layers, assembly totals and the saved build-up record.

A build-up (assembly) is an ordered stack of layers over a standard 1 m2
area.  Derived layer fields and the assembly totals are always produced by
:mod:`buildcarbon.carbon`; callers only set ``material_key`` and
``thickness_mm``.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field


def new_id() -> str:
    """Return a fresh random identifier."""
    return uuid.uuid4().hex


class Layer(BaseModel):
    """One material + thickness row of a build-up."""

    id: str = Field(default_factory=new_id)
    item_name: str = ""
    material_key: str | None = None
    thickness_mm: float = Field(default=0.0, ge=0)

    # Derived, per m2 of build-up
    mass_per_area: float = 0.0
    carbon_inc_biogenic_per_area: float = 0.0
    carbon_biogenic_per_area: float = 0.0
    carbon_exc_biogenic_per_area: float = 0.0


class AssemblyTotals(BaseModel):
    """Sums of the derived layer fields of one build-up."""

    total_thickness: float = 0.0
    total_mass: float = 0.0
    total_carbon_inc_biogenic: float = 0.0
    total_carbon_biogenic: float = 0.0

    @property
    def total_carbon_exc_biogenic(self) -> float:
        return self.total_carbon_inc_biogenic - self.total_carbon_biogenic


class BuildUp(BaseModel):
    """A saved build-up.

    ``classification_codes`` holds taxonomy leaf labels assigned at the
    build-up level, e.g. ``"2.5.1 External walls - structural"``.
    """

    id: str = Field(default_factory=new_id)
    name: str = ""
    layers: list[Layer] = Field(default_factory=list)
    classification_codes: list[str] = Field(default_factory=list)
    totals: AssemblyTotals = Field(default_factory=AssemblyTotals)

    def layer(self, layer_id: str) -> Layer | None:
        """Return the layer with *layer_id*, or *None*."""
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def unique_codes(self) -> list[str]:
        """Classification codes with duplicates removed, order preserved."""
        seen: set[str] = set()
        codes: list[str] = []
        for code in self.classification_codes:
            if code not in seen:
                seen.add(code)
                codes.append(code)
        return codes
