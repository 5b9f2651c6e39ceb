"""Material — one entry of the external, read-only material catalog."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Material(BaseModel):
    """Physical and carbon properties of a catalog material.

    Owned by the catalog and never mutated by the engine.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    """Stable unique identifier used by layers to reference the material."""

    group_name: str = ""
    """Material family, e.g. 'Concrete', 'Timber', 'Insulation'."""

    name: str = ""
    """Display name; falls back to the key when empty."""

    density: float = Field(default=0.0, ge=0)
    """kg/m3."""

    ecf_inc_biogenic: float = Field(default=0.0, ge=0)
    """kgCO2e/kg, including biogenic carbon."""

    ecf_biogenic: float = Field(default=0.0, ge=0)
    """kgCO2e/kg, biogenic-only component."""

    @property
    def display_name(self) -> str:
        return self.name or self.key
