"""Layer carbon calculator — one (material, thickness) pair to mass and carbon.

All values are per m2 of build-up:

    mass       = density * thickness_mm / 1000
    carbon_inc = mass * ecf_inc_biogenic
    carbon_bio = mass * ecf_biogenic
    carbon_exc = carbon_inc - carbon_bio
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel

from buildcarbon.config import ROUND_DECIMALS
from buildcarbon.models.material import Material

logger = logging.getLogger(__name__)


class LayerDerived(BaseModel):
    """Derived values of a single layer."""

    mass_per_area: float = 0.0
    carbon_inc_biogenic_per_area: float = 0.0
    carbon_biogenic_per_area: float = 0.0
    carbon_exc_biogenic_per_area: float = 0.0


def coerce_thickness(value: Any) -> float | None:
    """Return *value* as a finite, non-negative float, or *None*."""
    if value is None or isinstance(value, bool):
        return None
    try:
        thickness = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(thickness) or thickness < 0:
        return None
    return thickness


def compute_layer(
    material: Material | None,
    thickness_mm: Any,
    decimals: int = ROUND_DECIMALS,
) -> LayerDerived:
    """Compute the derived values of one layer.

    Parameters
    ----------
    material:
        Catalog material, or *None* when the layer has none assigned.
    thickness_mm:
        Layer thickness in millimetres.  Anything that is not a finite
        number >= 0 yields an all-zero result.
    decimals:
        Rounding applied to every output value.

    Returns
    -------
    LayerDerived
    """
    if material is None:
        return LayerDerived()

    thickness = coerce_thickness(thickness_mm)
    if thickness is None:
        logger.debug("Ignoring invalid thickness %r for %s", thickness_mm, material.key)
        return LayerDerived()

    mass = material.density * thickness / 1000
    carbon_inc = round(mass * material.ecf_inc_biogenic, decimals)
    carbon_bio = round(mass * material.ecf_biogenic, decimals)

    return LayerDerived(
        mass_per_area=round(mass, decimals),
        carbon_inc_biogenic_per_area=carbon_inc,
        carbon_biogenic_per_area=carbon_bio,
        carbon_exc_biogenic_per_area=round(carbon_inc - carbon_bio, decimals),
    )
