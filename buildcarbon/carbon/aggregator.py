"""Assembly aggregator — sum layer values into build-up totals."""

from __future__ import annotations

from collections.abc import Iterable

from buildcarbon.config import ROUND_DECIMALS
from buildcarbon.models.buildup import AssemblyTotals, Layer


def aggregate(layers: Iterable[Layer], decimals: int = ROUND_DECIMALS) -> AssemblyTotals:
    """Return fresh totals for *layers*.

    The result replaces whatever totals a build-up carried before; an empty
    layer list gives all-zero totals.
    """
    thickness = mass = carbon_inc = carbon_bio = 0.0
    for layer in layers:
        thickness += layer.thickness_mm
        mass += layer.mass_per_area
        carbon_inc += layer.carbon_inc_biogenic_per_area
        carbon_bio += layer.carbon_biogenic_per_area

    return AssemblyTotals(
        total_thickness=round(thickness, decimals),
        total_mass=round(mass, decimals),
        total_carbon_inc_biogenic=round(carbon_inc, decimals),
        total_carbon_biogenic=round(carbon_bio, decimals),
    )
