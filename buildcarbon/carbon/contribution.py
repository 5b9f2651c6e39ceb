"""Contribution scaler — what share of a build-up a toggled subset of layers carries.

Two signed quantities are shown side by side: product-stage carbon
(A1-A3 excluding biogenic) and biogenic carbon.  Both bars share one height
scale so their magnitudes stay comparable, and each bar sits above or below
a common centre line depending on its sign.

Percentages are deliberately not clamped.  A toggled subset whose sign
opposes the net total can exceed 100 %.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from buildcarbon.config import CHART_HEIGHT
from buildcarbon.models.buildup import Layer


class BarGeometry(BaseModel):
    """Height, placement and toggled share of one bar."""

    value: float = 0.0
    height: float = 0.0
    percentage: float = 0.0
    highlight_height: float = 0.0
    is_negative: bool = False

    @property
    def position(self) -> str:
        """'above' or 'below' the centre line."""
        return "below" if self.is_negative else "above"


class ContributionResult(BaseModel):
    """Geometry for the product-stage and biogenic bars."""

    product_stage: BarGeometry
    biogenic: BarGeometry
    scale: float = 0.0
    """Height units per kgCO2e; zero when every input is zero."""


def percentage_of(toggled: float, total: float) -> float:
    """``|toggled| / |total| * 100``, or 0 when the total is zero."""
    if abs(total) == 0:
        return 0.0
    return abs(toggled) / abs(total) * 100


def _bar(total: float, toggled: float, scale: float) -> BarGeometry:
    height = abs(total) * scale
    percentage = percentage_of(toggled, total)
    return BarGeometry(
        value=total,
        height=height,
        percentage=percentage,
        highlight_height=height * percentage / 100,
        is_negative=total < 0,
    )


def scale(
    total_product_stage: float,
    total_biogenic: float,
    toggled_product_stage: float,
    toggled_biogenic: float,
    chart_height: float = CHART_HEIGHT,
) -> ContributionResult:
    """Compute bar geometry for a build-up and its toggled subset.

    The largest absolute value among the four inputs spans half of
    *chart_height*.
    """
    max_abs = max(
        abs(total_product_stage),
        abs(total_biogenic),
        abs(toggled_product_stage),
        abs(toggled_biogenic),
    )
    height_scale = (chart_height / 2) / max_abs if max_abs > 0 else 0.0

    return ContributionResult(
        product_stage=_bar(total_product_stage, toggled_product_stage, height_scale),
        biogenic=_bar(total_biogenic, toggled_biogenic, height_scale),
        scale=height_scale,
    )


def layer_contribution(
    layers: Iterable[Layer],
    toggled_ids: Iterable[str],
    chart_height: float = CHART_HEIGHT,
) -> ContributionResult:
    """Sum *layers* and the subset in *toggled_ids*, then :func:`scale` them."""
    toggled = set(toggled_ids)
    total_exc = total_bio = toggled_exc = toggled_bio = 0.0
    for layer in layers:
        total_exc += layer.carbon_exc_biogenic_per_area
        total_bio += layer.carbon_biogenic_per_area
        if layer.id in toggled:
            toggled_exc += layer.carbon_exc_biogenic_per_area
            toggled_bio += layer.carbon_biogenic_per_area

    return scale(total_exc, total_bio, toggled_exc, toggled_bio, chart_height=chart_height)
