"""Carbon accounting — layer calculator, assembly aggregator and contribution scaler."""

from buildcarbon.carbon.aggregator import aggregate
from buildcarbon.carbon.calculator import LayerDerived, compute_layer
from buildcarbon.carbon.contribution import BarGeometry, ContributionResult, scale
from buildcarbon.carbon.engine import CarbonEngine
from buildcarbon.carbon.report import CarbonReport

__all__ = [
    "BarGeometry",
    "CarbonEngine",
    "CarbonReport",
    "ContributionResult",
    "LayerDerived",
    "aggregate",
    "compute_layer",
    "scale",
]
