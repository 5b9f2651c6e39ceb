"""Data models shared by the carbon and taxonomy engines."""

from buildcarbon.models.buildup import AssemblyTotals, BuildUp, Layer
from buildcarbon.models.material import Material

__all__ = ["AssemblyTotals", "BuildUp", "Layer", "Material"]
