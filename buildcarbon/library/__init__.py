"""Material catalog, build-up library, change notifications and comparisons."""

from buildcarbon.library.buildups import BuildUpLibrary, unique_name
from buildcarbon.library.catalog import MaterialCatalog
from buildcarbon.library.compare import ComparisonItem, chart_rows, filter_items, group_materials
from buildcarbon.library.notifications import ChangeNotifier

__all__ = [
    "BuildUpLibrary",
    "ChangeNotifier",
    "ComparisonItem",
    "MaterialCatalog",
    "chart_rows",
    "filter_items",
    "group_materials",
    "unique_name",
]
