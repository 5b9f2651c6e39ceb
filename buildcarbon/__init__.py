"""buildcarbon — embodied-carbon accounting and NRM classification for construction build-ups."""

__version__ = "1.0.0"

from buildcarbon.carbon.aggregator import aggregate
from buildcarbon.carbon.calculator import LayerDerived, compute_layer
from buildcarbon.carbon.contribution import BarGeometry, ContributionResult, scale
from buildcarbon.carbon.engine import CarbonEngine
from buildcarbon.carbon.report import CarbonReport
from buildcarbon.library.buildups import BuildUpLibrary, unique_name
from buildcarbon.library.catalog import MaterialCatalog
from buildcarbon.library.notifications import ChangeNotifier
from buildcarbon.models.buildup import AssemblyTotals, BuildUp, Layer
from buildcarbon.models.material import Material
from buildcarbon.projects.elements import BuildingElement, flatten_elements
from buildcarbon.projects.project import Project, ProjectVersion, create_project
from buildcarbon.settings import Settings, SettingsManager, apply_log_level
from buildcarbon.taxonomy.classifier import classify
from buildcarbon.taxonomy.codes import compare_labels, sort_labels
from buildcarbon.taxonomy.nrm_data import NRM_DATA
from buildcarbon.taxonomy.tree import TaxonomyNode, build_tree, tree_from_settings

__all__ = [
    "__version__",
    # Carbon
    "AssemblyTotals",
    "BarGeometry",
    "CarbonEngine",
    "CarbonReport",
    "ContributionResult",
    "Layer",
    "LayerDerived",
    "aggregate",
    "compute_layer",
    "scale",
    # Taxonomy
    "NRM_DATA",
    "TaxonomyNode",
    "build_tree",
    "classify",
    "compare_labels",
    "sort_labels",
    "tree_from_settings",
    # Library
    "BuildUp",
    "BuildUpLibrary",
    "ChangeNotifier",
    "Material",
    "MaterialCatalog",
    "unique_name",
    # Projects
    "BuildingElement",
    "Project",
    "ProjectVersion",
    "create_project",
    "flatten_elements",
    # Settings
    "Settings",
    "SettingsManager",
    "apply_log_level",
]
