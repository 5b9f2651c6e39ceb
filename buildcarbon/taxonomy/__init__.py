"""NRM taxonomy — numeric-aware label ordering, tree building and classification."""

from buildcarbon.taxonomy.classifier import classify, resolve_path
from buildcarbon.taxonomy.codes import compare_labels, label_sort_key, parse_code, sort_labels
from buildcarbon.taxonomy.nrm_data import NRM_DATA
from buildcarbon.taxonomy.tree import TaxonomyNode, build_tree, tree_from_settings

__all__ = [
    "NRM_DATA",
    "TaxonomyNode",
    "build_tree",
    "classify",
    "compare_labels",
    "label_sort_key",
    "parse_code",
    "resolve_path",
    "sort_labels",
    "tree_from_settings",
]
