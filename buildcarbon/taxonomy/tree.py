"""Taxonomy tree — classification nodes built from a nested label hierarchy.

``build_tree`` turns a definition such as :data:`~buildcarbon.taxonomy.nrm_data.NRM_DATA`
into a tree of :class:`TaxonomyNode` whose siblings follow the ordering law
of :mod:`buildcarbon.taxonomy.codes`.  A synthetic *Uncategorized* node is
appended as the last top-level child.

Trees returned by ``build_tree`` are skeletons: no build-ups are assigned.
:func:`buildcarbon.taxonomy.classifier.classify` annotates a copy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from buildcarbon.config import UNCATEGORIZED_LABEL
from buildcarbon.models.buildup import BuildUp
from buildcarbon.settings import Settings
from buildcarbon.taxonomy.codes import parse_code, sort_labels
from buildcarbon.taxonomy.nrm_data import NRM_DATA

logger = logging.getLogger(__name__)


class TaxonomyNode:
    """One node of the classification tree.

    ``assigned`` holds build-ups placed exactly on this node.
    ``subtree_count`` is ``len(assigned)`` plus the ``subtree_count`` of
    every child.
    """

    __slots__ = ("label", "code", "children", "assigned", "subtree_count", "is_uncategorized")

    def __init__(self, label: str, *, is_uncategorized: bool = False) -> None:
        self.label = label
        self.code = None if is_uncategorized else parse_code(label)
        self.children: dict[str, TaxonomyNode] = {}
        self.assigned: list[BuildUp] = []
        self.subtree_count = 0
        self.is_uncategorized = is_uncategorized

    def __repr__(self) -> str:
        return f"TaxonomyNode({self.label!r}, children={len(self.children)}, count={self.subtree_count})"

    # -- structure ------------------------------------------------------------

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def uncategorized(self) -> TaxonomyNode | None:
        """The catch-all child of a root node, if present."""
        for child in self.children.values():
            if child.is_uncategorized:
                return child
        return None

    def child_by_code(self, code: str) -> TaxonomyNode | None:
        """Return the child whose own code equals *code* exactly."""
        for child in self.children.values():
            if child.code == code:
                return child
        return None

    def walk(self) -> Iterator[TaxonomyNode]:
        """Yield this node and all descendants, depth-first in sibling order."""
        yield self
        for child in self.children.values():
            yield from child.walk()

    def find(self, code: str) -> TaxonomyNode | None:
        """Return the first node in the tree whose code equals *code*."""
        for node in self.walk():
            if node.code == code:
                return node
        return None

    def leaf_labels(self) -> list[str]:
        """Labels of all selectable leaves (excluding Uncategorized)."""
        return [
            node.label
            for node in self.walk()
            if node is not self and node.is_leaf and not node.is_uncategorized
        ]

    def copy(self) -> TaxonomyNode:
        """Fresh structural copy without any assignments or counts."""
        clone = TaxonomyNode(self.label, is_uncategorized=self.is_uncategorized)
        clone.code = self.code
        for label, child in self.children.items():
            clone.children[label] = child.copy()
        return clone

    # -- rendering ------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Nested, JSON-serialisable representation."""
        return {
            "label": self.label,
            "code": self.code,
            "subtree_count": self.subtree_count,
            "assigned": [{"id": b.id, "name": b.name} for b in self.assigned],
            "children": [child.to_dict() for child in self.children.values()],
        }


def _build_children(node: TaxonomyNode, definition: Mapping[str, Any]) -> None:
    entries = {str(k): v for k, v in definition.items()}
    for label in sort_labels(entries):
        child = TaxonomyNode(label)
        sub = entries[label]
        if isinstance(sub, Mapping) and sub:
            _build_children(child, sub)
        node.children[label] = child


def build_tree(
    definition: Mapping[str, Any],
    *,
    uncategorized_label: str = UNCATEGORIZED_LABEL,
) -> TaxonomyNode:
    """Build a fresh taxonomy tree from *definition*.

    Parameters
    ----------
    definition:
        Mapping of label to sub-mapping; an empty mapping is a leaf.
    uncategorized_label:
        Label of the catch-all node appended after the top-level entries.

    Returns
    -------
    TaxonomyNode
        The synthetic root (empty label).
    """
    root = TaxonomyNode("")
    top_level = {str(k): v for k, v in definition.items()}

    if uncategorized_label in top_level:
        logger.warning(
            "Taxonomy label %r clashes with the catch-all node; replacing it",
            uncategorized_label,
        )
        top_level.pop(uncategorized_label)

    _build_children(root, top_level)
    root.children[uncategorized_label] = TaxonomyNode(uncategorized_label, is_uncategorized=True)
    return root


def tree_from_settings(
    settings: Settings,
    definition: Mapping[str, Any] = NRM_DATA,
) -> TaxonomyNode:
    """Build *definition* (NRM by default) with the catch-all label of *settings*."""
    return build_tree(definition, uncategorized_label=settings.uncategorized_label)
