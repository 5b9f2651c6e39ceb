"""Assembly classifier — place build-ups on the exact taxonomy node of each code.

For every classification code of a build-up the code's dotted prefix is
walked from the root one segment at a time (``2`` -> ``2.5`` -> ``2.5.1``),
matching each level's child by exact code.  A complete walk assigns the
build-up to the terminal node and raises ``subtree_count`` on every node of
the path.  A missing prefix or a failed walk sends the build-up to
*Uncategorized*; a partial walk never attributes anything to the ancestors
it passed through.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from buildcarbon.config import UNCATEGORIZED_LABEL
from buildcarbon.models.buildup import BuildUp
from buildcarbon.taxonomy.codes import code_segments, parse_code
from buildcarbon.taxonomy.tree import TaxonomyNode

logger = logging.getLogger(__name__)


def resolve_path(root: TaxonomyNode, code: str) -> list[TaxonomyNode] | None:
    """Return the nodes from the top level down to the node for *code*.

    Returns *None* when *code* has no dotted prefix or any level fails to
    match exactly.
    """
    prefix = parse_code(code)
    if prefix is None:
        return None

    path: list[TaxonomyNode] = []
    node = root
    for segment in code_segments(prefix):
        child = node.child_by_code(segment)
        if child is None:
            return None
        path.append(child)
        node = child
    return path


def _place(root: TaxonomyNode, path: list[TaxonomyNode], buildup: BuildUp) -> None:
    terminal = path[-1]
    # Once per node: codes resolving to the same node count a single time.
    if any(b is buildup for b in terminal.assigned):
        return
    terminal.assigned.append(buildup)
    root.subtree_count += 1
    for node in path:
        node.subtree_count += 1


def classify(tree: TaxonomyNode, buildups: Iterable[BuildUp]) -> TaxonomyNode:
    """Return an annotated copy of *tree* with *buildups* classified.

    *tree* itself is not modified.  A build-up with several codes may land
    on several nodes; it is placed at most once per node.
    """
    root = tree.copy()
    uncategorized = root.uncategorized
    if uncategorized is None:
        uncategorized = TaxonomyNode(UNCATEGORIZED_LABEL, is_uncategorized=True)
        root.children[uncategorized.label] = uncategorized

    for buildup in buildups:
        codes = buildup.unique_codes()
        if not codes:
            _place(root, [uncategorized], buildup)
            continue

        for code in codes:
            path = resolve_path(root, code)
            if path is None:
                logger.debug("Build-up %s: code %r routed to %s", buildup.id, code, uncategorized.label)
                _place(root, [uncategorized], buildup)
            else:
                _place(root, path, buildup)

    return root
