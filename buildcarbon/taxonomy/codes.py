"""Dotted-numeric code parsing and the one ordering law for taxonomy labels.

Labels such as ``"2.10 Frame"`` carry a leading code.  Siblings are ordered
by comparing the code components numerically, left to right, with missing
trailing components treated as 0 (``2.1`` before ``2.2`` before ``2.10``).
When the codes are equal, or either label has no code, plain string
comparison decides.  Labels without a code sort after coded ones.
"""

from __future__ import annotations

from collections.abc import Iterable

from buildcarbon.config import NUMERIC_PREFIX_PATTERN


def parse_code(label: str) -> str | None:
    """Return the leading dotted-numeric code of *label*, or *None*.

    >>> parse_code("2.5.1 External walls - structural")
    '2.5.1'
    """
    if not isinstance(label, str):
        return None
    match = NUMERIC_PREFIX_PATTERN.match(label.strip())
    return match.group(0) if match else None


def code_parts(code: str) -> tuple[int, ...]:
    """Split a dotted code into integers: ``"2.10"`` -> ``(2, 10)``."""
    return tuple(int(part) for part in code.split("."))


def code_segments(code: str) -> list[str]:
    """Accumulated prefixes of *code*: ``"2.5.1"`` -> ``["2", "2.5", "2.5.1"]``."""
    parts = code.split(".")
    return [".".join(parts[: i + 1]) for i in range(len(parts))]


def label_sort_key(label: str) -> tuple:
    """Sort key implementing the label ordering law."""
    code = parse_code(label)
    if code is None:
        return (1, (), label)
    parts = list(code_parts(code))
    # Missing trailing components count as 0, so "2.5" and "2.5.0" tie.
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return (0, tuple(parts), label)


def compare_labels(a: str, b: str) -> int:
    """Three-way comparison of two labels (-1, 0 or 1)."""
    key_a, key_b = label_sort_key(a), label_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_labels(labels: Iterable[str]) -> list[str]:
    """Return *labels* in taxonomy order."""
    return sorted(labels, key=label_sort_key)

