"""Structural fingerprints of JSON-like values.

A fingerprint is the ordered list of paths (``"candidates[0].price"``) that
describes the shape of a value while ignoring the data itself. Two values with
the same fingerprint are treated as structurally equivalent.

Sequences are sampled at index 0 only: ``[{"a": 1}, {"b": 2}]`` has the same
fingerprint as ``[{"a": 1}]``. Regression reports depend on this, so do not
extend it to a full traversal.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

__all__ = ["StructureDiff", "diff_structures", "structure_of"]

SCALAR_PATH = "value"


def structure_of(value: Any, prefix: str = "") -> list[str]:
    """Return the structural fingerprint of ``value``.

    Args:
        value: Any JSON-compatible value (mappings, lists/tuples, scalars, None).
        prefix: Path of ``value`` inside its parent; empty at the top level.

    Returns:
        Paths in traversal order. Mapping keys are visited in insertion order.
        A key holding a scalar contributes its path twice: once for the key
        and once for the scalar underneath it.

    Example:
        >>> structure_of({"tags": ["x"], "page": 1})
        ['tags', 'tags[]', 'tags[0]', 'page', 'page']
        >>> structure_of([])
        ['[]']
        >>> structure_of(42)
        ['value']
    """
    if value is None:
        return []
    if isinstance(value, Mapping):
        paths: list[str] = []
        for key in value:
            full_key = f"{prefix}.{key}" if prefix else str(key)
            paths.append(full_key)
            paths.extend(structure_of(value[key], full_key))
        return paths
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if not value:
            return [f"{prefix}[]"]
        return [f"{prefix}[]", *structure_of(value[0], f"{prefix}[0]")]
    return [prefix or SCALAR_PATH]


@dataclass(frozen=True, slots=True)
class StructureDiff:
    """Paths gained and lost between two fingerprints."""

    added: list[str]
    removed: list[str]

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def diff_structures(previous: list[str], current: list[str]) -> StructureDiff:
    """Compare two fingerprints as sets, keeping first-seen order.

    ``added`` holds paths of ``current`` missing from ``previous``; ``removed``
    holds paths of ``previous`` missing from ``current``. Each path is
    reported once even when it repeats inside a fingerprint.
    """
    previous_set = set(previous)
    current_set = set(current)
    return StructureDiff(
        added=[path for path in dict.fromkeys(current) if path not in previous_set],
        removed=[path for path in dict.fromkeys(previous) if path not in current_set],
    )
