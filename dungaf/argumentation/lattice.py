"""
Set lattice helpers — pruning collections of sets by containment.

Used throughout the engine to keep only minimal candidate solutions
(defence-set search, removal sets) or only maximal candidates
(preferred extensions). Comparison is by element containment only.
"""

from __future__ import annotations

from typing import Iterable


def remove_non_minimal(collection: Iterable[Iterable]) -> set[frozenset]:
    """Drop every member that is a strict superset of another member."""
    return _prune(collection, keep_minimal=True)


def remove_non_maximal(collection: Iterable[Iterable]) -> set[frozenset]:
    """Drop every member that is a strict subset of another member."""
    return _prune(collection, keep_minimal=False)


def _prune(collection: Iterable[Iterable], keep_minimal: bool) -> set[frozenset]:
    # Duplicates collapse here, so equal members never eliminate each other.
    members = {frozenset(m) for m in collection}
    ordered = sorted(members, key=len, reverse=not keep_minimal)

    kept: list[frozenset] = []
    for member in ordered:
        if keep_minimal:
            dominated = any(k < member for k in kept)
        else:
            dominated = any(member < k for k in kept)
        if not dominated:
            kept.append(member)
    return set(kept)
