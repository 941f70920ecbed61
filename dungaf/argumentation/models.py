"""
Argumentation Models — Dung's Abstract Argumentation

Shared types for the engine:
- Semantics names and their unique/multiple-extension split
- The attack representation and its validation
- The per-framework cache of computed extensions
- The exceptions raised at the framework boundary

Arguments are plain string labels; an attack is the ordered pair
(attacker, target). Self-attacks are legal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

Argument = str
Attack = tuple[str, str]


class Semantics(str, Enum):
    """Argumentation semantics for extension computation."""
    ADMISSIBLE = "admissible"
    COMPLETE = "complete"
    EAGER = "eager"
    GROUNDED = "grounded"
    IDEAL = "ideal"
    PREFERRED = "preferred"
    PREFERRED_SCEPTICAL = "preferred_sceptical"
    SEMI_STABLE = "semi_stable"
    STABLE = "stable"

    @property
    def is_unique(self) -> bool:
        """True for semantics that prescribe exactly one extension."""
        return self in _UNIQUE_EXTENSION

    @classmethod
    def parse(cls, value: Semantics | str) -> Semantics:
        """Resolve a name (or member) to a Semantics, failing fast."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownSemanticsError(
                f"'{value}' is not an implemented semantics; expected one of "
                f"{', '.join(s.value for s in cls)}"
            ) from None


_UNIQUE_EXTENSION = frozenset({
    Semantics.EAGER,
    Semantics.GROUNDED,
    Semantics.IDEAL,
    Semantics.PREFERRED_SCEPTICAL,
})


# ── Errors ──────────────────────────────────────────────────────

class MalformedAttackError(ValueError):
    """An attack was not exactly an (attacker, target) pair."""


class UnknownSemanticsError(ValueError):
    """A semantics name was not recognised for the requested operation."""


class WorkBudgetExceededError(RuntimeError):
    """A combinatorial step would exceed the configured work budget."""

    def __init__(self, message: str, budget: int, reached: int):
        super().__init__(message)
        self.budget = budget
        self.reached = reached


def normalize_attacks(attacks: Iterable) -> list[Attack]:
    """
    Validate a batch of attacks and return them as tuples.

    The whole batch is checked before anything is returned, so callers
    can reject it without having applied a partial mutation.
    """
    normalized: list[Attack] = []
    for attack in attacks:
        if isinstance(attack, (str, bytes)):
            raise MalformedAttackError(
                f"attack {attack!r} is a string, not an (attacker, target) pair"
            )
        try:
            pair = tuple(attack)
        except TypeError:
            raise MalformedAttackError(
                f"attack {attack!r} is not an (attacker, target) pair"
            ) from None
        if len(pair) != 2:
            raise MalformedAttackError(
                f"attack {attack!r} has {len(pair)} elements, expected exactly 2"
            )
        normalized.append((pair[0], pair[1]))
    return normalized


@dataclass
class ExtensionCache:
    """
    Computed results for one framework state.

    One optional slot per semantics plus the per-argument defence sets.
    A slot is None until computed; any structural mutation of the owning
    framework clears every slot at once.
    """
    admissible: Optional[frozenset[frozenset[str]]] = None
    complete: Optional[frozenset[frozenset[str]]] = None
    eager: Optional[frozenset[str]] = None
    grounded: Optional[frozenset[str]] = None
    ideal: Optional[frozenset[str]] = None
    preferred: Optional[frozenset[frozenset[str]]] = None
    preferred_sceptical: Optional[frozenset[str]] = None
    semi_stable: Optional[frozenset[frozenset[str]]] = None
    stable: Optional[frozenset[frozenset[str]]] = None
    defence_sets: dict[str, frozenset[frozenset[str]]] = field(default_factory=dict)

    def get(self, semantics: Semantics):
        return getattr(self, semantics.value)

    def put(self, semantics: Semantics, value) -> None:
        setattr(self, semantics.value, value)

    def records(self, semantics: Semantics) -> bool:
        return self.get(semantics) is not None

    def clear(self) -> None:
        self.admissible = None
        self.complete = None
        self.eager = None
        self.grounded = None
        self.ideal = None
        self.preferred = None
        self.preferred_sceptical = None
        self.semi_stable = None
        self.stable = None
        self.defence_sets.clear()

    def copy(self) -> ExtensionCache:
        # Slots hold frozensets, so sharing them between copies is safe.
        return ExtensionCache(
            admissible=self.admissible,
            complete=self.complete,
            eager=self.eager,
            grounded=self.grounded,
            ideal=self.ideal,
            preferred=self.preferred,
            preferred_sceptical=self.preferred_sceptical,
            semi_stable=self.semi_stable,
            stable=self.stable,
            defence_sets=dict(self.defence_sets),
        )

    @property
    def is_empty(self) -> bool:
        return not self.defence_sets and not any(
            self.records(s) for s in Semantics
        )
