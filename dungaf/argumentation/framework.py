"""
Argumentation Framework — Dung's (Args, Attacks) graph.

AF = (Args, Attacks) where:
- Args is a finite set of argument labels
- Attacks ⊆ Args × Args is a binary attack relation

The framework owns the graph, two adjacency maps derived from it
(argument → attackers, argument → targets) and the cache of every
extension computed for the current graph. It is the sole mutator of
all three: queries hand out copies, and any mutation that changes the
graph clears the cache before returning.

Not synchronized. Concurrent readers are safe only while no mutation
is in flight.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from dungaf.config import Settings, get_settings

from .engine import ExtensionEngine
from .models import (
    Attack,
    ExtensionCache,
    Semantics,
    normalize_attacks,
)

logger = logging.getLogger("dungaf.argumentation.framework")


class ArgumentationFramework:
    """
    A Dung abstract argumentation framework with cached semantics.

    Construct it empty, from attacks alone (arguments implied), or from
    arguments plus attacks:

        af = ArgumentationFramework(attacks=[("a", "b"), ("b", "a")])
        af.preferred_extensions()   # {frozenset({'a'}), frozenset({'b'})}
    """

    def __init__(
        self,
        arguments: Iterable[str] = (),
        attacks: Iterable = (),
        settings: Optional[Settings] = None,
    ):
        checked = normalize_attacks(attacks)

        self._arguments: set[str] = set(arguments)
        for attacker, target in checked:
            self._arguments.add(attacker)
            self._arguments.add(target)
        self._attacks: set[Attack] = set(checked)

        self._attackers: dict[str, set[str]] = {a: set() for a in self._arguments}
        self._targets: dict[str, set[str]] = {a: set() for a in self._arguments}
        for attacker, target in self._attacks:
            self._attackers[target].add(attacker)
            self._targets[attacker].add(target)

        self.settings = settings or get_settings()
        self._cache = ExtensionCache()
        self._engine = ExtensionEngine(self, self._cache)

    # ── Construction helpers ────────────────────────────────────

    @classmethod
    def from_attacks(cls, attacks: Iterable, **kwargs) -> ArgumentationFramework:
        """The framework of `attacks` and every argument they involve."""
        return cls(attacks=attacks, **kwargs)

    @classmethod
    def random(
        cls,
        min_arguments: int,
        max_arguments: int,
        min_attacks: int,
        max_attacks: int,
        argument_pool: Iterable[str],
        seed: Optional[int] = None,
    ) -> ArgumentationFramework:
        """A random framework within the given bounds (see generator)."""
        from .generator import random_framework
        return random_framework(
            min_arguments, max_arguments, min_attacks, max_attacks,
            argument_pool, seed=seed,
        )

    def copy(self) -> ArgumentationFramework:
        """An independent framework with the same graph and cached results."""
        twin = ArgumentationFramework(self._arguments, self._attacks,
                                      settings=self.settings)
        twin._cache = self._cache.copy()
        twin._engine = ExtensionEngine(twin, twin._cache)
        return twin

    __copy__ = copy

    # ── Structure ───────────────────────────────────────────────

    @property
    def arguments(self) -> set[str]:
        return set(self._arguments)

    @property
    def attacks(self) -> set[Attack]:
        return set(self._attacks)

    def attackers_of(self, argument: str) -> set[str]:
        """Get all arguments that attack the given argument."""
        return set(self._attackers.get(argument, ()))

    def targets_of(self, argument: str) -> set[str]:
        """Get all arguments attacked by the given argument."""
        return set(self._targets.get(argument, ()))

    def __contains__(self, argument: object) -> bool:
        return argument in self._arguments

    def __len__(self) -> int:
        return len(self._arguments)

    # ── Mutation ────────────────────────────────────────────────

    def add_argument(self, argument: str) -> bool:
        return self.add_arguments([argument])

    def add_arguments(self, arguments: Iterable[str]) -> bool:
        """Add arguments. Returns True if the framework changed."""
        added = False
        for argument in arguments:
            if argument not in self._arguments:
                self._arguments.add(argument)
                self._attackers[argument] = set()
                self._targets[argument] = set()
                added = True

        if added:
            self._invalidate("add_arguments")
        return added

    def add_attack(self, attacker: str, target: str) -> bool:
        return self.add_attacks([(attacker, target)])

    def add_attacks(self, attacks: Iterable) -> bool:
        """
        Add attacks, and any arguments they involve.

        Raises MalformedAttackError, leaving the framework unchanged, if
        any attack is not an (attacker, target) pair.
        """
        checked = normalize_attacks(attacks)

        changed = False
        for attacker, target in checked:
            for argument in (attacker, target):
                if argument not in self._arguments:
                    self._arguments.add(argument)
                    self._attackers[argument] = set()
                    self._targets[argument] = set()
                    changed = True
            if (attacker, target) not in self._attacks:
                self._attacks.add((attacker, target))
                self._attackers[target].add(attacker)
                self._targets[attacker].add(target)
                changed = True

        if changed:
            self._invalidate("add_attacks")
        return changed

    def remove_argument(self, argument: str) -> bool:
        return self.remove_arguments([argument])

    def remove_arguments(self, arguments: Iterable[str]) -> bool:
        """Remove arguments together with every attack involving them."""
        doomed = set(arguments) & self._arguments
        if not doomed:
            return False

        for attack in [a for a in self._attacks if a[0] in doomed or a[1] in doomed]:
            self._discard_attack(attack)
        for argument in doomed:
            self._arguments.discard(argument)
            del self._attackers[argument]
            del self._targets[argument]

        self._invalidate("remove_arguments")
        return True

    def remove_attack(self, attacker: str, target: str) -> bool:
        return self.remove_attacks([(attacker, target)])

    def remove_attacks(self, attacks: Iterable) -> bool:
        """
        Remove attacks. Arguments are kept.

        Raises MalformedAttackError, leaving the framework unchanged, if
        any attack is not an (attacker, target) pair.
        """
        checked = normalize_attacks(attacks)

        changed = False
        for attack in checked:
            if attack in self._attacks:
                self._discard_attack(attack)
                changed = True

        if changed:
            self._invalidate("remove_attacks")
        return changed

    def ensure_subsumes(self, other: ArgumentationFramework) -> bool:
        """Merge `other` in, so that this framework is a supergraph of it."""
        added_args = self.add_arguments(other.arguments)
        added_attacks = self.add_attacks(other.attacks)
        return added_args or added_attacks

    def ensure_disjoint_with(self, other: ArgumentationFramework) -> bool:
        """Remove every argument of `other` from this framework."""
        return self.remove_arguments(other.arguments)

    def clear(self) -> bool:
        """Remove all arguments and attacks."""
        if not self._arguments:
            return False
        self._arguments.clear()
        self._attacks.clear()
        self._attackers.clear()
        self._targets.clear()
        self._invalidate("clear")
        return True

    def _discard_attack(self, attack: Attack) -> None:
        attacker, target = attack
        self._attacks.discard(attack)
        self._attackers[target].discard(attacker)
        self._targets[attacker].discard(target)

    def _invalidate(self, reason: str) -> None:
        if not self._cache.is_empty:
            logger.debug(f"Graph changed by {reason}; discarding cached extensions")
        self._cache.clear()

    # ── Comparison ──────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        """Same arguments and attacks; cached results are ignored."""
        if not isinstance(other, ArgumentationFramework):
            return NotImplemented
        return (self._arguments == other._arguments
                and self._attacks == other._attacks)

    __hash__ = None  # mutable

    def subsumes(self, other: ArgumentationFramework) -> bool:
        """True if this framework is a (non-strict) supergraph of `other`."""
        return (self._arguments >= other._arguments
                and self._attacks >= other._attacks)

    def is_subsumed_by(self, other: ArgumentationFramework) -> bool:
        return other.subsumes(self)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ArgumentationFramework):
            return NotImplemented
        return self.subsumes(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ArgumentationFramework):
            return NotImplemented
        return self.is_subsumed_by(other)

    def is_disjoint_with(self, other: ArgumentationFramework) -> bool:
        """True if the two frameworks share no argument."""
        return self._arguments.isdisjoint(other._arguments)

    # ── Rendering ───────────────────────────────────────────────

    def __str__(self) -> str:
        args = ", ".join(sorted(map(str, self._arguments)))
        atts = ", ".join(
            f"({a}, {t})"
            for a, t in sorted((str(a), str(t)) for a, t in self._attacks)
        )
        return f"({{{args}}}, {{{atts}}})"

    def __repr__(self) -> str:
        return (f"ArgumentationFramework(arguments={len(self._arguments)}, "
                f"attacks={len(self._attacks)})")

    def to_dict(self) -> dict:
        return {
            "arguments": sorted(self._arguments),
            "attacks": [
                {"attacker": a, "target": t}
                for a, t in sorted(self._attacks)
            ],
            "stats": {
                "num_arguments": len(self._arguments),
                "num_attacks": len(self._attacks),
                "self_attacking": sum(1 for a, t in self._attacks if a == t),
            },
        }

    # ── Conflict ────────────────────────────────────────────────

    def has_as_conflict_free_set(self, arguments: Iterable[str]) -> bool:
        """
        True if every argument is in this framework and none of them
        attacks itself or another of them.
        """
        members = set(arguments)
        for argument in members:
            if argument not in self._arguments:
                return False
            if self._attackers[argument] & members:
                return False
        return True

    def is_conflict_free(self, *arguments: str) -> bool:
        return self.has_as_conflict_free_set(arguments)

    def contains_no_conflict_among(self, arguments: Iterable[str]) -> bool:
        """
        True if none of the arguments attacks itself or another of them.
        Unlike has_as_conflict_free_set, membership is not required.
        """
        members = set(arguments)
        return not any(
            self._attackers.get(argument, set()) & members
            for argument in members
        )

    def has_union_as_conflict_free_set(self, collections: Iterable[Iterable[str]]) -> bool:
        union: set[str] = set()
        for collection in collections:
            union.update(collection)
        return self.has_as_conflict_free_set(union)

    def contains_no_conflict_among_union_of(self, collections: Iterable[Iterable[str]]) -> bool:
        union: set[str] = set()
        for collection in collections:
            union.update(collection)
        return self.contains_no_conflict_among(union)

    def is_in_conflict_with_any_of(self, collection: Iterable[str], *arguments: str) -> bool:
        """True if a member of `collection` attacks or is attacked by any of `arguments`."""
        members = collection if isinstance(collection, (set, frozenset)) else set(collection)
        for argument in arguments:
            if not members.isdisjoint(self._attackers.get(argument, ())):
                return True
            if not members.isdisjoint(self._targets.get(argument, ())):
                return True
        return False

    # ── Acceptability ───────────────────────────────────────────

    def args_accept(self, accepting: Iterable[str], candidates: Iterable[str]) -> bool:
        """
        True if every candidate is acceptable w.r.t. `accepting`: each of
        its attackers is attacked by some member of `accepting`.
        """
        defeated = self._range_without_self(accepting)
        for candidate in candidates:
            if not self._attackers.get(candidate, set()) <= defeated:
                return False
        return True

    def arguments_accepted_by(self, arguments: Iterable[str]) -> set[str]:
        """The characteristic function F(S) = {a | S defends a}."""
        defeated = self._range_without_self(arguments)
        return {
            argument for argument in self._arguments
            if self._attackers[argument] <= defeated
        }

    def range_of(self, arguments: Iterable[str]) -> set[str]:
        """The set together with every argument it attacks."""
        members = set(arguments)
        return members | self._range_without_self(members)

    def _range_without_self(self, arguments: Iterable[str]) -> set[str]:
        defeated: set[str] = set()
        for argument in arguments:
            defeated |= self._targets.get(argument, set())
        return defeated

    # ── Semantics ───────────────────────────────────────────────

    @property
    def engine(self) -> ExtensionEngine:
        return self._engine

    def records_extensions_of(self, semantics: Semantics | str) -> bool:
        """True if the extension(s) of `semantics` are currently cached."""
        return self._cache.records(Semantics.parse(semantics))

    def records_defence_sets_around(self, *arguments: str) -> bool:
        return all(a in self._cache.defence_sets for a in arguments)

    def defence_sets_around(self, argument: str) -> set[frozenset[str]]:
        return self._engine.defence_sets_around(argument)

    def grounded_extension(self) -> frozenset[str]:
        return self._engine.grounded()

    def admissible_sets(self) -> set[frozenset[str]]:
        return self._engine.admissible()

    def admissible_arguments(self) -> set[str]:
        return self._engine.extensions_union(Semantics.ADMISSIBLE)

    def preferred_extensions(self) -> set[frozenset[str]]:
        return self._engine.preferred()

    def preferred_arguments(self) -> set[str]:
        return self._engine.extensions_union(Semantics.PREFERRED)

    def preferred_sceptical_extension(self) -> frozenset[str]:
        return self._engine.preferred_sceptical()

    def complete_extensions(self) -> set[frozenset[str]]:
        return self._engine.complete()

    def stable_extensions(self) -> set[frozenset[str]]:
        return self._engine.stable()

    def stable_arguments(self) -> set[str]:
        return self._engine.extensions_union(Semantics.STABLE)

    def semi_stable_extensions(self) -> set[frozenset[str]]:
        return self._engine.semi_stable()

    def semi_stable_arguments(self) -> set[str]:
        return self._engine.extensions_union(Semantics.SEMI_STABLE)

    def ideal_extension(self) -> frozenset[str]:
        return self._engine.ideal()

    def eager_extension(self) -> frozenset[str]:
        return self._engine.eager()

    def extensions_union(self, semantics: Semantics | str) -> set[str]:
        return self._engine.extensions_union(semantics)

    def extensions(self, semantics: Semantics | str):
        """Generic accessor: a frozenset for unique semantics, else a set of them."""
        return self._engine.extensions(semantics)

    # ── Membership checks ───────────────────────────────────────

    def admissible_sets_contain(self, *collections: Iterable[str]) -> bool:
        return self._engine.admissible_sets_contain(*collections)

    def preferred_extensions_contain(self, *collections: Iterable[str]) -> bool:
        return self._engine.preferred_extensions_contain(*collections)

    def complete_extensions_contain(self, *collections: Iterable[str]) -> bool:
        return self._engine.complete_extensions_contain(*collections)

    def stable_extensions_contain(self, *collections: Iterable[str]) -> bool:
        return self._engine.stable_extensions_contain(*collections)

    def semi_stable_extensions_contain(self, *collections: Iterable[str]) -> bool:
        return self._engine.semi_stable_extensions_contain(*collections)
