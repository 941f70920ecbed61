"""
Extension Engine — Dung semantics over defence sets

Computes, for one framework, the extensions prescribed by:
- Grounded (unique, most sceptical; least fixpoint of F)
- Admissible sets
- Preferred (maximal admissible; credulous and sceptical)
- Complete (admissible fixpoints of F)
- Stable (conflict-free, attacks every outsider)
- Semi-stable (preferred with maximal range)
- Ideal (largest admissible subset of every preferred extension)
- Eager (largest admissible subset of every semi-stable extension)

Everything except grounded is built from the defence sets around each
argument (see defence.py). Results are stored in the framework's
ExtensionCache and trusted until the framework next changes.

Preferred extensions are found without enumerating subsets: each
admissible argument gathers every admissible argument it can share an
admissible set with. Such a candidate is either a preferred extension
or a non-conflict-free superset of some. In the latter case, removing
a minimal hitting set of its conflicting pairs and stripping whatever
is left undefended yields the preferred extensions inside it.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Iterable

from dungaf.models import ExtensionReport

from .defence import DefenceSetSearch
from .lattice import remove_non_maximal, remove_non_minimal
from .models import (
    ExtensionCache,
    Semantics,
    UnknownSemanticsError,
    WorkBudgetExceededError,
)

if TYPE_CHECKING:
    from .framework import ArgumentationFramework

logger = logging.getLogger("dungaf.argumentation")

Extensions = frozenset[frozenset[str]]

# Unions of admissible sets and complete extensions equal that of the
# preferred extensions, which are cheaper to obtain.
_UNION_VIA_PREFERRED = frozenset({
    Semantics.ADMISSIBLE,
    Semantics.COMPLETE,
    Semantics.PREFERRED,
})


def _intersection(extensions: Iterable[frozenset[str]]) -> frozenset[str]:
    extensions = list(extensions)
    if not extensions:
        return frozenset()
    return frozenset.intersection(*extensions)


def _ordered(extensions: Iterable[frozenset[str]]) -> list[frozenset[str]]:
    """Largest first, then lexicographic, so iteration is reproducible."""
    return sorted(extensions, key=lambda s: (-len(s), sorted(map(str, s))))


class ExtensionEngine:
    """
    Computes and caches the extensions of one framework.

    Follows Dung's characteristic function F:
        F(S) = { a ∈ Args | S defends a }

    Public accessors return fresh copies; frozensets are shared since
    they cannot be mutated.
    """

    def __init__(self, af: ArgumentationFramework, cache: ExtensionCache):
        self.af = af
        self._cache = cache
        self._search = DefenceSetSearch(af)

    # ── Public accessors ────────────────────────────────────────

    def grounded(self) -> frozenset[str]:
        return self._cached(Semantics.GROUNDED, self._compute_grounded)

    def admissible(self) -> set[frozenset[str]]:
        return set(self._admissible_sets())

    def preferred(self) -> set[frozenset[str]]:
        return set(self._preferred_sets())

    def preferred_sceptical(self) -> frozenset[str]:
        return self._cached(
            Semantics.PREFERRED_SCEPTICAL,
            lambda: _intersection(self._preferred_sets()),
        )

    def complete(self) -> set[frozenset[str]]:
        return set(self._cached(Semantics.COMPLETE, self._compute_complete))

    def stable(self) -> set[frozenset[str]]:
        return set(self._stable_sets())

    def semi_stable(self) -> set[frozenset[str]]:
        return set(self._semi_stable_sets())

    def ideal(self) -> frozenset[str]:
        return self._cached(
            Semantics.IDEAL,
            lambda: self._admissible_core(self._preferred_sets()),
        )

    def eager(self) -> frozenset[str]:
        return self._cached(
            Semantics.EAGER,
            lambda: self._admissible_core(self._semi_stable_sets()),
        )

    def defence_sets_around(self, argument: str) -> set[frozenset[str]]:
        return set(self._defence_sets(argument))

    def extensions(self, semantics: Semantics | str):
        """Generic accessor for any implemented semantics."""
        semantics = Semantics.parse(semantics)
        accessors: dict[Semantics, Callable] = {
            Semantics.ADMISSIBLE: self.admissible,
            Semantics.COMPLETE: self.complete,
            Semantics.EAGER: self.eager,
            Semantics.GROUNDED: self.grounded,
            Semantics.IDEAL: self.ideal,
            Semantics.PREFERRED: self.preferred,
            Semantics.PREFERRED_SCEPTICAL: self.preferred_sceptical,
            Semantics.SEMI_STABLE: self.semi_stable,
            Semantics.STABLE: self.stable,
        }
        return accessors[semantics]()

    def extensions_union(self, semantics: Semantics | str) -> set[str]:
        """
        Union of the extensions of a multiple-extension semantics.

        Raises UnknownSemanticsError for unknown names and for
        unique-extension semantics, before computing anything.
        """
        semantics = Semantics.parse(semantics)
        if semantics.is_unique:
            raise UnknownSemanticsError(
                f"'{semantics.value}' is not a multiple-extension semantics"
            )
        if semantics in _UNION_VIA_PREFERRED:
            source = self._preferred_sets()
        elif semantics is Semantics.STABLE:
            source = self._stable_sets()
        else:
            source = self._semi_stable_sets()
        return set().union(*source)

    # ── Cache plumbing ──────────────────────────────────────────

    def _cached(self, semantics: Semantics, compute: Callable):
        value = self._cache.get(semantics)
        if value is not None:
            return value

        start = time.perf_counter()
        value = compute()
        elapsed = (time.perf_counter() - start) * 1000
        self._cache.put(semantics, value)

        size = len(value)
        unit = "arguments" if semantics.is_unique else "extensions"
        logger.debug(
            f"Computed {semantics.value}: {size} {unit} in {elapsed:.3f}ms"
        )
        return value

    def _defence_sets(self, argument: str) -> Extensions:
        if argument not in self.af:
            return frozenset()
        found = self._cache.defence_sets.get(argument)
        if found is None:
            found = self._search.search(argument)
            self._cache.defence_sets[argument] = found
        return found

    def _admissible_sets(self) -> Extensions:
        return self._cached(Semantics.ADMISSIBLE, self._compute_admissible)

    def _preferred_sets(self) -> Extensions:
        return self._cached(Semantics.PREFERRED, self._compute_preferred)

    def _stable_sets(self) -> Extensions:
        return self._cached(Semantics.STABLE, self._compute_stable)

    def _semi_stable_sets(self) -> Extensions:
        return self._cached(Semantics.SEMI_STABLE, self._compute_semi_stable)

    # ── Grounded ────────────────────────────────────────────────

    def _compute_grounded(self) -> frozenset[str]:
        """
        Iterative fixpoint:
            pool = arguments neither accepted nor defeated
            accept every pool argument with no attacker in the pool
            stop when a pass accepts nothing
        """
        af = self.af
        accepted: set[str] = set()
        defeated: set[str] = set()

        while True:
            undecided = af.arguments - accepted - defeated
            newly_accepted = {
                arg for arg in undecided
                if af.attackers_of(arg).isdisjoint(undecided)
            }
            if not newly_accepted:
                break
            accepted |= newly_accepted
            for arg in newly_accepted:
                defeated |= af.targets_of(arg)

        return frozenset(accepted)

    # ── Admissible ──────────────────────────────────────────────

    def _compute_admissible(self) -> Extensions:
        """
        ∅, every defence set and every preferred extension are admissible.
        The sets in between are found top-down: drop one argument from a
        known admissible set, strip what is left undefended, and repeat
        on every set not seen before.
        """
        found: set[frozenset[str]] = {frozenset()}
        for argument in self.af.arguments:
            found |= self._defence_sets(argument)

        preferred = self._preferred_sets()
        found |= preferred

        frontier = set(preferred)
        while frontier:
            discovered: set[frozenset[str]] = set()
            for admissible in frontier:
                for argument in admissible:
                    candidate = self._strip_undefended(admissible - {argument})
                    if candidate not in found:
                        found.add(candidate)
                        discovered.add(candidate)
            frontier = discovered

        return frozenset(found)

    def _strip_undefended(
        self,
        candidate: Iterable[str],
        confirmed: set[frozenset[str]] | None = None,
    ) -> frozenset[str] | None:
        """
        Repeatedly remove members none of whose defence sets fits inside
        the candidate, until every remaining member has one.

        When `confirmed` is given, return None as soon as the shrinking
        candidate fits inside one of those sets.
        """
        current = frozenset(candidate)
        while True:
            supported = frozenset(
                arg for arg in current
                if any(d <= current for d in self._defence_sets(arg))
            )
            if supported == current:
                return current
            current = supported
            if confirmed and any(current <= c for c in confirmed):
                return None

    # ── Preferred ───────────────────────────────────────────────

    def _compute_preferred(self) -> Extensions:
        af = self.af
        admissible_args = sorted(
            arg for arg in af.arguments if self._defence_sets(arg)
        )

        candidates = {
            frozenset(
                other for other in admissible_args
                if self._share_admissible_set(arg, other)
            )
            for arg in admissible_args
        }

        confirmed: set[frozenset[str]] = set()
        for candidate in _ordered(candidates):
            pairs = self._conflicting_pairs(candidate)
            for removal in self._minimal_removal_sets(pairs):
                revised = self._strip_undefended(candidate - removal, confirmed)
                if revised is not None:
                    confirmed.add(revised)
            # An admissible set found before its preferred superset may linger.
            confirmed = remove_non_maximal(confirmed)

        if not confirmed:
            return frozenset({frozenset()})
        return frozenset(confirmed)

    def _share_admissible_set(self, first: str, second: str) -> bool:
        """True if some defence sets of the two arguments unite without conflict."""
        af = self.af
        if not af.contains_no_conflict_among((first, second)):
            return False
        return any(
            af.contains_no_conflict_among(d0 | d1)
            for d0 in self._defence_sets(first)
            for d1 in self._defence_sets(second)
        )

    def _conflicting_pairs(self, candidate: frozenset[str]) -> set[frozenset[str]]:
        af = self.af
        return {
            frozenset((arg, attacker))
            for arg in candidate
            for attacker in af.attackers_of(arg) & candidate
        }

    def _minimal_removal_sets(self, pairs: set[frozenset[str]]) -> set[frozenset[str]]:
        """
        Minimal members of the cartesian product of `pairs` (one argument
        chosen per pair), pruned to minimal members after every pair.

        Raises WorkBudgetExceededError once more live removal sets exist
        than the configured budget allows.
        """
        budget = self.af.settings.removal_set_budget
        removals: set[frozenset[str]] = {frozenset()}

        for pair in sorted(pairs, key=lambda p: sorted(map(str, p))):
            extended: set[frozenset[str]] = set()
            for removal in removals:
                if removal & pair:
                    extended.add(removal)
                else:
                    extended.update(removal | {arg} for arg in pair)
            removals = remove_non_minimal(extended)

            if len(removals) > budget:
                logger.warning(
                    f"Removal-set budget exceeded: {len(removals)} > {budget} "
                    f"({len(pairs)} conflicting pairs)"
                )
                raise WorkBudgetExceededError(
                    f"preferred-extension search needs more than {budget} "
                    f"removal sets for {len(pairs)} conflicting pairs",
                    budget=budget,
                    reached=len(removals),
                )

        return removals

    # ── Complete / stable / semi-stable ─────────────────────────

    def _compute_complete(self) -> Extensions:
        preferred = self._preferred_sets()
        complete = set(preferred)
        for admissible in self._admissible_sets() - preferred:
            if self.af.arguments_accepted_by(admissible) == admissible:
                complete.add(admissible)
        return frozenset(complete)

    def _is_stable(self, extension: frozenset[str]) -> bool:
        """Conflict-free extension attacking every argument outside it."""
        unattacked = self.af.arguments
        for arg in extension:
            unattacked -= self.af.targets_of(arg)
        return unattacked == extension

    def _compute_stable(self) -> Extensions:
        return frozenset(p for p in self._preferred_sets() if self._is_stable(p))

    def _compute_semi_stable(self) -> Extensions:
        stable = self._stable_sets()
        if stable:
            return stable

        ranges = {p: frozenset(self.af.range_of(p)) for p in self._preferred_sets()}
        maximal = remove_non_maximal(ranges.values())
        return frozenset(p for p, r in ranges.items() if r in maximal)

    # ── Ideal / eager ───────────────────────────────────────────

    def _admissible_core(self, extensions: Iterable[frozenset[str]]) -> frozenset[str]:
        """
        Intersection of `extensions`, shrunk by repeatedly dropping members
        not acceptable w.r.t. what remains, until it is admissible.
        """
        core = _intersection(extensions)
        while True:
            kept = frozenset(arg for arg in core if self.af.args_accept(core, (arg,)))
            if kept == core:
                return core
            core = kept

    # ── Membership checks ───────────────────────────────────────

    def admissible_sets_contain(self, *collections: Iterable[str]) -> bool:
        """Checks admissibility directly, without computing all admissible sets."""
        for collection in collections:
            members = set(collection)
            if not self.af.has_as_conflict_free_set(members):
                return False
            if not self.af.args_accept(members, members):
                return False
        return True

    def preferred_extensions_contain(self, *collections: Iterable[str]) -> bool:
        """
        Every preferred extension is a union of defence sets, so an
        admissible set is preferred iff no defence set it lacks can be
        added to it without conflict.
        """
        cached = self._cache.preferred
        for collection in collections:
            members = frozenset(collection)
            if cached is not None:
                if members not in cached:
                    return False
                continue
            if not self.admissible_sets_contain(members):
                return False
            for arg in self.af.arguments:
                for defence in self._defence_sets(arg):
                    if defence <= members:
                        continue
                    if self.af.contains_no_conflict_among(members | defence):
                        return False
        return True

    def complete_extensions_contain(self, *collections: Iterable[str]) -> bool:
        cached = self._cache.complete
        for collection in collections:
            members = frozenset(collection)
            if cached is not None:
                if members not in cached:
                    return False
                continue
            if not self.af.has_as_conflict_free_set(members):
                return False
            if self.af.arguments_accepted_by(members) != members:
                return False
        return True

    def stable_extensions_contain(self, *collections: Iterable[str]) -> bool:
        cached = self._cache.stable
        for collection in collections:
            members = frozenset(collection)
            if cached is not None:
                if members not in cached:
                    return False
                continue
            if not self.af.has_as_conflict_free_set(members):
                return False
            if not self._is_stable(members):
                return False
        return True

    def semi_stable_extensions_contain(self, *collections: Iterable[str]) -> bool:
        """Computes the preferred and stable extensions if not yet cached."""
        cached = self._cache.semi_stable
        for collection in collections:
            members = frozenset(collection)
            if cached is not None:
                if members not in cached:
                    return False
                continue

            stable = self._stable_sets()
            if stable:
                if members not in stable:
                    return False
                continue

            if not self.preferred_extensions_contain(members):
                return False
            own_range = self.af.range_of(members)
            for extension in self._preferred_sets():
                if own_range < self.af.range_of(extension):
                    return False
        return True

    # ── Reporting ───────────────────────────────────────────────

    def report(self, semantics: Semantics | str = Semantics.GROUNDED) -> ExtensionReport:
        """
        Summarise one semantics for callers that want plain data.

        Records whether the answer was already cached and how long the
        call took.
        """
        semantics = Semantics.parse(semantics)
        from_cache = self._cache.records(semantics)

        start = time.perf_counter()
        result = self.extensions(semantics)
        elapsed = (time.perf_counter() - start) * 1000

        extensions = [result] if semantics.is_unique else _ordered(result)
        return ExtensionReport(
            semantics=semantics,
            extensions=[sorted(e) for e in extensions],
            accepted_by_all=sorted(_intersection(extensions)),
            accepted_by_some=sorted(set().union(*extensions)),
            from_cache=from_cache,
            computation_ms=round(elapsed, 3),
            framework_summary=self.af.to_dict()["stats"],
        )
