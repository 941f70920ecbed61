"""
Defence-set search — minimal admissible sets around one argument.

A defence set around argument a is a set S such that:
    1. a ∈ S
    2. S is admissible (conflict-free and defends each member)
    3. no strict subset of S satisfies 1 and 2

The search is a two-ply adversarial game played over the attack graph,
after Vreeswijk (2006), "An algorithm to compute minimally grounded and
admissible defence sets in argument systems":

    proponent ply: the argument joins every candidate solution; each of
                  its attackers must then be answered
    opponent ply:  an attacker not yet answered by a candidate; some
                  counter-attacker compatible with the candidate must
                  be proposed in turn

Candidate solutions are conflict-free sets built by addition from ∅.
Intermediate results may include non-admissible sets or supersets of
defence sets; only the top-level proponent ply returns defence sets.

Every proponent ply adds an argument not yet in any of its candidates,
so recursion depth never exceeds 2·|Args| + 1.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .lattice import remove_non_minimal

if TYPE_CHECKING:
    from .framework import ArgumentationFramework

logger = logging.getLogger("dungaf.argumentation.defence")

CandidateSolutions = set[frozenset[str]]


class DefenceSetSearch:
    """Computes the defence sets around arguments of one framework."""

    def __init__(self, af: ArgumentationFramework):
        self.af = af

    def search(self, argument: str) -> frozenset[frozenset[str]]:
        """
        Return the defence sets around `argument`.

        An argument absent from the framework has none.
        """
        if argument not in self.af:
            return frozenset()

        result = self._propose(argument, {frozenset()})
        logger.debug(
            f"Defence sets around {argument!r}: {len(result)} found"
        )
        return frozenset(result)

    # ── Proponent ply ───────────────────────────────────────────

    def _propose(self, argument: str,
                 candidates: CandidateSolutions) -> CandidateSolutions:
        attackers = self.af.attackers_of(argument)

        if argument in attackers:
            # A self-attacker belongs to no admissible set.
            return set()

        candidates = {c | {argument} for c in candidates}

        for attacker in attackers:
            if not candidates:
                break
            counters = self.af.attackers_of(attacker)

            already_defended: CandidateSolutions = set()
            undefended: CandidateSolutions = set()
            for candidate in candidates:
                if counters & candidate:
                    already_defended.add(candidate)
                else:
                    undefended.add(candidate)

            candidates = self._oppose(attacker, undefended) | already_defended
            if not candidates:
                break
            candidates = remove_non_minimal(candidates)

        return candidates

    # ── Opponent ply ────────────────────────────────────────────

    def _oppose(self, attacker: str,
                candidates: CandidateSolutions) -> CandidateSolutions:
        accumulated: CandidateSolutions = set()
        if not candidates:
            return accumulated

        for counter in self.af.attackers_of(attacker):
            compatible = {
                c for c in candidates
                if not self.af.is_in_conflict_with_any_of(c, counter)
            }
            if not compatible:
                continue
            # Defeating the attacker once is enough, so results accumulate.
            accumulated |= self._propose(counter, compatible)
            accumulated = remove_non_minimal(accumulated)

        return accumulated
