"""
Random framework generator — test fixtures and benchmarks.

Bounds are validated by FrameworkBounds before any random choice.
Arguments are drawn without replacement from the pool; attacks are
drawn without replacement from every ordered pair of the chosen
arguments, self-attacks included.
"""

from __future__ import annotations

import logging
import random
from itertools import product
from typing import Iterable, Optional

from dungaf.models import FrameworkBounds

from .framework import ArgumentationFramework

logger = logging.getLogger("dungaf.argumentation.generator")


def random_framework(
    min_arguments: int,
    max_arguments: int,
    min_attacks: int,
    max_attacks: int,
    argument_pool: Iterable[str],
    seed: Optional[int] = None,
) -> ArgumentationFramework:
    """
    Build a random framework within the given bounds.

    Raises pydantic.ValidationError for infeasible bounds. The same seed
    and inputs always give the same framework.
    """
    bounds = FrameworkBounds(
        min_arguments=min_arguments,
        max_arguments=max_arguments,
        min_attacks=min_attacks,
        max_attacks=max_attacks,
        pool=sorted(set(argument_pool)),
    )
    rng = random.Random(seed)

    num_arguments = rng.randint(bounds.resolved_min_arguments,
                                bounds.resolved_max_arguments)
    arguments = rng.sample(bounds.pool, num_arguments)

    num_attacks = rng.randint(bounds.resolved_min_attacks,
                              bounds.resolved_max_attacks(num_arguments))
    pairs = list(product(sorted(arguments), repeat=2))
    attacks = rng.sample(pairs, num_attacks)

    logger.debug(
        f"Generated framework: {num_arguments} arguments, "
        f"{num_attacks} attacks (seed={seed})"
    )
    return ArgumentationFramework(arguments, attacks)
