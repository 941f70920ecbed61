"""
models — Pydantic schemas at the library boundary

FrameworkBounds validates the random generator's inputs before any
random choice is made; ExtensionReport is the plain-data summary of one
semantics returned by ExtensionEngine.report().
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator

from dungaf.argumentation.models import Semantics


# ── Generator Models ─────────────────────────────────────────────

class FrameworkBounds(BaseModel):
    """
    Requested size bounds for a random framework.

    Infeasible bounds fail validation. Merely loose ones are clamped by
    the resolved_* properties: negative minima become 0, max_arguments
    is capped at the pool size and max_attacks at max_arguments².
    """
    min_arguments: int
    max_arguments: int = Field(..., ge=0)
    min_attacks: int
    max_attacks: int = Field(..., ge=0)
    pool: list[str]

    @model_validator(mode="after")
    def check_feasible(self) -> FrameworkBounds:
        pool_size = len(self.pool)
        if self.min_arguments > self.max_arguments:
            raise ValueError(
                f"min_arguments ({self.min_arguments}) exceeds "
                f"max_arguments ({self.max_arguments})"
            )
        if self.min_arguments > pool_size:
            raise ValueError(
                f"min_arguments ({self.min_arguments}) exceeds "
                f"the pool size ({pool_size})"
            )
        if self.min_attacks > self.max_attacks:
            raise ValueError(
                f"min_attacks ({self.min_attacks}) exceeds "
                f"max_attacks ({self.max_attacks})"
            )
        if self.min_attacks > pool_size ** 2:
            raise ValueError(
                f"min_attacks ({self.min_attacks}) exceeds the square of "
                f"the pool size ({pool_size ** 2})"
            )
        if self.min_attacks > self.max_arguments ** 2:
            raise ValueError(
                f"min_attacks ({self.min_attacks}) exceeds the square of "
                f"max_arguments ({self.max_arguments ** 2})"
            )
        return self

    @property
    def resolved_max_arguments(self) -> int:
        return min(self.max_arguments, len(self.pool))

    @property
    def resolved_min_arguments(self) -> int:
        # Enough arguments that min_attacks distinct pairs exist.
        attacks = self.resolved_min_attacks
        needed = math.isqrt(attacks - 1) + 1 if attacks else 0
        return max(self.min_arguments, needed, 0)

    @property
    def resolved_min_attacks(self) -> int:
        return max(self.min_attacks, 0)

    def resolved_max_attacks(self, num_arguments: int) -> int:
        return min(self.max_attacks, num_arguments ** 2)


# ── Result Models ────────────────────────────────────────────────

class ExtensionReport(BaseModel):
    semantics: Semantics
    extensions: list[list[str]]
    accepted_by_all: list[str] = Field(default_factory=list)
    accepted_by_some: list[str] = Field(default_factory=list)
    from_cache: bool = False
    computation_ms: float = 0.0
    framework_summary: dict = Field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.extensions)

    @property
    def is_unique(self) -> bool:
        return self.semantics.is_unique
