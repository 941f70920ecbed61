"""Argumentation engine — Dung's abstract argumentation frameworks and their semantics."""
from .framework import ArgumentationFramework
from .engine import ExtensionEngine
from .defence import DefenceSetSearch
from .generator import random_framework
from .lattice import remove_non_maximal, remove_non_minimal
from .models import (
    Argument,
    Attack,
    ExtensionCache,
    MalformedAttackError,
    Semantics,
    UnknownSemanticsError,
    WorkBudgetExceededError,
)

__all__ = [
    "ArgumentationFramework",
    "ExtensionEngine",
    "DefenceSetSearch",
    "random_framework",
    "remove_non_maximal",
    "remove_non_minimal",
    "Argument",
    "Attack",
    "ExtensionCache",
    "MalformedAttackError",
    "Semantics",
    "UnknownSemanticsError",
    "WorkBudgetExceededError",
]
