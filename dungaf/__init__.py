"""dungaf — Dung abstract argumentation frameworks with cached semantics."""
from .argumentation import (
    ArgumentationFramework,
    ExtensionEngine,
    MalformedAttackError,
    Semantics,
    UnknownSemanticsError,
    WorkBudgetExceededError,
    random_framework,
)
from .config import Settings, configure_logging, get_settings
from .models import ExtensionReport, FrameworkBounds

__version__ = "0.1.0"

__all__ = [
    "ArgumentationFramework",
    "ExtensionEngine",
    "MalformedAttackError",
    "Semantics",
    "UnknownSemanticsError",
    "WorkBudgetExceededError",
    "random_framework",
    "Settings",
    "configure_logging",
    "get_settings",
    "ExtensionReport",
    "FrameworkBounds",
]
