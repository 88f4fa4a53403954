"""
Action engine - parse file actions out of model text and apply them.

parse_actions → PathResolver (creates) → ActionApplier → ApplyReport
"""

from polaris.actions.applier import (
    ActionApplier,
    ActionResult,
    ApplyReport,
    apply_actions,
    apply_text,
)
from polaris.actions.parser import parse_actions
from polaris.actions.resolver import ROOT, PathResolver, ResolutionCache, split_path

__all__ = [
    "ActionApplier",
    "ActionResult",
    "ApplyReport",
    "apply_actions",
    "apply_text",
    "parse_actions",
    "ROOT",
    "PathResolver",
    "ResolutionCache",
    "split_path",
]
