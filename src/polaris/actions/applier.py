"""
Action applier - execute parsed actions against a document store.

Every action is applied on its own: a failure is logged, recorded in the
report and skipped, and the remaining actions still run. Nothing already
applied is rolled back. Creates run first, then updates, each in source order.
"""

from dataclasses import dataclass, field
from typing import Literal

from polaris.actions.parser import parse_actions
from polaris.actions.resolver import PathResolver, ResolutionCache, split_path
from polaris.core.config import get_logger
from polaris.core.exceptions import MutationError
from polaris.core.types import CreateFileAction, ParsedActions, UpdateFileAction
from polaris.storage.base import DocumentStore

logger = get_logger("actions.applier")


# ============================================
# Result Types
# ============================================

@dataclass
class ActionResult:
    """Outcome of a single action."""

    kind: Literal["create_file", "update_file"]

    target: str
    """The path (creates) or file ID (updates) from the tag."""

    status: Literal["applied", "failed"]

    node_id: str | None = None
    """ID of the created or updated file."""

    error: str | None = None
    """Error message if the action failed."""

    @property
    def ok(self) -> bool:
        return self.status == "applied"


@dataclass
class ApplyReport:
    """Results of one apply pass, in the order actions were applied."""

    results: list[ActionResult] = field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(1 for r in self.results if r.ok and r.kind == "create_file")

    @property
    def updated(self) -> int:
        return sum(1 for r in self.results if r.ok and r.kind == "update_file")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def failures(self) -> list[ActionResult]:
        return [r for r in self.results if not r.ok]

    @property
    def success(self) -> bool:
        return self.failed == 0

    def summary(self) -> dict:
        return {
            "created": self.created,
            "updated": self.updated,
            "failed": self.failed,
            "errors": [{"target": r.target, "error": r.error} for r in self.failures],
        }


# ============================================
# Applier
# ============================================

class ActionApplier:
    """Applies one pass of actions to a project."""

    def __init__(
        self,
        store: DocumentStore,
        project_id: str,
        cache: ResolutionCache | None = None,
    ):
        self.store = store
        self.project_id = project_id
        self.resolver = PathResolver(store, project_id, cache)

    def apply(self, actions: ParsedActions) -> ApplyReport:
        """Apply all creates, then all updates. Never raises for a single action."""
        report = ApplyReport()

        for action in actions.creates:
            report.results.append(self.apply_create(action))

        for action in actions.updates:
            report.results.append(self.apply_update(action))

        logger.info(
            f"Applied actions for project {self.project_id}: "
            f"{report.created} created, {report.updated} updated, {report.failed} failed"
        )
        return report

    def apply_create(self, action: CreateFileAction) -> ActionResult:
        try:
            _, name = split_path(action.path)
            if not name.strip():
                raise MutationError(f"No file name in path: '{action.path}'")

            parent_id = self.resolver.resolve_parent(action.path)

            file_id = self.store.create_file(
                self.project_id,
                parent_id,
                name,
                action.content,
            )
        except Exception as e:
            logger.error(f"Failed to create file {action.path}: {e}")
            return ActionResult(kind=action.kind, target=action.path, status="failed", error=str(e))

        logger.debug(f"Created file {action.path} ({file_id})")
        return ActionResult(kind=action.kind, target=action.path, status="applied", node_id=file_id)

    def apply_update(self, action: UpdateFileAction) -> ActionResult:
        try:
            if not self.store.update_file(action.file_id, action.content):
                raise MutationError(f"File not found: {action.file_id}")
        except Exception as e:
            logger.error(f"Failed to update file {action.file_id}: {e}")
            return ActionResult(kind=action.kind, target=action.file_id, status="failed", error=str(e))

        logger.debug(f"Updated file {action.file_id}")
        return ActionResult(kind=action.kind, target=action.file_id, status="applied", node_id=action.file_id)


def apply_actions(store: DocumentStore, project_id: str, actions: ParsedActions) -> ApplyReport:
    """Apply parsed actions with a fresh resolution cache."""
    return ActionApplier(store, project_id).apply(actions)


def apply_text(store: DocumentStore, project_id: str, text: str | None) -> ApplyReport:
    """Parse a model response and apply every action found in it."""
    actions = parse_actions(text)
    if actions.is_empty:
        logger.debug("No actions found in response")
    return apply_actions(store, project_id, actions)
