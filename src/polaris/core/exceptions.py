"""Exceptions for Polaris operations."""


class PolarisError(Exception):
    """Base exception for all Polaris operations."""


# ============================================
# Storage
# ============================================

class StoreError(PolarisError):
    """Raised when a document store call fails."""


class InvalidNameError(StoreError):
    """Raised when a node name is blank or contains a path separator."""


class NodeNotFoundError(StoreError):
    """Raised when a referenced project or parent folder does not exist."""


# ============================================
# Actions
# ============================================

class ActionError(PolarisError):
    """Base exception for a single action that could not be applied."""


class ResolutionError(ActionError):
    """Raised when a folder along a create path cannot be found or created."""

    def __init__(self, path: str, segment: str, cause: Exception):
        self.path = path
        self.segment = segment
        self.cause = cause
        super().__init__(f"Could not resolve folder '{segment}' in '{path}': {cause}")


class MutationError(ActionError):
    """Raised when a create-file or update-file call fails."""


# ============================================
# Workflow
# ============================================

class WorkflowError(PolarisError):
    """Base exception for workflow runs."""


class NonRetriableError(WorkflowError):
    """Raised when a step fails in a way that retrying cannot fix."""


class ConfigurationError(NonRetriableError):
    """Raised when a required credential or setting is missing."""


class WorkflowCancelled(WorkflowError):
    """Raised at a step boundary after the run has been cancelled."""
