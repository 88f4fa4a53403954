"""
Workflow - step runner and the message processing flow.
"""

from polaris.workflow.process_message import (
    build_system_prompt,
    cancel_message,
    process_message,
    run_process_message,
)
from polaris.workflow.steps import CancellationRegistry, StepRunner, cancellations

__all__ = [
    "build_system_prompt",
    "cancel_message",
    "process_message",
    "run_process_message",
    "CancellationRegistry",
    "StepRunner",
    "cancellations",
]
