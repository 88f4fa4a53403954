"""
Step runner - the small slice of a durable workflow runtime Polaris needs.

A workflow is an async function that does its work through named steps:
- step.run(name, fn, *args) runs fn (sync or async) with retries and
  remembers the result for the rest of the run
- step.sleep(name, seconds) pauses between steps

Cancellation is cooperative. cancel() takes effect at the next step
boundary; a step already running is allowed to finish.
"""

import asyncio
import inspect
from typing import Any, Callable
from uuid import uuid4

from polaris.core.config import settings, get_logger
from polaris.core.exceptions import NonRetriableError, WorkflowCancelled

logger = get_logger("workflow.steps")


class StepRunner:
    """Runs the steps of one workflow invocation."""

    def __init__(self, run_id: str | None = None, retries: int | None = None):
        self.run_id = run_id or str(uuid4())
        self.retries = settings.step_retries if retries is None else retries
        self.trace: list[str] = []
        """Names of completed steps, in order."""

        self._results: dict[str, Any] = {}
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the run before its next step."""
        if not self._cancelled:
            logger.info(f"Cancellation requested for run {self.run_id}")
        self._cancelled = True

    def _check_cancelled(self, name: str) -> None:
        if self._cancelled:
            raise WorkflowCancelled(f"Run {self.run_id} cancelled before step '{name}'")

    async def run(self, name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Run a named step.

        A step that already completed in this run returns its stored result
        without calling fn again. Failures are retried up to `retries` times,
        except NonRetriableError which is raised immediately.
        """
        self._check_cancelled(name)

        if name in self._results:
            return self._results[name]

        attempt = 0
        while True:
            try:
                result = fn(*args, **kwargs)
                if inspect.isawaitable(result):
                    result = await result
                break
            except NonRetriableError:
                raise
            except Exception as e:
                if attempt >= self.retries:
                    logger.error(f"Step '{name}' failed after {attempt + 1} attempt(s): {e}")
                    raise
                attempt += 1
                logger.warning(f"Step '{name}' failed ({e}), retrying ({attempt}/{self.retries})")

        self._results[name] = result
        self.trace.append(name)
        logger.debug(f"Step '{name}' completed for run {self.run_id}")
        return result

    async def sleep(self, name: str, seconds: float) -> None:
        self._check_cancelled(name)
        if seconds > 0:
            await asyncio.sleep(seconds)
        self.trace.append(name)


class CancellationRegistry:
    """Maps a key (the message ID) to the runner processing it."""

    def __init__(self):
        self._runners: dict[str, StepRunner] = {}

    def register(self, key: str, runner: StepRunner) -> None:
        self._runners[key] = runner

    def unregister(self, key: str) -> None:
        self._runners.pop(key, None)

    def cancel(self, key: str) -> bool:
        """Cancel the run for `key`. False if nothing is running for it."""
        runner = self._runners.get(key)
        if runner is None:
            return False
        runner.cancel()
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._runners


# Global registry instance
cancellations = CancellationRegistry()
