"""Ordered execution of remote steps with declared compensations.

A lifecycle flow spans two stores with no shared transaction. Each mutating
step is run through a ``StepSequence`` together with the action that undoes
it. When a later step fails, completed steps are undone in reverse order and
the failure is reported as:

- ``UpstreamError`` when every completed step was undone, or
- ``PartialFailureError`` when a completed step has no compensation or its
  compensation failed, so state was left behind.

Read-only lookups are not steps; flows run them directly.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from workforce.application.observability import LifecycleProbe
from workforce.domain.exceptions import PartialFailureError, UpstreamError
from workforce.ports.exceptions import IdentityStoreError, RelationalStoreError

T = TypeVar("T")

# Failures of the stores themselves. Anything else is a programming error and
# is re-raised unchanged once completed steps have been unwound.
STORE_ERRORS = (IdentityStoreError, RelationalStoreError)


@dataclass(frozen=True)
class _CompletedStep(Generic[T]):
    name: str
    result: T
    compensate: Callable[[T], Awaitable[Any]] | None
    principal_id: str | None


class StepSequence:
    """Runs the mutating steps of one flow invocation in order."""

    def __init__(self, flow: str, probe: LifecycleProbe):
        self._flow = flow
        self._probe = probe
        self._completed: list[_CompletedStep[Any]] = []

    @property
    def completed_steps(self) -> tuple[str, ...]:
        return tuple(step.name for step in self._completed)

    async def run(
        self,
        name: str,
        action: Callable[[], Awaitable[T]],
        *,
        compensate: Callable[[T], Awaitable[Any]] | None = None,
        principal_of: Callable[[T], str | None] | None = None,
    ) -> T:
        """Run one step, unwinding earlier steps if it fails.

        Args:
            name: Step name used in logs and error reports
            action: Zero-argument coroutine function performing the step
            compensate: Undoes the step; receives the step's result. A step
                without compensation is irreversible.
            principal_of: Extracts the principal a step touched from its
                result, so partial failures can name it

        Returns:
            The action's result

        Raises:
            UpstreamError: The step failed and all earlier steps were undone
            PartialFailureError: The step failed and earlier state remains
        """
        try:
            result = await action()
        except Exception as e:
            self._probe.step_failed(flow=self._flow, step=name, error=e)
            await self._unwind(failed_step=name, error=e)
            raise

        self._completed.append(
            _CompletedStep(
                name=name,
                result=result,
                compensate=compensate,
                principal_id=principal_of(result) if principal_of else None,
            )
        )
        return result

    async def _unwind(self, failed_step: str, error: Exception) -> None:
        """Undo completed steps newest first, then raise the flow's error.

        Returns only when ``error`` is not a store error and everything was
        undone, letting the caller re-raise it unchanged.
        """
        unreverted: list[_CompletedStep[Any]] = []
        compensation_error: Exception | None = None

        for step in reversed(self._completed):
            if step.compensate is None:
                unreverted.append(step)
                continue
            try:
                await step.compensate(step.result)
            except Exception as e:
                principal_ids = (step.principal_id,) if step.principal_id else ()
                self._probe.compensation_failed(
                    flow=self._flow,
                    step=step.name,
                    principal_ids=principal_ids,
                    error=e,
                )
                unreverted.append(step)
                compensation_error = compensation_error or e
            else:
                self._probe.step_compensated(flow=self._flow, step=step.name)

        self._completed.clear()

        if unreverted:
            names = [step.name for step in unreverted]
            raise PartialFailureError(
                f"{failed_step} failed ({error}); "
                f"could not undo: {', '.join(names)}",
                step=failed_step,
                principal_ids=[s.principal_id for s in unreverted if s.principal_id],
                unreverted_steps=names,
            ) from (compensation_error or error)

        if isinstance(error, STORE_ERRORS):
            raise UpstreamError(str(error), step=failed_step) from error
