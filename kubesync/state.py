"""Run-state arithmetic and small lookups used while syncing."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from kubesync.common import OperationPhase, ResultCode, SyncPhase
from kubesync.resources import ResourceKey

DELETE_PROPAGATION_FOREGROUND = "Foreground"
DELETE_PROPAGATION_BACKGROUND = "Background"
DELETE_PROPAGATION_ORPHAN = "Orphan"


class RunState(IntEnum):
    """Outcome of running a batch of tasks, ordered by severity."""

    SUCCESSFUL = 0
    PENDING = 1
    FAILED = 2


def combine_run_states(current: RunState, results: Iterable[RunState]) -> RunState:
    """Fold task outcomes into the current state.

    Failed is terminal, pending can only turn into failed, and successful
    moves to whichever of pending or failed is reported.
    """
    return RunState(max((current, *results)))


def resource_result_key(key: ResourceKey, phase: SyncPhase | str) -> str:
    return f"{key}:{phase}"


_OPERATION_PHASES = {
    ResultCode.SYNCED: OperationPhase.RUNNING,
    ResultCode.SYNC_FAILED: OperationPhase.FAILED,
    ResultCode.PRUNED: OperationPhase.SUCCEEDED,
    ResultCode.PRUNE_SKIPPED: OperationPhase.SUCCEEDED,
}


def operation_phase_for(code: ResultCode) -> OperationPhase:
    """The operation phase that follows from a result code."""
    return _OPERATION_PHASES[ResultCode(code)]


def delete_options(propagation_policy: str | None = None) -> dict[str, str]:
    """Delete options, propagating in the foreground unless told otherwise."""
    return {"propagationPolicy": propagation_policy or DELETE_PROPAGATION_FOREGROUND}