"""Bookkeeping of per-resource sync results and the messages built from them."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from kubesync.common import (
    ANNOTATION_SYNC_OPTIONS,
    SYNC_OPTION_DISABLE_PRUNE,
    HookType,
    OperationPhase,
    ResourceSyncResult,
    ResultCode,
    SyncPhase,
)
from kubesync.resources import ResourceKey, Unstructured, has_annotation_option
from kubesync.state import resource_result_key


class SyncResults:
    """Results of a sync operation, one per resource and sync phase.

    Each result remembers the order in which it was first recorded.
    """

    def __init__(self) -> None:
        self._results: dict[str, ResourceSyncResult] = {}
        self._lock = threading.Lock()

    def record(
        self,
        key: ResourceKey,
        phase: SyncPhase,
        version: str = "",
        status: ResultCode | None = None,
        message: str = "",
        hook_type: HookType | None = None,
        hook_phase: OperationPhase | None = None,
    ) -> ResourceSyncResult:
        """Add or update the result for key in phase and return it.

        An empty message leaves an earlier message in place.
        """
        result_key = resource_result_key(key, phase)
        with self._lock:
            existing = self._results.get(result_key)
            if existing is not None:
                existing.status = status
                existing.hook_phase = hook_phase
                if message:
                    existing.message = message
                return existing
            result = ResourceSyncResult(
                resource_key=key,
                version=version,
                order=len(self._results) + 1,
                status=status,
                message=message,
                hook_type=hook_type,
                hook_phase=hook_phase,
                sync_phase=phase,
            )
            self._results[result_key] = result
            return result

    def get(self, key: ResourceKey, phase: SyncPhase) -> ResourceSyncResult | None:
        """The result for key in phase, or None if none was recorded."""
        with self._lock:
            return self._results.get(resource_result_key(key, phase))

    def ordered(self) -> list[ResourceSyncResult]:
        """All results in the order they were first recorded."""
        with self._lock:
            return sorted(self._results.values(), key=lambda r: r.order)

    def __len__(self) -> int:
        return len(self._results)


def running_phase_message(
    is_hook: bool,
    group: str,
    kind: str,
    name: str,
    remaining: int = 0,
    is_pending_deletion: bool = False,
) -> str:
    """Message describing what a running operation waits for.

    The first task is named; ``remaining`` counts the tasks after it.
    """
    if is_pending_deletion:
        waiting_for = "deletion of"
    elif is_hook:
        waiting_for = "completion of hook"
    else:
        waiting_for = "healthy state of"
    more = "hooks" if is_hook else "resources"
    message = f"waiting for {waiting_for} {group}/{kind}/{name}"
    if remaining > 0:
        message = f"{message} and {remaining} more {more}"
    return message


def _unix_seconds(started_at: datetime | int | float) -> int:
    if isinstance(started_at, datetime):
        if started_at.tzinfo is None:
            started_at = started_at.replace(tzinfo=timezone.utc)
        return int(started_at.timestamp())
    return int(started_at)


def hook_name(
    generate_name: str,
    revision: str,
    phase: SyncPhase | str,
    started_at: datetime | int | float,
) -> str:
    """Deterministic name for a hook that only carries a generate-name prefix.

    Revisions of eight or more characters are cut to their first seven.
    """
    short_revision = revision[:7] if len(revision) >= 8 else revision
    phase_text = phase.value if isinstance(phase, SyncPhase) else str(phase)
    postfix = f"{short_revision}-{phase_text}-{_unix_seconds(started_at)}".lower()
    return f"{generate_name}{postfix}"


def prune_outcome(
    live_obj: Unstructured, prune: bool, dry_run: bool
) -> tuple[ResultCode, str, bool]:
    """Decide how to prune a live object.

    Returns the result code, the message and whether the object must
    actually be deleted; objects already marked for deletion are not.
    """
    if not prune:
        return ResultCode.PRUNE_SKIPPED, "ignored (requires pruning)", False
    if has_annotation_option(live_obj, ANNOTATION_SYNC_OPTIONS, SYNC_OPTION_DISABLE_PRUNE):
        return ResultCode.PRUNE_SKIPPED, "ignored (no prune)", False
    if dry_run:
        return ResultCode.PRUNED, "pruned (dry run)", False
    deletion_timestamp = live_obj.nested("metadata", "deletionTimestamp")
    return ResultCode.PRUNED, "pruned", not deletion_timestamp