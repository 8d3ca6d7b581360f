"""Sync phases a resource or hook takes part in."""

from __future__ import annotations

from kubesync import hook
from kubesync.common import HookType, SyncPhase
from kubesync.resources import Unstructured

_PHASE_HOOK_TYPES = {
    HookType.PRE_SYNC: SyncPhase.PRE_SYNC,
    HookType.SYNC: SyncPhase.SYNC,
    HookType.POST_SYNC: SyncPhase.POST_SYNC,
    HookType.SYNC_FAIL: SyncPhase.SYNC_FAIL,
}


def sync_phases(obj: Unstructured) -> list[SyncPhase]:
    """The distinct phases of the object: none if skipped, Sync for plain resources."""
    if hook.skip(obj):
        return []
    if hook.is_hook(obj):
        phases = (_PHASE_HOOK_TYPES.get(hook_type) for hook_type in hook.types(obj))
        return list(dict.fromkeys(phase for phase in phases if phase is not None))
    return [SyncPhase.SYNC]