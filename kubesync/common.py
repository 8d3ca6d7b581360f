"""Shared sync vocabulary: phases, result codes, hook types and results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kubesync.resources import ResourceKey

ANNOTATION_SYNC_OPTIONS = "argocd.argoproj.io/sync-options"
ANNOTATION_SYNC_WAVE = "argocd.argoproj.io/sync-wave"
ANNOTATION_KEY_HOOK = "argocd.argoproj.io/hook"
ANNOTATION_KEY_HOOK_DELETE_POLICY = "argocd.argoproj.io/hook-delete-policy"

SYNC_OPTION_SKIP_DRY_RUN_ON_MISSING_RESOURCE = "SkipDryRunOnMissingResource=true"
SYNC_OPTION_DISABLE_PRUNE = "Prune=false"
SYNC_OPTIONS_DISABLE_VALIDATION = "Validate=false"
SYNC_OPTION_PRUNE_LAST = "PruneLast=true"
SYNC_OPTION_REPLACE = "Replace=true"


class _StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class SyncPhase(_StrEnum):
    PRE_SYNC = "PreSync"
    SYNC = "Sync"
    POST_SYNC = "PostSync"
    SYNC_FAIL = "SyncFail"


class OperationPhase(_StrEnum):
    RUNNING = "Running"
    TERMINATING = "Terminating"
    FAILED = "Failed"
    ERROR = "Error"
    SUCCEEDED = "Succeeded"

    def completed(self) -> bool:
        return self in (OperationPhase.FAILED, OperationPhase.ERROR, OperationPhase.SUCCEEDED)

    def running(self) -> bool:
        return self is OperationPhase.RUNNING

    def successful(self) -> bool:
        return self is OperationPhase.SUCCEEDED

    def failed(self) -> bool:
        return self is OperationPhase.FAILED


class ResultCode(_StrEnum):
    SYNCED = "Synced"
    SYNC_FAILED = "SyncFailed"
    PRUNED = "Pruned"
    PRUNE_SKIPPED = "PruneSkipped"


class HookType(_StrEnum):
    PRE_SYNC = "PreSync"
    SYNC = "Sync"
    POST_SYNC = "PostSync"
    SKIP = "Skip"
    SYNC_FAIL = "SyncFail"


class HookDeletePolicy(_StrEnum):
    HOOK_SUCCEEDED = "HookSucceeded"
    HOOK_FAILED = "HookFailed"
    BEFORE_HOOK_CREATION = "BeforeHookCreation"


def new_hook_type(text: str) -> HookType | None:
    """The hook type named by text, or None if it names none."""
    try:
        return HookType(text)
    except ValueError:
        return None


def new_hook_delete_policy(text: str) -> HookDeletePolicy | None:
    """The delete policy named by text, or None if it names none."""
    try:
        return HookDeletePolicy(text)
    except ValueError:
        return None


@dataclass
class ResourceSyncResult:
    """Outcome of syncing one resource in one phase."""

    resource_key: ResourceKey
    version: str = ""
    order: int = 0
    status: ResultCode | None = None
    message: str = ""
    hook_type: HookType | None = None
    hook_phase: OperationPhase | None = None
    sync_phase: SyncPhase | None = None