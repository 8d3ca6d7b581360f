"""Recognition of Helm hook annotations."""

from __future__ import annotations

import re
from enum import Enum

from kubesync.common import HookDeletePolicy, HookType
from kubesync.resources import Unstructured, get_annotation_csvs

HELM_HOOK = "helm.sh/hook"
HELM_HOOK_DELETE_POLICY = "helm.sh/hook-delete-policy"
HELM_HOOK_WEIGHT = "helm.sh/hook-weight"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _annotations(obj: Unstructured) -> dict:
    value = obj.annotations
    if callable(value):
        value = value()
    return value or {}


class HelmDeletePolicy(str, Enum):
    """A Helm hook delete policy."""

    BEFORE_HOOK_CREATION = "before-hook-creation"
    HOOK_SUCCEEDED = "hook-succeeded"
    HOOK_FAILED = "hook-failed"

    def __str__(self) -> str:
        return self.value

    def delete_policy(self) -> HookDeletePolicy:
        """The equivalent native hook delete policy."""
        return _DELETE_POLICIES[self]


_DELETE_POLICIES = {
    HelmDeletePolicy.BEFORE_HOOK_CREATION: HookDeletePolicy.BEFORE_HOOK_CREATION,
    HelmDeletePolicy.HOOK_SUCCEEDED: HookDeletePolicy.HOOK_SUCCEEDED,
    HelmDeletePolicy.HOOK_FAILED: HookDeletePolicy.HOOK_FAILED,
}


class HelmHookType(str, Enum):
    """A Helm hook type that maps onto a sync hook type."""

    PRE_INSTALL = "pre-install"
    PRE_UPGRADE = "pre-upgrade"
    POST_UPGRADE = "post-upgrade"
    POST_INSTALL = "post-install"

    def __str__(self) -> str:
        return self.value

    def hook_type(self) -> HookType:
        """The equivalent native hook type."""
        return _HOOK_TYPES[self]


_HOOK_TYPES = {
    HelmHookType.PRE_INSTALL: HookType.PRE_SYNC,
    HelmHookType.PRE_UPGRADE: HookType.PRE_SYNC,
    HelmHookType.POST_UPGRADE: HookType.POST_SYNC,
    HelmHookType.POST_INSTALL: HookType.POST_SYNC,
}


def new_delete_policy(text: str) -> HelmDeletePolicy | None:
    """Parse a Helm delete policy, or return None if it is not one."""
    try:
        return HelmDeletePolicy(text)
    except ValueError:
        return None


def delete_policies(obj: Unstructured) -> list[HelmDeletePolicy]:
    """The valid Helm delete policies annotated on the object."""
    parsed = (new_delete_policy(text) for text in get_annotation_csvs(obj, HELM_HOOK_DELETE_POLICY))
    return [policy for policy in parsed if policy is not None]


def is_hook(obj: Unstructured) -> bool:
    """Whether the object carries a Helm hook annotation (crd-install excluded)."""
    annotations = _annotations(obj)
    # Helm uses the same annotation to mark CRDs, which are not hooks.
    return HELM_HOOK in annotations and annotations[HELM_HOOK] != "crd-install"


def new_type(text: str) -> HelmHookType | None:
    """Parse a supported Helm hook type, or return None if it is not one."""
    try:
        return HelmHookType(text)
    except ValueError:
        return None


def types(obj: Unstructured) -> list[HelmHookType]:
    """The supported Helm hook types annotated on the object."""
    parsed = (new_type(text) for text in get_annotation_csvs(obj, HELM_HOOK))
    return [hook_type for hook_type in parsed if hook_type is not None]


def weight(obj: Unstructured) -> int:
    """The Helm hook weight, or 0 when missing or not a valid integer."""
    text = _annotations(obj).get(HELM_HOOK_WEIGHT)
    if text is None or not _INTEGER.fullmatch(text):
        return 0
    value = int(text)
    if _INT64_MIN <= value <= _INT64_MAX:
        return value
    return 0