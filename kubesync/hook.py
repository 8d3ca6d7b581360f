"""Classification of resources as sync hooks."""

from __future__ import annotations

from kubesync import helm
from kubesync.common import (
    HookDeletePolicy,
    HookType,
    new_hook_delete_policy,
    new_hook_type,
)
from kubesync.resources import Unstructured, get_annotation_csvs

ANNOTATION_KEY_HOOK = "argocd.argoproj.io/hook"
ANNOTATION_KEY_HOOK_DELETE_POLICY = "argocd.argoproj.io/hook-delete-policy"


def _annotations(obj: Unstructured) -> dict:
    value = obj.annotations
    if callable(value):
        value = value()
    return value or {}


def is_hook(obj: Unstructured) -> bool:
    """Whether the object is a hook rather than a regular managed resource."""
    if ANNOTATION_KEY_HOOK in _annotations(obj):
        return not skip(obj)
    return helm.is_hook(obj)


def skip(obj: Unstructured) -> bool:
    """Whether the object is marked to be skipped, and nothing else."""
    hook_types = types(obj)
    return HookType.SKIP in hook_types and len(hook_types) == 1


def types(obj: Unstructured) -> list[HookType]:
    """The hook types of the object; Helm hooks count only without native ones."""
    parsed = (new_hook_type(text) for text in get_annotation_csvs(obj, ANNOTATION_KEY_HOOK))
    hook_types = [hook_type for hook_type in parsed if hook_type is not None]
    if not hook_types:
        hook_types = [helm_type.hook_type() for helm_type in helm.types(obj)]
    return hook_types


def delete_policies(obj: Unstructured) -> list[HookDeletePolicy]:
    """The hook delete policies, defaulting to BeforeHookCreation."""
    parsed = (
        new_hook_delete_policy(text)
        for text in get_annotation_csvs(obj, ANNOTATION_KEY_HOOK_DELETE_POLICY)
    )
    policies = [policy for policy in parsed if policy is not None]
    policies.extend(policy.delete_policy() for policy in helm.delete_policies(obj))
    return policies or [HookDeletePolicy.BEFORE_HOOK_CREATION]


def ignore(obj: Unstructured) -> bool:
    """Whether the object is a hook with no recognisable type and should be ignored."""
    return is_hook(obj) and not types(obj)