"""Pairing of desired objects with live cluster objects."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Optional

from kubesync import hook
from kubesync.resources import ResourceKey, Unstructured

NamespacedCheck = Callable[[str, str], Optional[bool]]


@dataclass
class ReconciliationResult:
    """Desired and live objects aligned by position, plus the hooks."""

    live: list[Unstructured | None] = field(default_factory=list)
    target: list[Unstructured | None] = field(default_factory=list)
    hooks: list[Unstructured] = field(default_factory=list)


def split_hooks(
    target: list[Unstructured | None],
) -> tuple[list[Unstructured], list[Unstructured]]:
    """Separate regular objects from hooks, dropping empty and ignored entries."""
    target_objs: list[Unstructured] = []
    hooks: list[Unstructured] = []
    for obj in target:
        if obj is None or hook.ignore(obj):
            continue
        if hook.is_hook(obj):
            hooks.append(obj)
        else:
            target_objs.append(obj)
    return target_objs, hooks


def dedup_live_resources(
    target_objs: list[Unstructured],
    live_objs_by_key: dict[ResourceKey, Unstructured | None],
) -> None:
    """Drop live objects that share a UID, keeping those defined as targets.

    The same object can be served under several API groups; duplicates not
    present among the targets are removed, and at least one always stays.
    """
    target_keys = {obj.resource_key() for obj in target_objs}
    by_uid: dict[str, list[Unstructured]] = defaultdict(list)
    for obj in live_objs_by_key.values():
        if obj is not None:
            by_uid[obj.uid].append(obj)

    for objs in by_uid.values():
        if len(objs) <= 1:
            continue
        left = len(objs)
        for obj in objs:
            key = obj.resource_key()
            if key in target_keys:
                continue
            live_objs_by_key.pop(key, None)
            left -= 1
            if left == 1:
                break


def reconcile(
    target_objs: list[Unstructured | None],
    live_obj_by_key: dict[ResourceKey, Unstructured | None],
    namespace: str,
    is_namespaced: NamespacedCheck | None = None,
) -> ReconciliationResult:
    """Align desired objects with live ones.

    ``is_namespaced(group, kind)`` tells whether a kind is namespaced; a
    result of None, or no callable at all, counts as namespaced.
    """
    targets: list[Unstructured | None]
    split_targets, hooks = split_hooks(target_objs)
    targets = list(split_targets)
    live = dict(live_obj_by_key)
    dedup_live_resources(split_targets, live)

    managed_live: list[Unstructured | None] = []
    for obj in split_targets:
        ns = obj.namespace or namespace
        if is_namespaced is not None and is_namespaced(obj.group, obj.kind) is False:
            ns = ""
        key = ResourceKey(obj.group, obj.kind, ns, obj.name)
        managed_live.append(live.pop(key, None))

    for obj in live.values():
        targets.append(None)
        managed_live.append(obj)

    return ReconciliationResult(live=managed_live, target=targets, hooks=hooks)