"""Indexing of reconciled resources and lookups over them."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from kubesync.resources import ResourceKey, Unstructured

NAMESPACE_KIND = "Namespace"
_CRD_KIND = "CustomResourceDefinition"
_CRD_GROUP = "apiextensions.k8s.io"


@dataclass
class ReconciledResource:
    """A desired object paired with its live counterpart; either may be absent."""

    target: Optional[Unstructured] = None
    live: Optional[Unstructured] = None

    def key(self) -> ResourceKey:
        """Key of the live object if there is one, else of the target."""
        obj = self.live if self.live is not None else self.target
        if obj is None:
            raise ValueError("reconciled resource has neither target nor live object")
        return obj.resource_key()


@dataclass
class DiffResult:
    """Outcome of comparing one resource; the live states are JSON documents."""

    normalized_live: bytes | str = b"null"
    predicted_live: bytes | str = b"null"
    modified: bool = False


def group_resources(reconciliation_result: Any) -> dict[ResourceKey, ReconciledResource]:
    """Index paired target and live objects by the key of the live or target object."""
    resources: dict[ResourceKey, ReconciledResource] = {}
    for target, live in zip(reconciliation_result.target, reconciliation_result.live):
        res = ReconciledResource(target=target, live=live)
        resources[res.key()] = res
    return resources


def _is_null(document: bytes | str) -> bool:
    return document in ("null", b"null")


def group_diff_results(diffs: Iterable[DiffResult]) -> dict[ResourceKey, bool]:
    """Map each resource in the diffs to whether it was modified.

    The normalized live state identifies the resource unless it is null, in
    which case the predicted live state is used; undecodable entries are skipped.
    """
    modified: dict[ResourceKey, bool] = {}
    for res in diffs:
        document = res.predicted_live if _is_null(res.normalized_live) else res.normalized_live
        try:
            parsed = json.loads(document)
        except (ValueError, TypeError):
            continue
        if not isinstance(parsed, dict):
            continue
        modified[Unstructured(parsed).resource_key()] = res.modified
    return modified


def find_live_obj(
    resources: Mapping[ResourceKey, ReconciledResource], obj: Unstructured
) -> Optional[Unstructured]:
    """The live object matching obj; cluster-scoped keys match any namespace."""
    for key, resource in resources.items():
        if (
            key.group == obj.group
            and key.kind == obj.kind
            and (key.namespace == "" or key.namespace == obj.namespace)
            and key.name == obj.name
        ):
            return resource.live
    return None


def _is_crd(obj: Unstructured) -> bool:
    return obj.kind == _CRD_KIND and obj.group == _CRD_GROUP


def is_crd_of_group_kind(group: str, kind: str, obj: Optional[Unstructured]) -> bool:
    """Whether obj is a custom resource definition for the given group and kind."""
    if obj is None or not _is_crd(obj):
        return False
    crd_group = obj.nested("spec", "group")
    crd_kind = obj.nested("spec", "names", "kind")
    if not isinstance(crd_group, str) or not isinstance(crd_kind, str):
        return False
    return crd_group == group and crd_kind == kind


def has_crd_of_group_kind(objs: Iterable[Optional[Unstructured]], group: str, kind: str) -> bool:
    """Whether any of objs defines the given group and kind."""
    return any(is_crd_of_group_kind(group, kind, obj) for obj in objs)


def is_namespace_kind(obj: Optional[Unstructured]) -> bool:
    return obj is not None and obj.group == "" and obj.kind == NAMESPACE_KIND


def is_namespace_with_name(obj: Optional[Unstructured], namespace: str) -> bool:
    return is_namespace_kind(obj) and obj.name == namespace