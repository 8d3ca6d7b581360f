"""Kubernetes objects held as plain mappings, and annotation helpers."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResourceKey:
    """Identity of a resource: group, kind, namespace and name."""

    group: str = ""
    kind: str = ""
    namespace: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"{self.group}/{self.kind}/{self.namespace}/{self.name}"


class Unstructured:
    """A Kubernetes object stored as a nested dictionary."""

    __slots__ = ("obj",)

    def __init__(self, obj: dict[str, Any] | None = None) -> None:
        self.obj: dict[str, Any] = obj if obj is not None else {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unstructured):
            return NotImplemented
        return self.obj == other.obj

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Unstructured({self.obj!r})"

    def _metadata(self) -> dict[str, Any]:
        meta = self.obj.get("metadata")
        return meta if isinstance(meta, dict) else {}

    def _metadata_str(self, field: str) -> str:
        value = self._metadata().get(field)
        return value if isinstance(value, str) else ""

    def _set_metadata(self, field: str, value: Any) -> None:
        if value:
            meta = self.obj.get("metadata")
            if not isinstance(meta, dict):
                meta = {}
                self.obj["metadata"] = meta
            meta[field] = value
        else:
            meta = self.obj.get("metadata")
            if isinstance(meta, dict):
                meta.pop(field, None)

    @property
    def name(self) -> str:
        return self._metadata_str("name")

    @name.setter
    def name(self, value: str) -> None:
        self._set_metadata("name", value)

    @property
    def namespace(self) -> str:
        return self._metadata_str("namespace")

    @namespace.setter
    def namespace(self, value: str) -> None:
        self._set_metadata("namespace", value)

    @property
    def kind(self) -> str:
        value = self.obj.get("kind")
        return value if isinstance(value, str) else ""

    @property
    def api_version(self) -> str:
        value = self.obj.get("apiVersion")
        return value if isinstance(value, str) else ""

    @property
    def group(self) -> str:
        api_version = self.api_version
        if "/" in api_version:
            return api_version.split("/", 1)[0]
        return ""

    @property
    def uid(self) -> str:
        return self._metadata_str("uid")

    @property
    def generate_name(self) -> str:
        return self._metadata_str("generateName")

    @property
    def annotations(self) -> dict[str, str]:
        """A copy of the object's annotations."""
        value = self._metadata().get("annotations")
        if not isinstance(value, dict):
            return {}
        return {k: v for k, v in value.items() if isinstance(v, str)}

    @annotations.setter
    def annotations(self, value: dict[str, str] | None) -> None:
        self._set_metadata("annotations", dict(value) if value else None)

    def nested(self, *args: str) -> Any:
        """Value at the given path of keys, or None where the path is missing."""
        current: Any = self.obj
        for key in args:
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]
        return current

    def deep_copy(self) -> Unstructured:
        return Unstructured(copy.deepcopy(self.obj))

    def resource_key(self) -> ResourceKey:
        return ResourceKey(self.group, self.kind, self.namespace, self.name)


def get_annotation_csvs(obj: Unstructured, key: str) -> list[str]:
    """Distinct non-empty, trimmed values of a comma-separated annotation."""
    values: dict[str, None] = {}
    for item in obj.annotations.get(key, "").split(","):
        val = item.strip()
        if val:
            values[val] = None
    return list(values)


def has_annotation_option(obj: Unstructured, key: str, val: str) -> bool:
    return val in get_annotation_csvs(obj, key)