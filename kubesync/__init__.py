"""Hooks, phases, reconciliation and result bookkeeping for Kubernetes resource synchronization."""

__version__ = "0.1.0"

__all__ = [
    "common",
    "grouping",
    "helm",
    "hook",
    "phases",
    "reconcile",
    "resources",
    "results",
    "state",
]