from datetime import datetime, timezone

import pytest

from kubesync.common import (
    ANNOTATION_SYNC_OPTIONS,
    HookType,
    OperationPhase,
    ResultCode,
    SyncPhase,
)
from kubesync.resources import ResourceKey, Unstructured
from kubesync.results import (
    SyncResults,
    hook_name,
    prune_outcome,
    running_phase_message,
)

START = datetime(2021, 1, 1, tzinfo=timezone.utc)


def new_pod(name="my-pod", namespace="", annotations=None):
    metadata = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    if annotations:
        metadata["annotations"] = dict(annotations)
    return Unstructured({"apiVersion": "v1", "kind": "Pod", "metadata": metadata})


def pod_key(name):
    return ResourceKey("", "Pod", "fake-argocd-ns", name)


def test_running_phase_healthy_state():
    msg = running_phase_message(False, "", "Pod", "my-pod", 2, False)
    assert msg == "waiting for healthy state of /Pod/my-pod and 2 more resources"


def test_running_phase_running_hooks():
    msg = running_phase_message(True, "", "Pod", "my-pod", 0, False)
    assert msg == "waiting for completion of hook /Pod/my-pod"


def test_running_phase_pending_deletion():
    msg = running_phase_message(False, "", "Pod", "my-pod", 2, True)
    assert msg == "waiting for deletion of /Pod/my-pod and 2 more resources"


def test_running_phase_more_hooks():
    msg = running_phase_message(True, "apps", "Job", "j", 1, False)
    assert msg == "waiting for completion of hook apps/Job/j and 1 more hooks"


def test_hook_name_truncated_revision():
    name = hook_name("", "FooBarBaz", SyncPhase.PRE_SYNC, START)
    assert name.startswith("foobarb-presync-")
    assert name == "foobarb-presync-1609459200"


def test_hook_name_short_revision():
    assert hook_name("", "foobar", SyncPhase.POST_SYNC, START).startswith("foobar-postsync-")


def test_hook_name_uses_generate_name_prefix():
    assert hook_name("migrate-", "abc", SyncPhase.SYNC, 42) == "migrate-abc-sync-42"


def test_hook_name_naive_datetime_is_utc():
    naive = datetime(2021, 1, 1)
    assert hook_name("", "abc", SyncPhase.SYNC, naive) == hook_name("", "abc", SyncPhase.SYNC, START)


def test_prune_requires_pruning():
    assert prune_outcome(new_pod(), False, False) == (
        ResultCode.PRUNE_SKIPPED,
        "ignored (requires pruning)",
        False,
    )


def test_prune_false_annotation():
    pod = new_pod(annotations={ANNOTATION_SYNC_OPTIONS: "Prune=false"})
    assert prune_outcome(pod, True, False) == (ResultCode.PRUNE_SKIPPED, "ignored (no prune)", False)


def test_prune_dry_run():
    assert prune_outcome(new_pod(), True, True) == (ResultCode.PRUNED, "pruned (dry run)", False)


def test_prune_deletes():
    assert prune_outcome(new_pod(), True, False) == (ResultCode.PRUNED, "pruned", True)


def test_prune_skips_delete_when_already_deleting():
    pod = new_pod()
    pod.obj["metadata"]["deletionTimestamp"] = "2021-01-01T00:00:00Z"
    assert prune_outcome(pod, True, False) == (ResultCode.PRUNED, "pruned", False)


def test_record_assigns_order():
    results = SyncResults()
    results.record(pod_key("a"), SyncPhase.SYNC, status=ResultCode.SYNCED)
    results.record(pod_key("b"), SyncPhase.SYNC, status=ResultCode.SYNCED)
    assert [r.order for r in results.ordered()] == [1, 2]
    assert [r.resource_key.name for r in results.ordered()] == ["a", "b"]
    assert len(results) == 2


def test_same_key_different_phase_are_separate():
    results = SyncResults()
    results.record(pod_key("a"), SyncPhase.PRE_SYNC)
    results.record(pod_key("a"), SyncPhase.POST_SYNC)
    assert len(results) == 2


def test_update_keeps_order_and_message():
    results = SyncResults()
    results.record(pod_key("a"), SyncPhase.SYNC, message="first")
    results.record(pod_key("b"), SyncPhase.SYNC)
    updated = results.record(
        pod_key("a"),
        SyncPhase.SYNC,
        status=ResultCode.SYNCED,
        message="",
        hook_phase=OperationPhase.SUCCEEDED,
    )
    assert updated.order == 1
    assert updated.message == "first"
    assert updated.status == ResultCode.SYNCED
    assert updated.hook_phase == OperationPhase.SUCCEEDED
    assert len(results) == 2


def test_update_replaces_nonempty_message():
    results = SyncResults()
    results.record(pod_key("a"), SyncPhase.SYNC, message="first")
    results.record(pod_key("a"), SyncPhase.SYNC, message="second")
    assert results.get(pod_key("a"), SyncPhase.SYNC).message == "second"


def test_get_missing_returns_none():
    results = SyncResults()
    results.record(pod_key("a"), SyncPhase.SYNC)
    assert results.get(pod_key("a"), SyncPhase.POST_SYNC) is None


@pytest.mark.parametrize("hook_type", [HookType.PRE_SYNC, None])
def test_record_fields(hook_type):
    results = SyncResults()
    res = results.record(
        pod_key("a"),
        SyncPhase.PRE_SYNC,
        version="v1",
        status=ResultCode.SYNC_FAILED,
        message="foo",
        hook_type=hook_type,
        hook_phase=OperationPhase.FAILED,
    )
    assert res.version == "v1"
    assert res.hook_type == hook_type
    assert res.sync_phase == SyncPhase.PRE_SYNC
    assert results.get(pod_key("a"), SyncPhase.PRE_SYNC) is res