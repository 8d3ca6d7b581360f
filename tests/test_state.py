import pytest

from kubesync.common import OperationPhase, ResultCode, SyncPhase
from kubesync.resources import ResourceKey
from kubesync.state import (
    DELETE_PROPAGATION_BACKGROUND,
    RunState,
    combine_run_states,
    delete_options,
    operation_phase_for,
    resource_result_key,
)


def test_delete_options_default():
    assert delete_options(None)["propagationPolicy"] == "Foreground"


def test_delete_options_with_prune_propagation_policy():
    assert delete_options(DELETE_PROPAGATION_BACKGROUND)["propagationPolicy"] == "Background"


@pytest.mark.parametrize(
    "current, results, expected",
    [
        (RunState.SUCCESSFUL, [], RunState.SUCCESSFUL),
        (RunState.SUCCESSFUL, [RunState.SUCCESSFUL], RunState.SUCCESSFUL),
        (RunState.SUCCESSFUL, [RunState.PENDING], RunState.PENDING),
        (RunState.SUCCESSFUL, [RunState.PENDING, RunState.FAILED], RunState.FAILED),
        (RunState.SUCCESSFUL, [RunState.FAILED, RunState.SUCCESSFUL], RunState.FAILED),
        (RunState.PENDING, [RunState.SUCCESSFUL], RunState.PENDING),
        (RunState.PENDING, [RunState.FAILED], RunState.FAILED),
        (RunState.FAILED, [RunState.SUCCESSFUL, RunState.PENDING], RunState.FAILED),
    ],
)
def test_combine_run_states(current, results, expected):
    assert combine_run_states(current, results) is expected


def test_combine_run_states_accepts_generator():
    states = (s for s in [RunState.PENDING, RunState.SUCCESSFUL])
    assert combine_run_states(RunState.SUCCESSFUL, states) is RunState.PENDING


def test_resource_result_key_format():
    key = ResourceKey("apps", "Deployment", "ns", "web")
    assert resource_result_key(key, SyncPhase.SYNC) == "apps/Deployment/ns/web:Sync"


def test_resource_result_key_distinguishes_phases():
    key = ResourceKey("", "Pod", "ns", "my-pod")
    assert resource_result_key(key, SyncPhase.PRE_SYNC) != resource_result_key(key, SyncPhase.POST_SYNC)
    assert resource_result_key(key, SyncPhase.PRE_SYNC).endswith(":PreSync")


@pytest.mark.parametrize(
    "code, phase",
    [
        (ResultCode.SYNCED, OperationPhase.RUNNING),
        (ResultCode.SYNC_FAILED, OperationPhase.FAILED),
        (ResultCode.PRUNED, OperationPhase.SUCCEEDED),
        (ResultCode.PRUNE_SKIPPED, OperationPhase.SUCCEEDED),
    ],
)
def test_operation_phase_for(code, phase):
    assert operation_phase_for(code) is phase


def test_operation_phase_for_unknown_code():
    with pytest.raises(ValueError):
        operation_phase_for("Bogus")