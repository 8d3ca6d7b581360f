# kubesync

Pure-Python building blocks for synchronizing Kubernetes resources the GitOps
way: deciding which manifests are hooks, which sync phases they belong to, how
target manifests pair up with live cluster objects, and how per-resource
results and status messages are recorded.

The package works on plain dictionaries shaped like Kubernetes manifests and
has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Concepts

- **Hooks** are resources annotated with `argocd.argoproj.io/hook`
  (`PreSync`, `Sync`, `PostSync`, `SyncFail`, or `Skip`). Helm's
  `helm.sh/hook` annotation is understood too (`pre-install` and
  `pre-upgrade` map to `PreSync`, `post-install` and `post-upgrade` to
  `PostSync`); it is only consulted when no recognised native hook type is
  present. A resource marked only `Skip` is not a hook and takes part in no
  phase. A hook whose types are all unrecognised is ignored.
- **Delete policies** come from `argocd.argoproj.io/hook-delete-policy`
  (`HookSucceeded`, `HookFailed`, `BeforeHookCreation`) and Helm's
  `helm.sh/hook-delete-policy`; `BeforeHookCreation` is the default.
- **Sync options** are a comma-separated list in
  `argocd.argoproj.io/sync-options`, such as `Prune=false`,
  `Validate=false`, `PruneLast=true`, `Replace=true` and
  `SkipDryRunOnMissingResource=true`. Names for these live in
  `kubesync.common`.

## Example

```python
from kubesync import hook, phases
from kubesync.reconcile import reconcile
from kubesync.resources import Unstructured, has_annotation_option

job = Unstructured({
    "apiVersion": "batch/v1",
    "kind": "Job",
    "metadata": {
        "generateName": "schema-migrate-",
        "annotations": {"argocd.argoproj.io/hook": "PreSync,PostSync"},
    },
})

hook.is_hook(job)            # True
phases.sync_phases(job)      # [SyncPhase.PRE_SYNC, SyncPhase.POST_SYNC]
hook.delete_policies(job)    # [HookDeletePolicy.BEFORE_HOOK_CREATION]

pod = Unstructured({
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {
        "name": "web",
        "annotations": {"argocd.argoproj.io/sync-options": "Prune=false"},
    },
})
has_annotation_option(pod, "argocd.argoproj.io/sync-options", "Prune=false")  # True

result = reconcile([pod, job], {}, "default", lambda group, kind: True)
result.target  # [pod], followed by None for each live object with no target
result.live    # [None]: nothing is live for the pod yet
result.hooks   # [job]
```

Recording results and building status messages:

```python
from kubesync.common import ResultCode, SyncPhase
from kubesync.results import SyncResults, hook_name, prune_outcome, running_phase_message
from kubesync.state import RunState, combine_run_states

results = SyncResults()
results.record(pod.resource_key(), SyncPhase.SYNC, status=ResultCode.SYNCED)
[r.order for r in results.ordered()]   # [1]

hook_name("schema-migrate-", "FooBarBaz", SyncPhase.PRE_SYNC, 0)
# "schema-migrate-foobarb-presync-0"

running_phase_message(False, "", "Pod", "my-pod", 2)
# "waiting for healthy state of /Pod/my-pod and 2 more resources"

prune_outcome(pod, prune=True, dry_run=False)
# (ResultCode.PRUNE_SKIPPED, "ignored (no prune)", False)

combine_run_states(RunState.SUCCESSFUL, [RunState.PENDING, RunState.FAILED])
# RunState.FAILED
```

## Modules

- `kubesync.resources` – `Unstructured` (a manifest as a dictionary, with
  `name`, `namespace`, `kind`, `group`, `api_version`, `uid`,
  `generate_name`, `annotations`, `nested()`, `deep_copy()` and
  `resource_key()`), `ResourceKey`, and `get_annotation_csvs` /
  `has_annotation_option`.
- `kubesync.common` – the `SyncPhase`, `OperationPhase`, `ResultCode`,
  `HookType` and `HookDeletePolicy` enums, `ResourceSyncResult`,
  `new_hook_type`, `new_hook_delete_policy`, and the annotation and sync
  option names.
- `kubesync.helm` – Helm hooks: `HelmHookType`, `HelmDeletePolicy`,
  `is_hook`, `types`, `delete_policies` and `weight`.
- `kubesync.hook` – `is_hook`, `skip`, `types`, `delete_policies` and
  `ignore`.
- `kubesync.phases` – `sync_phases`, the distinct phases a resource or hook
  takes part in.
- `kubesync.reconcile` – `ReconciliationResult`, `split_hooks`,
  `dedup_live_resources` (drops live duplicates sharing a UID unless they
  are targets) and `reconcile`.
- `kubesync.state` – `RunState`, `combine_run_states`,
  `resource_result_key`, `operation_phase_for` and `delete_options`
  (foreground propagation by default).
- `kubesync.grouping` – `ReconciledResource`, `DiffResult`,
  `group_resources`, `group_diff_results`, `find_live_obj`, and CRD and
  namespace checks (`is_crd_of_group_kind`, `has_crd_of_group_kind`,
  `is_namespace_kind`, `is_namespace_with_name`).
- `kubesync.results` – `SyncResults`, the ordered per-resource result log,
  and `running_phase_message`, `hook_name` and `prune_outcome`.

## What it does not do

kubesync does not talk to a cluster. It never applies, replaces, creates or
deletes resources, queries API discovery, evaluates resource health, or waits
for custom resource definitions to become established, and it has no command
line. There is no driver that runs a whole sync operation wave by wave: the
modules supply the decisions and bookkeeping such a driver needs, and the
caller performs the cluster calls.