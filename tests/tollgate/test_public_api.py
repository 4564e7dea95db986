"""End-to-end checks through the package's public names."""

import tollgate


def test_end_to_end_interpolation():
    result = tollgate.interpolate(
        "a {{.cds.app.value}} and {{.cds.app.foo}}", {"cds.app.value": "value"}
    )
    assert result == "a value and {{.cds.app.foo}}"


def test_stage_conditions_from_build_parameters():
    params = [
        tollgate.Parameter(name="git.branch", value="release/1.4"),
        tollgate.Parameter(name="cds.status", value="Success"),
        tollgate.Parameter(name="release.prefix", value="release/"),
    ]
    conditions = tollgate.conditions_from_when(["success"]) + [
        tollgate.Condition(
            variable="git.branch", operator="regex", value="^{{.release.prefix}}"
        )
    ]
    assert tollgate.check_conditions(conditions, params)


def test_job_requirements():
    reqs = tollgate.deduplicate([
        tollgate.Requirement(name="go", type="binary", value="go"),
        tollgate.Requirement(name="go", type="binary", value="go"),
        tollgate.Requirement(name="golang", type="model", value="golang:1.22"),
    ])
    tollgate.validate(reqs)
    assert len(reqs) == 2


def test_hook_admission():
    hook = tollgate.HookFilter(tag_filter=["v*"], path_filter=["^charts/"])
    event = tollgate.AdmissionEvent(ref="refs/tags/v1.0.0", paths=["charts/app/values.yaml"])
    assert tollgate.admit(hook, event).admitted
    assert tollgate.is_valid_hook_refs(hook.tag_filter, "v1.0.0")
    assert tollgate.is_valid_hook_path(hook.path_filter, event.paths)


def test_job_requirements_from_parameters():
    reqs = tollgate.interpolate_requirements(
        [
            tollgate.Requirement(name="model", type="model", value="{{.cds.env.model}}"),
            tollgate.Requirement(name="db", type="service", value="postgres:{{.pg.version | default \"16\"}}"),
        ],
        [tollgate.Parameter(name="cds.env.model", value="golang:1.22")],
    )
    tollgate.validate(reqs)
    assert [r.value for r in reqs] == ["golang:1.22", "postgres:16"]
