"""Tests for the glp command."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest
import respx
from click.testing import CliRunner

from glp import main

BASE = "https://gitlab.example.com/api/v4"
T0 = "2024-05-01T10:00:00.000Z"
T10 = "2024-05-01T10:00:10.000Z"

ENV = {
    "GITLAB_URL": "https://gitlab.example.com",
    "GLP_PRIVATE_TOKEN": "test-token",
    "GITLAB_TOKEN": None,
    "GLP_PROJECT": None,
}


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _invoke(runner: CliRunner, args: list[str], **env: str | None):
    return runner.invoke(main, args, env={**ENV, **env})


def test_renders_pipeline_tree(runner, make_job):
    with respx.mock(base_url=BASE) as router:
        pipelines = router.get("/projects/123/pipelines").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"id": 1, "ref": "main", "status": "success"},
                    {"id": 2, "ref": "dev", "status": "running"},
                ],
            )
        )
        router.get("/projects/123/pipelines/1/jobs").mock(
            return_value=httpx.Response(
                200,
                json=[
                    make_job(11, "compile", "build", started_at=T10, duration=7.3),
                    make_job(10, "lint", "build", started_at=T0, duration=5.1),
                ],
            )
        )
        router.get("/projects/123/pipelines/2/jobs").mock(
            return_value=httpx.Response(
                200, json=[make_job(20, "unit", "test", status="running", started_at=T0)]
            )
        )
        result = _invoke(runner, ["--project", "123", "--no-color"])

    assert result.exit_code == 0, result.output
    assert pipelines.calls.last.request.url.params["per_page"] == "3"
    assert result.stdout.splitlines() == [
        "1 (main) [12s]",
        "└─ build",
        "   ├─ lint (5s)",
        "   └─ compile (7s)",
        "",
        "2 (dev)",
        "└─ test",
        "   └─ unit (-)",
    ]


def test_limit_and_project_file(runner, tmp_path):
    (tmp_path / ".glp").write_text("group/project\n")
    with respx.mock(base_url=BASE) as router:
        route = router.get("/projects/group%2Fproject/pipelines").mock(
            return_value=httpx.Response(200, json=[])
        )
        result = _invoke(runner, ["-l", "5"])

    assert result.exit_code == 0, result.output
    assert route.calls.last.request.url.params["per_page"] == "5"
    assert result.stdout == ""


def test_finished_flag_adds_ago_suffix(runner):
    finished = (datetime.now(timezone.utc) - timedelta(days=2, minutes=5)).isoformat()
    with respx.mock(base_url=BASE) as router:
        router.get("/projects/123/pipelines").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "ref": "main", "status": "failed"}])
        )
        router.get("/projects/123/pipelines/1/jobs").mock(
            return_value=httpx.Response(200, json=[])
        )
        router.get("/projects/123/pipelines/1").mock(
            return_value=httpx.Response(200, json={"id": 1, "finished_at": finished})
        )
        result = _invoke(runner, ["-p", "123", "-f", "--no-color"])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["1 (main) [0s] [2 days ago]"]


def test_missing_token_fails_before_requests(runner):
    with respx.mock(base_url=BASE, assert_all_called=False) as router:
        route = router.get("/projects/123/pipelines")
        result = _invoke(runner, ["-p", "123"], GLP_PRIVATE_TOKEN=None)

    assert result.exit_code == 1
    assert "token is required" in result.stderr
    assert not route.called


def test_missing_project(runner):
    result = _invoke(runner, [])
    assert result.exit_code == 1
    assert "No project ID" in result.stderr


def test_pipeline_list_failure(runner):
    with respx.mock(base_url=BASE) as router:
        router.get("/projects/123/pipelines").mock(
            return_value=httpx.Response(401, text="401 Unauthorized")
        )
        result = _invoke(runner, ["-p", "123"])

    assert result.exit_code == 1
    assert "Unauthorized" in result.stderr
    assert result.stdout == ""


def test_failed_pipeline_reported_after_others(runner, make_job):
    with respx.mock(base_url=BASE) as router:
        router.get("/projects/123/pipelines").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"id": 1, "ref": "main", "status": "running"},
                    {"id": 2, "ref": "dev", "status": "running"},
                ],
            )
        )
        router.get("/projects/123/pipelines/1/jobs").mock(
            return_value=httpx.Response(500, text="boom")
        )
        router.get("/projects/123/pipelines/2/jobs").mock(
            return_value=httpx.Response(200, json=[make_job(20, "lint", "build")])
        )
        result = _invoke(runner, ["-p", "123", "--no-color"])

    assert result.exit_code == 1
    assert result.stdout.splitlines() == ["2 (dev)", "└─ build", "   └─ lint (-)"]
    assert "pipeline 1" in result.stderr


def test_limit_out_of_range(runner):
    result = _invoke(runner, ["-p", "123", "-l", "0"])
    assert result.exit_code == 2
