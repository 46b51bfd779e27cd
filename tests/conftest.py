"""Shared test fixtures for glp."""

from __future__ import annotations

from typing import Any

import pytest
import respx

from glp.client import GitLabClient
from glp.config import GlpConfig

TEST_URL = "https://gitlab.example.com"
TEST_TOKEN = "test-token"
TEST_PROJECT = "123"
BASE = f"{TEST_URL}/api/v4"


def _job_record(
    job_id: int,
    name: str,
    stage: str,
    status: str = "success",
    started_at: str | None = None,
    duration: float | None = None,
) -> dict[str, Any]:
    return {
        "id": job_id,
        "name": name,
        "stage": stage,
        "status": status,
        "web_url": f"{TEST_URL}/group/project/-/jobs/{job_id}",
        "started_at": started_at,
        "duration": duration,
    }


@pytest.fixture
def make_job():
    """Factory for job records shaped like the GitLab jobs API."""
    return _job_record


@pytest.fixture
def config() -> GlpConfig:
    return GlpConfig(url=TEST_URL, token=TEST_TOKEN, project=TEST_PROJECT)


@pytest.fixture
def client(config: GlpConfig) -> GitLabClient:
    return GitLabClient(config)


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=BASE) as router:
        yield router
