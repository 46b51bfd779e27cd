"""GitLab API client using httpx."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import GlpConfig
from .exceptions import (
    GitLabApiError,
    GitLabAuthError,
    GitLabNotFoundError,
    ParseError,
    TransportError,
)

logger = logging.getLogger(__name__)


class GitLabClient:
    """Async HTTP client for the pipeline endpoints of the GitLab REST API v4."""

    def __init__(self, config: GlpConfig | None = None) -> None:
        self.config = config or GlpConfig.from_env()
        self.config.validate()
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={"PRIVATE-TOKEN": self.config.token},
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitLabClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode_id(project_id: str | int) -> str:
        """Encode a project ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        try:
            return str(int(project_id))
        except ValueError:
            return quote(project_id, safe="")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request and return the parsed JSON body."""
        logger.debug("GET %s params=%s", path, params)
        try:
            resp = await self._client.get(path, params=params)
        except httpx.TransportError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        if resp.status_code in (401, 403):
            raise GitLabAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response, check URL and authentication"
            raise ParseError(msg)

        try:
            return resp.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise ParseError(f"JSON parse error for {path}: {e}") from e

    # ── Pipelines ─────────────────────────────────────────────────

    async def list_pipelines(self, project_id: str | int, per_page: int = 20) -> list[dict]:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/pipelines", params={"per_page": per_page})

    async def get_pipeline(self, project_id: str | int, pipeline_id: int | str) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/pipelines/{pipeline_id}")

    async def list_pipeline_jobs(
        self, project_id: str | int, pipeline_id: int | str
    ) -> list[dict]:
        enc = self._encode_id(project_id)
        return await self.get(
            f"/projects/{enc}/pipelines/{pipeline_id}/jobs",
            params={"per_page": 100},
        )
