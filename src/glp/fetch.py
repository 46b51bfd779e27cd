"""Concurrent retrieval of pipelines and their jobs."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .client import GitLabClient
from .exceptions import GlpError, ParseError, TransportError
from .models import Job, Pipeline, PipelineDetails, build_stages

logger = logging.getLogger(__name__)

MAX_CONCURRENCY = 5


@dataclass
class PipelineResult:
    """Outcome of fetching one pipeline: either ``pipeline`` or ``error`` is set."""

    pipeline_id: str
    pipeline: Pipeline | None = None
    error: GlpError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _parse_list(data: Any, what: str) -> list[dict]:
    if not isinstance(data, list):
        msg = f"Expected a list of {what}, got {type(data).__name__}"
        raise ParseError(msg)
    return data


def parse_pipelines(data: Any) -> list[Pipeline]:
    """Parse the pipeline list response into pipelines without stages."""
    try:
        return [Pipeline.model_validate(entry) for entry in _parse_list(data, "pipelines")]
    except ValidationError as e:
        raise ParseError(f"Invalid pipeline record: {e}") from e


def parse_jobs(data: Any) -> list[Job]:
    try:
        return [Job.model_validate(entry) for entry in _parse_list(data, "jobs")]
    except ValidationError as e:
        raise ParseError(f"Invalid job record: {e}") from e


def parse_details(data: Any) -> PipelineDetails:
    try:
        return PipelineDetails.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Invalid pipeline details: {e}") from e


class PipelineFetcher:
    """Fetch the latest pipelines of a project with a bounded number in flight.

    Each pipeline's jobs (and, with ``show_finished``, its details) are
    fetched in a separate task holding one slot of ``limiter``. Results come
    back in the order GitLab listed the pipelines, one per pipeline; a
    transport or parse failure is kept in that pipeline's result instead of
    aborting the others.
    """

    def __init__(
        self,
        client: GitLabClient,
        project_id: str,
        *,
        show_finished: bool = False,
        max_concurrency: int = MAX_CONCURRENCY,
        limiter: asyncio.Semaphore | None = None,
    ) -> None:
        if max_concurrency < 1:
            msg = "max_concurrency must be positive"
            raise ValueError(msg)
        self.client = client
        self.project_id = project_id
        self.show_finished = show_finished
        self.limiter = limiter or asyncio.Semaphore(max_concurrency)

    async def fetch(self, limit: int) -> list[PipelineResult]:
        data = await self.client.list_pipelines(self.project_id, per_page=limit)
        pipelines = parse_pipelines(data)
        logger.info("Fetched %d pipeline(s) for project %s", len(pipelines), self.project_id)
        return await asyncio.gather(*(self._guarded(p) for p in pipelines))

    async def _guarded(self, pipeline: Pipeline) -> PipelineResult:
        async with self.limiter:
            try:
                return PipelineResult(pipeline.id, pipeline=await self.fetch_pipeline(pipeline))
            except (TransportError, ParseError) as e:
                logger.warning("Pipeline %s failed: %s", pipeline.id, e)
                return PipelineResult(pipeline.id, error=e)

    async def fetch_pipeline(self, pipeline: Pipeline) -> Pipeline:
        """Return a copy of *pipeline* populated with its stages and details."""
        logger.debug("Fetching jobs of pipeline %s", pipeline.id)
        jobs = parse_jobs(await self.client.list_pipeline_jobs(self.project_id, pipeline.id))
        update: dict[str, Any] = {
            "stages": build_stages(jobs),
            "show_finished": self.show_finished,
        }
        if self.show_finished:
            logger.debug("Fetching details of pipeline %s", pipeline.id)
            update["details"] = parse_details(
                await self.client.get_pipeline(self.project_id, pipeline.id)
            )
        populated = pipeline.model_copy(update=update)
        # surface a malformed finished_at here rather than mid-render
        populated.finished_at()
        return populated


async def fetch_pipelines(
    client: GitLabClient,
    project_id: str,
    limit: int,
    *,
    show_finished: bool = False,
    max_concurrency: int = MAX_CONCURRENCY,
) -> list[PipelineResult]:
    fetcher = PipelineFetcher(
        client,
        project_id,
        show_finished=show_finished,
        max_concurrency=max_concurrency,
    )
    return await fetcher.fetch(limit)
