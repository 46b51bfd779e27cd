"""Pipeline, stage and job models."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime

from pydantic import AwareDatetime, Field, TypeAdapter, ValidationError

from ..exceptions import TimestampParseError
from .base import GitLabModel
from .status import Status

_RFC3339_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)
_AWARE_DATETIME = TypeAdapter(AwareDatetime)


class Job(GitLabModel):
    id: str
    name: str
    status: str
    stage: str
    web_url: str = ""
    started_at: str | None = None
    duration: float | None = Field(default=None, ge=0)

    @property
    def state(self) -> Status:
        return Status.parse(self.status)

    @property
    def whole_seconds(self) -> int | None:
        """Duration truncated to whole seconds, or None if the job has not run."""
        if self.duration is None:
            return None
        return int(self.duration)


class Stage(GitLabModel):
    """A named group of jobs, ordered by start time."""

    name: str
    jobs: list[Job] = []

    def find_status(self) -> Status:
        # Priorities are running, failed, success.
        states = {job.state for job in self.jobs}
        if Status.RUNNING in states:
            return Status.RUNNING
        if Status.FAILED in states:
            return Status.FAILED
        if Status.SUCCESS in states:
            return Status.SUCCESS
        return Status.UNKNOWN

    def earliest_start(self) -> str | None:
        started = [job.started_at for job in self.jobs if job.started_at is not None]
        return min(started) if started else None


class PipelineDetails(GitLabModel):
    id: str | None = None
    finished_at: str | None = None


class Pipeline(GitLabModel):
    id: str
    git_ref: str = Field(alias="ref")
    status: str
    stages: list[Stage] = []
    show_finished: bool = False
    details: PipelineDetails | None = None

    @property
    def state(self) -> Status:
        return Status.parse(self.status)

    @property
    def is_finished(self) -> bool:
        return self.state.is_finished

    @property
    def jobs(self) -> list[Job]:
        return [job for stage in self.stages for job in stage.jobs]

    def total_duration(self) -> int:
        """Sum of all job durations, truncated to whole seconds."""
        return int(sum(job.duration or 0.0 for job in self.jobs))

    def finished_at(self) -> datetime | None:
        """Parse ``details.finished_at``; None when details were not fetched."""
        if self.details is None or self.details.finished_at is None:
            return None
        return parse_timestamp(self.details.finished_at)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime."""
    match = _RFC3339_RE.fullmatch(value.strip())
    if match is None:
        raise TimestampParseError(value)
    date, time, fraction, offset = match.groups()
    # sub-microsecond digits are dropped
    text = f"{date}T{time}"
    if fraction:
        text += f".{fraction[:6]}"
    text += "Z" if offset.upper() == "Z" else offset
    try:
        return _AWARE_DATETIME.validate_python(text)
    except ValidationError as e:
        raise TimestampParseError(value) from e


def _start_key(started_at: str | None) -> tuple[bool, str]:
    return (started_at is None, started_at or "")


def build_stages(jobs: Iterable[Job]) -> list[Stage]:
    """Group jobs by stage name and order stages and jobs by start time.

    Jobs and stages that have not started sort after those that have; ties
    keep their input order.
    """
    grouped: dict[str, list[Job]] = {}
    for job in jobs:
        grouped.setdefault(job.stage, []).append(job)

    stages = [
        Stage(name=name, jobs=sorted(members, key=lambda j: _start_key(j.started_at)))
        for name, members in grouped.items()
    ]
    stages.sort(key=lambda s: _start_key(s.earliest_start()))
    return stages
