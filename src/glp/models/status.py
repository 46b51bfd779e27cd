"""CI job and pipeline statuses."""

from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    """Statuses reported by GitLab for pipelines and jobs.

    Values GitLab may add in the future parse to ``UNKNOWN``; the models keep
    the raw text next to it so such values still render verbatim.
    """

    CREATED = "created"
    WAITING_FOR_RESOURCE = "waiting_for_resource"
    PREPARING = "preparing"
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    MANUAL = "manual"
    SCHEDULED = "scheduled"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | Status) -> Status:
        if isinstance(value, Status):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_finished(self) -> bool:
        return self in (Status.SUCCESS, Status.FAILED)
