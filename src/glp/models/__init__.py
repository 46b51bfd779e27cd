"""Pydantic models for GitLab pipeline data."""

from .base import GitLabModel
from .pipelines import Job, Pipeline, PipelineDetails, Stage, build_stages
from .status import Status

__all__ = [
    "GitLabModel",
    "Job",
    "Pipeline",
    "PipelineDetails",
    "Stage",
    "Status",
    "build_stages",
]
