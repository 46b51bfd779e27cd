"""Generic tree printing and the pipeline → stage → job adapter."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

import click

from ..models import Job, Pipeline, Stage
from .formatting import format_ago, format_duration, render_label

logger = logging.getLogger(__name__)

BRANCH = "├─ "
LAST_BRANCH = "└─ "
PIPE = "│  "
SPACE = "   "


@dataclass
class TreeNode:
    label: str
    children: list[TreeNode] = field(default_factory=list)


def render_tree(node: TreeNode) -> list[str]:
    """Return the lines of *node* drawn as a tree, root first."""
    lines = [node.label]
    _render_children(node.children, "", lines)
    return lines


def _render_children(children: list[TreeNode], prefix: str, lines: list[str]) -> None:
    for index, child in enumerate(children):
        last = index == len(children) - 1
        lines.append(f"{prefix}{LAST_BRANCH if last else BRANCH}{child.label}")
        _render_children(child.children, prefix + (SPACE if last else PIPE), lines)


# ── Pipelines ─────────────────────────────────────────────────


def duration_suffix(pipeline: Pipeline) -> str:
    """`` [7m 2s]`` for finished pipelines, empty otherwise."""
    if not pipeline.is_finished:
        return ""
    return f" [{format_duration(pipeline.total_duration())}]"


def finished_suffix(pipeline: Pipeline, now: datetime | None = None) -> str:
    """`` [2 days ago]`` when finished details were requested and are known."""
    if not pipeline.show_finished:
        return ""
    finished_at = pipeline.finished_at()
    if finished_at is None:
        return ""
    now = now or datetime.now().astimezone()
    return f" [{format_ago(finished_at, now)}]"


def job_node(job: Job) -> TreeNode:
    seconds = job.whole_seconds
    duration = "-" if seconds is None else format_duration(seconds)
    return TreeNode(f"{render_label(job.name, job.status)} ({duration})")


def stage_node(stage: Stage) -> TreeNode:
    return TreeNode(
        render_label(stage.name, stage.find_status()),
        [job_node(job) for job in stage.jobs],
    )


def pipeline_node(pipeline: Pipeline, now: datetime | None = None) -> TreeNode:
    label = (
        f"{render_label(pipeline.id, pipeline.status)} ({pipeline.git_ref})"
        f"{duration_suffix(pipeline)}{finished_suffix(pipeline, now)}"
    )
    return TreeNode(label, [stage_node(stage) for stage in pipeline.stages])


def print_pipelines(
    pipelines: Iterable[Pipeline],
    *,
    color: bool | None = None,
    now: datetime | None = None,
) -> None:
    """Print one tree per pipeline, separated by a blank line."""
    for index, pipeline in enumerate(pipelines):
        lines = render_tree(pipeline_node(pipeline, now))
        if index:
            click.echo("", color=color)
        logger.debug("Rendering pipeline %s with %d stage(s)", pipeline.id, len(pipeline.stages))
        click.echo("\n".join(lines), color=color)
