"""GitLab pipeline status for the command line."""

import asyncio
import logging
import sys

import click
from dotenv import load_dotenv

from .client import GitLabClient
from .config import GlpConfig
from .exceptions import GlpError
from .fetch import PipelineResult, fetch_pipelines
from .render import print_pipelines

DEFAULT_LIMIT = 3


@click.command()
@click.option("-p", "--project", help="Project ID or path (defaults to GLP_PROJECT or .glp file)")
@click.option(
    "-l",
    "--limit",
    type=click.IntRange(1, 100),
    default=DEFAULT_LIMIT,
    show_default=True,
    help="Number of pipelines to show",
)
@click.option("-f", "--finished", is_flag=True, help="Show when finished pipelines ended")
@click.option("--color/--no-color", default=None, help="Force or disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr")
def main(
    project: str | None,
    limit: int,
    finished: bool,
    color: bool | None,
    verbose: bool,
) -> None:
    """Show the latest GitLab pipelines of a project as a status tree."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = GlpConfig.from_env(project=project)
        config.validate()
        results = asyncio.run(_fetch(config, limit, finished))
        print_pipelines([r.pipeline for r in results if r.pipeline is not None], color=color)
    except GlpError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    failed = [r for r in results if not r.ok]
    for result in failed:
        click.echo(f"Error: pipeline {result.pipeline_id}: {result.error}", err=True)
    if failed:
        sys.exit(1)


async def _fetch(config: GlpConfig, limit: int, show_finished: bool) -> list[PipelineResult]:
    async with GitLabClient(config) as client:
        return await fetch_pipelines(client, config.project, limit, show_finished=show_finished)


if __name__ == "__main__":
    main()
