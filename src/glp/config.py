"""glp configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError

DEFAULT_URL = "https://gitlab.com"
PROJECT_FILE = ".glp"


@dataclass
class GlpConfig:
    """Configuration for glp, loaded from environment variables."""

    url: str = DEFAULT_URL
    token: str = ""
    project: str = ""
    timeout: int = 30
    ssl_verify: bool = True

    @classmethod
    def from_env(cls, project: str | None = None, cwd: Path | None = None) -> GlpConfig:
        url = os.getenv("GITLAB_URL", DEFAULT_URL).rstrip("/")
        token = os.getenv("GLP_PRIVATE_TOKEN") or os.getenv("GITLAB_TOKEN", "")
        timeout = int(os.getenv("GITLAB_TIMEOUT", "30"))
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            url=url,
            token=token,
            project=project or os.getenv("GLP_PROJECT") or read_project_file(cwd),
            timeout=timeout,
            ssl_verify=ssl_verify,
        )

    @property
    def api_url(self) -> str:
        return f"{self.url}/api/v4"

    def validate(self) -> None:
        if not self.url:
            msg = "GITLAB_URL must not be empty"
            raise ConfigError(msg)
        if not self.token:
            msg = "GitLab token is required. Set GLP_PRIVATE_TOKEN or GITLAB_TOKEN"
            raise ConfigError(msg)
        if not self.project:
            msg = f"No project ID: pass --project, set GLP_PROJECT or create a {PROJECT_FILE} file"
            raise ConfigError(msg)


def read_project_file(cwd: Path | None = None) -> str:
    """Return the project ID stored in the ``.glp`` marker file, or ``""``."""
    path = (cwd or Path.cwd()) / PROJECT_FILE
    if not path.is_file():
        return ""
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    return lines[0].strip() if lines else ""
