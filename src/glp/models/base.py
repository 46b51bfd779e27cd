"""Base model for GitLab API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator


class GitLabModel(BaseModel):
    """Base model with common behavior for all GitLab API models."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        """Numeric API ids are kept in their string form."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
