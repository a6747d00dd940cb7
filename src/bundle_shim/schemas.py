"""Pydantic schemas for runtime validation of load inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bundle_shim.constants import SERVE_TAG


class LegacyBundleLoadConfig(BaseModel):
    """Validated input for loading a legacy or SavedModel export."""

    model_config = ConfigDict(extra="forbid")

    export_dir: Path
    target: str = ""
    tags: tuple[str, ...] = Field(default=(SERVE_TAG,))

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("tags must contain at least one meta graph tag.")
        if any(not tag.strip() for tag in value):
            raise ValueError("tags cannot contain empty entries.")
        return value
