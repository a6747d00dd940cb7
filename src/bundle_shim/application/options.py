"""Typed option objects shared across loading use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field

from bundle_shim.constants import SERVE_TAG
from bundle_shim.types import ConfigProtoLike, TagSet


@dataclass(frozen=True)
class LoadOptions:
    """Session and meta graph selection options for a single load."""

    target: str = ""
    config: ConfigProtoLike | None = None
    tags: TagSet = field(default_factory=lambda: frozenset({SERVE_TAG}))
