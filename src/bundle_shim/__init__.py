"""Top-level API for loading legacy session bundles as SavedModel bundles."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from bundle_shim.types import ConfigProtoLike

if TYPE_CHECKING:
    from bundle_shim.application.results import ModelBundle

__version__ = "0.1.0"


def load_legacy_session_bundle(
    export_dir: Path,
    target: str = "",
    config: ConfigProtoLike | None = None,
) -> ModelBundle:
    """Load a legacy session bundle and upgrade its signatures.

    Parameters
    ----------
    export_dir : Path
        Legacy export directory holding ``export.meta`` and a checkpoint.
    target : str, default=""
        TensorFlow session target.
    config : ConfigProtoLike, optional
        ``tf.compat.v1.ConfigProto`` for the session.

    Returns
    -------
    ModelBundle
        Session plus meta graph whose ``serving_default`` signature def was
        converted from the legacy signatures, when a conversion applies.

    Raises
    ------
    NotFoundError
        If the export directory or its artifacts are missing.
    """
    from .api import load_legacy_session_bundle as _impl

    return _impl(export_dir=export_dir, target=target, config=config)


def load_model_bundle(
    export_dir: Path,
    tags: Iterable[str] | None = None,
    target: str = "",
    config: ConfigProtoLike | None = None,
) -> ModelBundle:
    """Load a SavedModel, falling back to a legacy session bundle.

    Parameters
    ----------
    export_dir : Path
        SavedModel or legacy export directory.
    tags : Iterable[str], optional
        SavedModel meta graph tags; defaults to ``{"serve"}``.
    target : str, default=""
        TensorFlow session target.
    config : ConfigProtoLike, optional
        ``tf.compat.v1.ConfigProto`` for the session.

    Returns
    -------
    ModelBundle
        Loaded bundle; ``is_session_bundle`` tells which format was found.
    """
    from .api import load_model_bundle as _impl

    return _impl(export_dir=export_dir, tags=tags, target=target, config=config)


__all__ = [
    "load_legacy_session_bundle",
    "load_model_bundle",
]
