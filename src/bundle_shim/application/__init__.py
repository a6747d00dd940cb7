"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from bundle_shim.application.options import LoadOptions
from bundle_shim.application.ports import (
    MetadataExtractor,
    SavedModelLoader,
    SessionBundleLoader,
)
from bundle_shim.application.results import ModelBundle, SessionBundle
from bundle_shim.types import ConfigProtoLike


def build_load_options(
    *,
    target: str = "",
    config: ConfigProtoLike | None = None,
    tags: Iterable[str] | None = None,
) -> LoadOptions:
    """Build typed load options via lazy use-case import."""
    from bundle_shim.application.use_cases import build_load_options as _impl

    return _impl(target=target, config=config, tags=tags)


def load_saved_model_from_legacy_session_bundle_path(
    *,
    export_dir: Path,
    options: LoadOptions,
    loader: SessionBundleLoader | None = None,
    extractor: MetadataExtractor | None = None,
) -> ModelBundle:
    """Load a legacy export via lazy use-case import."""
    from bundle_shim.application.use_cases import (
        load_saved_model_from_legacy_session_bundle_path as _impl,
    )

    return _impl(
        export_dir=export_dir,
        options=options,
        loader=loader,
        extractor=extractor,
    )


def load_session_bundle_or_saved_model_bundle(
    *,
    export_dir: Path,
    options: LoadOptions,
    session_bundle_loader: SessionBundleLoader | None = None,
    saved_model_loader: SavedModelLoader | None = None,
    extractor: MetadataExtractor | None = None,
) -> ModelBundle:
    """Load either export format via lazy use-case import."""
    from bundle_shim.application.use_cases import (
        load_session_bundle_or_saved_model_bundle as _impl,
    )

    return _impl(
        export_dir=export_dir,
        options=options,
        session_bundle_loader=session_bundle_loader,
        saved_model_loader=saved_model_loader,
        extractor=extractor,
    )


def convert_session_bundle_to_saved_model_bundle(
    session_bundle: SessionBundle,
    extractor: MetadataExtractor | None = None,
) -> ModelBundle:
    """Upgrade an already loaded session bundle via lazy use-case import."""
    from bundle_shim.application.use_cases import (
        convert_session_bundle_to_saved_model_bundle as _impl,
    )

    return _impl(session_bundle, extractor=extractor)


__all__ = [
    "LoadOptions",
    "ModelBundle",
    "SessionBundle",
    "build_load_options",
    "convert_session_bundle_to_saved_model_bundle",
    "load_saved_model_from_legacy_session_bundle_path",
    "load_session_bundle_or_saved_model_bundle",
]
