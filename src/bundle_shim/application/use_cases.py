"""Application use-cases orchestrating legacy export loading."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from bundle_shim.adapters.loaders import (
    TensorflowSavedModelLoader,
    TensorflowSessionBundleLoader,
    is_possible_export_directory,
    maybe_saved_model_directory,
)
from bundle_shim.adapters.metadata import (
    LegacyMetadataExtractor,
    merge_signature_defs,
    signature_defs_from_meta_graph,
)
from bundle_shim.application.options import LoadOptions
from bundle_shim.application.ports import (
    MetadataExtractor,
    SavedModelLoader,
    SessionBundleLoader,
)
from bundle_shim.application.results import ModelBundle, SessionBundle
from bundle_shim.constants import SERVE_TAG
from bundle_shim.converters import convert_signatures_to_signature_defs
from bundle_shim.errors import LoadConfigError, NotFoundError
from bundle_shim.schemas import LegacyBundleLoadConfig
from bundle_shim.signatures import SignatureDefMap
from bundle_shim.types import ConfigProtoLike

logger = logging.getLogger(__name__)


def _validate(export_dir: Path, options: LoadOptions) -> LegacyBundleLoadConfig:
    try:
        return LegacyBundleLoadConfig(
            export_dir=export_dir,
            target=options.target,
            tags=tuple(sorted(options.tags)),
        )
    except ValidationError as exc:
        raise LoadConfigError(f"Invalid bundle load parameters: {exc}") from exc


def convert_session_bundle_to_saved_model_bundle(
    session_bundle: SessionBundle,
    extractor: MetadataExtractor | None = None,
) -> ModelBundle:
    """Use-case: upgrade a loaded session bundle's signatures.

    The session and meta graph move into the returned bundle; converted
    signature defs are merged into the meta graph's ``signature_def`` map.
    """
    extractor = extractor or LegacyMetadataExtractor()
    meta_graph_def = session_bundle.meta_graph_def

    signatures = extractor.extract(meta_graph_def)
    converted: SignatureDefMap = {}
    convert_signatures_to_signature_defs(signatures, converted)
    if not converted:
        logger.info("No legacy signatures could be converted to signature defs.")
    merge_signature_defs(meta_graph_def, converted)

    return ModelBundle(
        session=session_bundle.session,
        meta_graph_def=meta_graph_def,
        signature_defs=signature_defs_from_meta_graph(meta_graph_def),
        is_session_bundle=True,
    )


def load_saved_model_from_legacy_session_bundle_path(
    *,
    export_dir: Path,
    options: LoadOptions,
    loader: SessionBundleLoader | None = None,
    extractor: MetadataExtractor | None = None,
) -> ModelBundle:
    """Use-case: load a legacy export and upgrade its signatures.

    Raises
    ------
    NotFoundError
        Propagated from the loader when export artifacts are missing.
    """
    config = _validate(export_dir, options)
    loader = loader or TensorflowSessionBundleLoader()

    session_bundle = loader.load(config.export_dir, options)
    try:
        return convert_session_bundle_to_saved_model_bundle(
            session_bundle, extractor=extractor
        )
    except BaseException:
        session_bundle.session.close()
        raise


def load_session_bundle_or_saved_model_bundle(
    *,
    export_dir: Path,
    options: LoadOptions,
    session_bundle_loader: SessionBundleLoader | None = None,
    saved_model_loader: SavedModelLoader | None = None,
    extractor: MetadataExtractor | None = None,
) -> ModelBundle:
    """Use-case: load a SavedModel, or a legacy export through the shim."""
    config = _validate(export_dir, options)

    if maybe_saved_model_directory(config.export_dir):
        loader = saved_model_loader or TensorflowSavedModelLoader()
        return loader.load(config.export_dir, options)

    if is_possible_export_directory(config.export_dir):
        return load_saved_model_from_legacy_session_bundle_path(
            export_dir=config.export_dir,
            options=options,
            loader=session_bundle_loader,
            extractor=extractor,
        )

    raise NotFoundError(
        "Specified file path does not appear to contain a SavedModel or "
        f"SessionBundle: {config.export_dir}"
    )


def build_load_options(
    *,
    target: str = "",
    config: ConfigProtoLike | None = None,
    tags: Iterable[str] | None = None,
) -> LoadOptions:
    """Build typed option object from command/API params."""
    return LoadOptions(
        target=target,
        config=config,
        tags=frozenset(tags) if tags is not None else frozenset({SERVE_TAG}),
    )
