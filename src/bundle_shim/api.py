"""Public path-based loading API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from typing import Optional

from bundle_shim.adapters.loaders import TensorflowSessionBundleLoader
from bundle_shim.adapters.metadata import LegacyMetadataExtractor
from bundle_shim.application.results import ModelBundle
from bundle_shim.application.use_cases import build_load_options
from bundle_shim.application.use_cases import load_saved_model_from_legacy_session_bundle_path
from bundle_shim.application.use_cases import load_session_bundle_or_saved_model_bundle
from bundle_shim.converters import convert_signatures_to_signature_defs
from bundle_shim.signatures import SignatureDefMap
from bundle_shim.types import ConfigProtoLike


def load_legacy_session_bundle(
    export_dir: Path,
    target: str = "",
    config: Optional[ConfigProtoLike] = None,
) -> ModelBundle:
    """Load a legacy session bundle export with upgraded signature defs."""
    options = build_load_options(target=target, config=config)
    return load_saved_model_from_legacy_session_bundle_path(
        export_dir=Path(export_dir),
        options=options,
    )


def load_model_bundle(
    export_dir: Path,
    tags: Optional[Iterable[str]] = None,
    target: str = "",
    config: Optional[ConfigProtoLike] = None,
) -> ModelBundle:
    """Load a SavedModel or legacy session bundle export."""
    options = build_load_options(target=target, config=config, tags=tags)
    return load_session_bundle_or_saved_model_bundle(
        export_dir=Path(export_dir),
        options=options,
    )


def inspect_legacy_signature_defs(export_dir: Path) -> SignatureDefMap:
    """Return the signature defs a legacy export would be upgraded to.

    Only the meta graph is read; no session is created.
    """
    meta_graph_def = TensorflowSessionBundleLoader().read_meta_graph(Path(export_dir))
    signatures = LegacyMetadataExtractor().extract(meta_graph_def)
    signature_defs: SignatureDefMap = {}
    convert_signatures_to_signature_defs(signatures, signature_defs)
    return signature_defs
