"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from bundle_shim.application.options import LoadOptions
from bundle_shim.application.results import ModelBundle, SessionBundle
from bundle_shim.signatures import LegacySignatureSet
from bundle_shim.types import MetaGraphDefLike


class SessionBundleLoader(Protocol):
    """Load a legacy session bundle export into a session."""

    def load(self, export_dir: Path, options: LoadOptions) -> SessionBundle:
        """Raise ``NotFoundError`` when export artifacts are missing."""


class SavedModelLoader(Protocol):
    """Load a SavedModel export into a model bundle."""

    def load(self, export_dir: Path, options: LoadOptions) -> ModelBundle:
        """Raise ``NotFoundError`` when export artifacts are missing."""


class MetadataExtractor(Protocol):
    """Decode legacy signatures stored in a meta graph."""

    def extract(self, meta_graph_def: MetaGraphDefLike) -> LegacySignatureSet:
        """Return an empty set when no legacy signatures are stored."""
