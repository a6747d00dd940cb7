"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass

from bundle_shim.signatures import SignatureDefMap
from bundle_shim.types import MetaGraphDefLike, SessionLike


@dataclass(frozen=True)
class SessionBundle:
    """Legacy export loaded into a session, before signature conversion."""

    session: SessionLike
    meta_graph_def: MetaGraphDefLike


@dataclass(frozen=True)
class ModelBundle:
    """Runnable session plus meta graph with populated signature defs."""

    session: SessionLike
    meta_graph_def: MetaGraphDefLike
    signature_defs: SignatureDefMap
    is_session_bundle: bool = True

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
