"""Shared type aliases and protocols for the TensorFlow collaborator boundary."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class SessionLike(Protocol):
    """Marker protocol for a runnable ``tf.compat.v1.Session``."""

    def run(
        self,
        fetches: object,
        feed_dict: Mapping[object, object] | None = None,
    ) -> object:
        """Run fetches against the session graph."""

    def close(self) -> None:
        """Release session resources."""


class MetaGraphDefLike(Protocol):
    """Marker protocol for ``tensorflow.core.protobuf.meta_graph_pb2.MetaGraphDef``."""


class ConfigProtoLike(Protocol):
    """Marker protocol for ``tf.compat.v1.ConfigProto``."""


type TagSet = frozenset[str]
