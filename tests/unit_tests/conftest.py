"""Fakes for meta graph protos so unit tests run without TensorFlow."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from types import SimpleNamespace

import pytest
from google.protobuf import any_pb2
from google.protobuf.message import Message

from bundle_shim.constants import SIGNATURES_KEY
from bundle_shim.manifest import signatures_to_proto
from bundle_shim.signatures import LegacySignatureSet


class FakeTensorInfo:
    """Stand-in for ``TensorInfo`` protos."""

    def __init__(self) -> None:
        self.name = ""


class FakeSignatureDefProto:
    """Stand-in for ``SignatureDef`` protos."""

    def __init__(self) -> None:
        self.Clear()

    def Clear(self) -> None:  # noqa: N802 - mirrors the protobuf API
        self.inputs: defaultdict[str, FakeTensorInfo] = defaultdict(FakeTensorInfo)
        self.outputs: defaultdict[str, FakeTensorInfo] = defaultdict(FakeTensorInfo)
        self.method_name = ""


class FakeMetaGraphDef:
    """Stand-in for ``MetaGraphDef`` with collection and signature maps."""

    def __init__(
        self,
        packed: dict[str, Iterable[any_pb2.Any]] | None = None,
        nodes: dict[str, Iterable[str]] | None = None,
    ) -> None:
        self.collection_def: dict[str, SimpleNamespace] = {}
        for key, values in (packed or {}).items():
            self.collection_def[key] = SimpleNamespace(
                any_list=SimpleNamespace(value=list(values)),
                node_list=SimpleNamespace(value=[]),
            )
        for key, names in (nodes or {}).items():
            self.collection_def[key] = SimpleNamespace(
                any_list=SimpleNamespace(value=[]),
                node_list=SimpleNamespace(value=list(names)),
            )
        self.signature_def: defaultdict[str, FakeSignatureDefProto] = defaultdict(
            FakeSignatureDefProto
        )
        self.saver_def = SimpleNamespace(restore_op_name="", filename_tensor_name="")


def pack(message: Message) -> any_pb2.Any:
    """Pack a message the way the legacy exporter stored it."""
    packed = any_pb2.Any()
    packed.Pack(message)
    return packed


@pytest.fixture
def make_meta_graph() -> Callable[..., FakeMetaGraphDef]:
    """Build a fake meta graph holding the given legacy signatures."""

    def _make(
        signature_set: LegacySignatureSet | None = None,
        *,
        packed: Iterable[any_pb2.Any] | None = None,
    ) -> FakeMetaGraphDef:
        collections: dict[str, list[any_pb2.Any]] = {}
        if signature_set is not None:
            collections[SIGNATURES_KEY] = [pack(signatures_to_proto(signature_set))]
        if packed is not None:
            collections[SIGNATURES_KEY] = list(packed)
        return FakeMetaGraphDef(collections)

    return _make


@pytest.fixture
def pack_message() -> Callable[[Message], any_pb2.Any]:
    """Expose ``pack`` to test modules."""
    return pack


@pytest.fixture
def fake_meta_graph_cls() -> type[FakeMetaGraphDef]:
    """Expose the fake meta graph type for tests needing custom collections."""
    return FakeMetaGraphDef
