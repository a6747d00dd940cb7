"""Legacy signature extraction from, and signature-def merging into, meta graphs."""

from __future__ import annotations

import logging

from google.protobuf.message import DecodeError

from bundle_shim.constants import SHIM_CONSTANTS
from bundle_shim.manifest import Signatures, signatures_from_proto
from bundle_shim.signatures import (
    LegacySignatureSet,
    SignatureDef,
    SignatureDefMap,
    TensorInfo,
)
from bundle_shim.types import MetaGraphDefLike

logger = logging.getLogger(__name__)


class LegacyMetadataExtractor:
    """Read the packed legacy ``Signatures`` record of a meta graph."""

    def extract(self, meta_graph_def: MetaGraphDefLike) -> LegacySignatureSet:
        """Decode the legacy signatures stored in the meta graph collections.

        Parameters
        ----------
        meta_graph_def : MetaGraphDefLike
            Meta graph whose ``collection_def`` may hold the
            ``serving_signatures`` collection.

        Returns
        -------
        LegacySignatureSet
            Decoded signatures, or an empty set when the collection is absent,
            empty, or does not hold a readable ``Signatures`` message.
        """
        collection_def = meta_graph_def.collection_def
        key = SHIM_CONSTANTS.signatures_key
        if key not in collection_def:
            return LegacySignatureSet()

        packed_values = collection_def[key].any_list.value
        if not packed_values:
            return LegacySignatureSet()

        packed = packed_values[0]
        message = Signatures()
        try:
            unpacked = packed.Unpack(message)
        except DecodeError as exc:
            logger.warning("Ignoring unreadable legacy signatures: %s", exc)
            return LegacySignatureSet()
        if not unpacked:
            logger.warning(
                "Ignoring legacy signatures with unexpected type url %r; expected %s.",
                packed.type_url,
                SHIM_CONSTANTS.signatures_type_name,
            )
            return LegacySignatureSet()
        return signatures_from_proto(message)


def merge_signature_defs(
    meta_graph_def: MetaGraphDefLike, signature_defs: SignatureDefMap
) -> None:
    """Write converted signature defs into ``meta_graph_def.signature_def``.

    Each written key is replaced as a whole; other keys are left untouched.
    """
    for key, signature_def in signature_defs.items():
        target = meta_graph_def.signature_def[key]
        target.Clear()
        for map_key, info in signature_def.inputs.items():
            target.inputs[map_key].name = info.name
        for map_key, info in signature_def.outputs.items():
            target.outputs[map_key].name = info.name
        target.method_name = signature_def.method_name


def signature_defs_from_meta_graph(meta_graph_def: MetaGraphDefLike) -> SignatureDefMap:
    """Return a domain view of the signature defs already in a meta graph."""
    return {
        key: SignatureDef(
            inputs={
                map_key: TensorInfo(name=info.name)
                for map_key, info in proto.inputs.items()
            },
            outputs={
                map_key: TensorInfo(name=info.name)
                for map_key, info in proto.outputs.items()
            },
            method_name=proto.method_name,
        )
        for key, proto in meta_graph_def.signature_def.items()
    }
