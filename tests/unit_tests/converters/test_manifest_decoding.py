"""Unit tests for decoding legacy manifest messages."""

from __future__ import annotations

import pytest

from bundle_shim.manifest import (
    Signature,
    Signatures,
    signature_from_proto,
    signatures_from_proto,
    signatures_to_proto,
)
from bundle_shim.signatures import (
    ClassificationSignature,
    GenericSignature,
    LegacySignatureSet,
    RegressionSignature,
    TensorRef,
)


def test_legacy_wire_bytes_decode_with_unset_bindings_as_empty() -> None:
    """Parse exporter-written bytes; an unset binding reads as an empty name."""
    message = Signatures.FromString(b"\x0a\x07\x0a\x05\x0a\x03\x0a\x01x")

    signatures = signatures_from_proto(message)

    assert signatures.default == RegressionSignature(
        input=TensorRef("x"), output=TensorRef("")
    )
    assert dict(signatures.named) == {}


def test_named_generic_signature_decodes_from_wire_bytes() -> None:
    """Parse a named generic signature keyed ``inputs``."""
    message = Signatures.FromString(
        b"\x12\x16\x0a\x06inputs\x12\x0c\x1a\x0a\x0a\x08\x0a\x01k\x12\x03\x0a\x01t"
    )

    signatures = signatures_from_proto(message)

    assert signatures.default is None
    assert signatures.named["inputs"] == GenericSignature(bindings={"k": TensorRef("t")})


def test_signature_without_variant_decodes_to_none() -> None:
    """A ``Signature`` with no active variant has no domain counterpart."""
    assert signature_from_proto(Signature()) is None


def test_named_entries_without_variant_are_dropped() -> None:
    """Named entries with no active variant are omitted."""
    message = Signatures()
    message.named_signatures["empty"].SetInParent()
    message.named_signatures["kept"].regression_signature.input.tensor_name = "x:0"

    signatures = signatures_from_proto(message)

    assert set(signatures.named) == {"kept"}


def test_encoded_record_decodes_to_equal_signature_set() -> None:
    """Encoding a mixed record and decoding it gives back the same record."""
    record = LegacySignatureSet(
        default=ClassificationSignature(
            input=TensorRef("in:0"),
            classes=TensorRef("classes:0"),
            scores=TensorRef("scores:0"),
        ),
        named={
            "inputs": GenericSignature(bindings={"images": TensorRef("images:0")}),
            "empty": GenericSignature(),
        },
    )

    decoded = signatures_from_proto(
        Signatures.FromString(signatures_to_proto(record).SerializeToString())
    )

    assert decoded == record


def test_signature_sets_are_read_only() -> None:
    """Decoded mappings cannot be mutated by consumers."""
    signatures = LegacySignatureSet(
        named={"inputs": GenericSignature(bindings={"x": TensorRef("x:0")})}
    )

    with pytest.raises(TypeError):
        signatures.named["other"] = GenericSignature()  # type: ignore[index]
    assert "other" not in signatures.named
