"""Legacy session bundle manifest schema and decoding into domain types.

The ``tensorflow.serving`` manifest messages are no longer shipped with
TensorFlow, so the schema is registered with the protobuf runtime from a
descriptor built here. Field names and numbers follow the published
``manifest.proto`` so packed payloads written by the legacy exporter parse
unchanged.
"""

from __future__ import annotations

from typing import assert_never

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

from bundle_shim.signatures import (
    ClassificationSignature,
    GenericSignature,
    LegacySignature,
    LegacySignatureSet,
    RegressionSignature,
    TensorRef,
)

_PACKAGE = "tensorflow.serving"
_FIELD = descriptor_pb2.FieldDescriptorProto


def _qualified(name: str) -> str:
    return f".{_PACKAGE}.{name}"


def _add_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    type_name: str | None = None,
    *,
    field_type: int = _FIELD.TYPE_MESSAGE,
    label: int = _FIELD.LABEL_OPTIONAL,
    oneof_index: int | None = None,
) -> None:
    field = message.field.add()
    field.name = name
    field.number = number
    field.type = field_type
    field.label = label
    if type_name is not None:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index


def _add_map_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    value_type_name: str,
) -> None:
    entry = message.nested_type.add()
    entry.name = "".join(part.capitalize() for part in name.split("_")) + "Entry"
    entry.options.map_entry = True
    _add_field(entry, "key", 1, field_type=_FIELD.TYPE_STRING)
    _add_field(entry, "value", 2, value_type_name)
    _add_field(
        message,
        name,
        number,
        _qualified(f"{message.name}.{entry.name}"),
        label=_FIELD.LABEL_REPEATED,
    )


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = "tensorflow_serving/session_bundle/manifest.proto"
    file_proto.package = _PACKAGE
    file_proto.syntax = "proto3"

    signatures = file_proto.message_type.add()
    signatures.name = "Signatures"
    _add_field(signatures, "default_signature", 1, _qualified("Signature"))
    _add_map_field(signatures, "named_signatures", 2, _qualified("Signature"))

    binding = file_proto.message_type.add()
    binding.name = "TensorBinding"
    _add_field(binding, "tensor_name", 1, field_type=_FIELD.TYPE_STRING)

    asset_file = file_proto.message_type.add()
    asset_file.name = "AssetFile"
    _add_field(asset_file, "tensor_binding", 1, _qualified("TensorBinding"))
    _add_field(asset_file, "filename", 2, field_type=_FIELD.TYPE_STRING)

    signature = file_proto.message_type.add()
    signature.name = "Signature"
    signature.oneof_decl.add().name = "type"
    for number, (name, type_name) in enumerate(
        (
            ("regression_signature", "RegressionSignature"),
            ("classification_signature", "ClassificationSignature"),
            ("generic_signature", "GenericSignature"),
        ),
        start=1,
    ):
        _add_field(signature, name, number, _qualified(type_name), oneof_index=0)

    regression = file_proto.message_type.add()
    regression.name = "RegressionSignature"
    _add_field(regression, "input", 1, _qualified("TensorBinding"))
    _add_field(regression, "output", 2, _qualified("TensorBinding"))

    classification = file_proto.message_type.add()
    classification.name = "ClassificationSignature"
    _add_field(classification, "input", 1, _qualified("TensorBinding"))
    _add_field(classification, "classes", 2, _qualified("TensorBinding"))
    _add_field(classification, "scores", 3, _qualified("TensorBinding"))

    generic = file_proto.message_type.add()
    generic.name = "GenericSignature"
    _add_map_field(generic, "map", 1, _qualified("TensorBinding"))

    return file_proto


# Private pool: a process may already hold a generated manifest module.
_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_descriptor().SerializeToString())


def _message_class(name: str) -> type[Message]:
    return message_factory.GetMessageClass(
        _POOL.FindMessageTypeByName(f"{_PACKAGE}.{name}")
    )


Signatures = _message_class("Signatures")
Signature = _message_class("Signature")
TensorBinding = _message_class("TensorBinding")
AssetFile = _message_class("AssetFile")


def _tensor_ref(binding: Message) -> TensorRef:
    return TensorRef(name=binding.tensor_name)


def signature_from_proto(signature: Message) -> LegacySignature | None:
    """Decode a ``Signature`` message; ``None`` when no variant is set."""
    kind = signature.WhichOneof("type")
    if kind == "regression_signature":
        regression = signature.regression_signature
        return RegressionSignature(
            input=_tensor_ref(regression.input),
            output=_tensor_ref(regression.output),
        )
    if kind == "classification_signature":
        classification = signature.classification_signature
        return ClassificationSignature(
            input=_tensor_ref(classification.input),
            classes=_tensor_ref(classification.classes),
            scores=_tensor_ref(classification.scores),
        )
    if kind == "generic_signature":
        return GenericSignature(
            bindings={
                key: _tensor_ref(binding)
                for key, binding in signature.generic_signature.map.items()
            }
        )
    return None


def signatures_from_proto(signatures: Message) -> LegacySignatureSet:
    """Decode a ``Signatures`` message into an immutable signature set."""
    default = (
        signature_from_proto(signatures.default_signature)
        if signatures.HasField("default_signature")
        else None
    )
    named: dict[str, LegacySignature] = {}
    for key, signature in signatures.named_signatures.items():
        decoded = signature_from_proto(signature)
        if decoded is not None:
            named[key] = decoded
    return LegacySignatureSet(default=default, named=named)


def _fill_signature(target: Message, signature: LegacySignature) -> None:
    match signature:
        case RegressionSignature(input=input_ref, output=output_ref):
            target.regression_signature.input.tensor_name = input_ref.name
            target.regression_signature.output.tensor_name = output_ref.name
        case ClassificationSignature(input=input_ref, classes=classes, scores=scores):
            target.classification_signature.input.tensor_name = input_ref.name
            target.classification_signature.classes.tensor_name = classes.name
            target.classification_signature.scores.tensor_name = scores.name
        case GenericSignature(bindings=bindings):
            generic = target.generic_signature
            generic.SetInParent()
            for key, ref in bindings.items():
                generic.map[key].tensor_name = ref.name
        case _:
            assert_never(signature)


def signatures_to_proto(signature_set: LegacySignatureSet) -> Message:
    """Encode a signature set as a legacy ``Signatures`` message."""
    message = Signatures()
    if signature_set.default is not None:
        _fill_signature(message.default_signature, signature_set.default)
    for key, signature in signature_set.named.items():
        _fill_signature(message.named_signatures[key], signature)
    return message
