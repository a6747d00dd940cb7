"""Mutators that insert tensor references into a signature definition."""

from __future__ import annotations

from bundle_shim.signatures import SignatureDef, TensorInfo


def add_input_to_signature_def(
    tensor_name: str, map_key: str, signature_def: SignatureDef
) -> None:
    """Bind ``tensor_name`` under ``map_key`` in the inputs; last write wins."""
    signature_def.inputs[map_key] = TensorInfo(name=tensor_name)


def add_output_to_signature_def(
    tensor_name: str, map_key: str, signature_def: SignatureDef
) -> None:
    """Bind ``tensor_name`` under ``map_key`` in the outputs; last write wins."""
    signature_def.outputs[map_key] = TensorInfo(name=tensor_name)
