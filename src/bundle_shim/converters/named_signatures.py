"""Up-conversion of legacy named signatures keyed ``inputs`` and ``outputs``."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping

from bundle_shim.constants import SHIM_CONSTANTS
from bundle_shim.converters.builder import (
    add_input_to_signature_def,
    add_output_to_signature_def,
)
from bundle_shim.signatures import (
    GenericSignature,
    LegacySignatureSet,
    SignatureDef,
)

logger = logging.getLogger(__name__)


def convert_named_signatures_to_signature_def(
    signatures: LegacySignatureSet,
    signature_defs: MutableMapping[str, SignatureDef],
) -> None:
    """Convert the ``inputs``/``outputs`` named signatures into a predict def.

    Parameters
    ----------
    signatures : LegacySignatureSet
        Decoded legacy signatures.
    signature_defs : MutableMapping[str, SignatureDef]
        Signature definitions to populate in place. An existing default entry
        is replaced.

    Notes
    -----
    Both named signatures must exist, both must be generic, and both must
    bind at least one tensor. Any other shape is left unconverted.
    """
    inputs = signatures.named.get(SHIM_CONSTANTS.signature_inputs)
    outputs = signatures.named.get(SHIM_CONSTANTS.signature_outputs)
    if inputs is None or outputs is None:
        return
    if not isinstance(inputs, GenericSignature) or not isinstance(
        outputs, GenericSignature
    ):
        logger.debug("Named inputs/outputs signatures are not generic; skipping.")
        return
    if not inputs.bindings or not outputs.bindings:
        logger.debug("Named inputs/outputs signatures bind no tensors; skipping.")
        return

    signature_def = SignatureDef(method_name=SHIM_CONSTANTS.predict_method_name)
    for map_key, tensor_ref in inputs.bindings.items():
        add_input_to_signature_def(tensor_ref.name, map_key, signature_def)
    for map_key, tensor_ref in outputs.bindings.items():
        add_output_to_signature_def(tensor_ref.name, map_key, signature_def)

    signature_defs[SHIM_CONSTANTS.default_signature_def_key] = signature_def
