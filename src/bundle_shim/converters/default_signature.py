"""Up-conversion of the legacy default signature."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import assert_never

from bundle_shim.constants import SHIM_CONSTANTS
from bundle_shim.converters.builder import (
    add_input_to_signature_def,
    add_output_to_signature_def,
)
from bundle_shim.signatures import (
    ClassificationSignature,
    GenericSignature,
    LegacySignatureSet,
    RegressionSignature,
    SignatureDef,
)

logger = logging.getLogger(__name__)


def _regression_signature_def(signature: RegressionSignature) -> SignatureDef:
    signature_def = SignatureDef(method_name=SHIM_CONSTANTS.regress_method_name)
    add_input_to_signature_def(
        signature.input.name, SHIM_CONSTANTS.signature_inputs, signature_def
    )
    add_output_to_signature_def(
        signature.output.name, SHIM_CONSTANTS.signature_outputs, signature_def
    )
    return signature_def


def _classification_signature_def(
    signature: ClassificationSignature,
) -> SignatureDef:
    signature_def = SignatureDef(method_name=SHIM_CONSTANTS.classify_method_name)
    add_input_to_signature_def(
        signature.input.name, SHIM_CONSTANTS.signature_inputs, signature_def
    )
    add_output_to_signature_def(
        signature.classes.name, SHIM_CONSTANTS.classify_output_classes, signature_def
    )
    add_output_to_signature_def(
        signature.scores.name, SHIM_CONSTANTS.classify_output_scores, signature_def
    )
    return signature_def


def convert_default_signature_to_signature_def(
    signatures: LegacySignatureSet,
    signature_defs: MutableMapping[str, SignatureDef],
) -> None:
    """Convert the legacy default signature into the default signature def.

    Parameters
    ----------
    signatures : LegacySignatureSet
        Decoded legacy signatures.
    signature_defs : MutableMapping[str, SignatureDef]
        Signature definitions to populate in place.

    Notes
    -----
    Regression and classification signatures map to the regress and classify
    methods. Generic default signatures carry no input/output roles and are
    left unconverted, as is a missing or empty default signature.
    """
    signature = signatures.default
    if signature is None:
        return

    match signature:
        case RegressionSignature():
            signature_def = _regression_signature_def(signature)
        case ClassificationSignature():
            signature_def = _classification_signature_def(signature)
        case GenericSignature():
            logger.debug("Generic default signature has no signature def mapping.")
            return
        case _:
            assert_never(signature)

    signature_defs[SHIM_CONSTANTS.default_signature_def_key] = signature_def
