"""Legacy signature to signature-def conversion rules."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping

from bundle_shim.converters.builder import (
    add_input_to_signature_def,
    add_output_to_signature_def,
)
from bundle_shim.converters.default_signature import (
    convert_default_signature_to_signature_def,
)
from bundle_shim.converters.named_signatures import (
    convert_named_signatures_to_signature_def,
)
from bundle_shim.signatures import LegacySignatureSet, SignatureDef

logger = logging.getLogger(__name__)


def convert_signatures_to_signature_defs(
    signatures: LegacySignatureSet,
    signature_defs: MutableMapping[str, SignatureDef],
) -> None:
    """Run the default then the named conversion into ``signature_defs``.

    The order is fixed: when both rules apply, the named (predict) signature
    def replaces the default one under the shared key.
    """
    convert_default_signature_to_signature_def(signatures, signature_defs)
    convert_named_signatures_to_signature_def(signatures, signature_defs)
    for key, signature_def in signature_defs.items():
        logger.debug(
            "Converted legacy signatures into %r (%s).", key, signature_def.method_name
        )


__all__ = [
    "add_input_to_signature_def",
    "add_output_to_signature_def",
    "convert_default_signature_to_signature_def",
    "convert_named_signatures_to_signature_def",
    "convert_signatures_to_signature_defs",
]
