"""Reserved names shared by the legacy session bundle and SavedModel formats.

Every string here must match the serving runtime exactly.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShimConstants:
    """Read-only table of reserved keys, method names and file names."""

    # SignatureDef keys and method names.
    default_signature_def_key: str = "serving_default"
    signature_inputs: str = "inputs"
    signature_outputs: str = "outputs"
    classify_output_classes: str = "classes"
    classify_output_scores: str = "scores"
    regress_method_name: str = "tensorflow/serving/regress"
    classify_method_name: str = "tensorflow/serving/classify"
    predict_method_name: str = "tensorflow/serving/predict"

    # Legacy session bundle collections and files.
    signatures_key: str = "serving_signatures"
    assets_key: str = "serving_assets"
    init_op_key: str = "serving_init_op"
    meta_graph_def_filename: str = "export.meta"
    variables_filename_v2: str = "export"
    variables_filename_pattern: str = "export-?????-of-?????"
    variables_index_suffix: str = ".index"
    assets_directory: str = "assets"
    signatures_type_name: str = "tensorflow.serving.Signatures"

    # SavedModel.
    saved_model_filename_pb: str = "saved_model.pb"
    saved_model_filename_pbtxt: str = "saved_model.pbtxt"
    serve_tag: str = "serve"


SHIM_CONSTANTS = ShimConstants()

DEFAULT_SIGNATURE_DEF_KEY = SHIM_CONSTANTS.default_signature_def_key
SIGNATURE_INPUTS = SHIM_CONSTANTS.signature_inputs
SIGNATURE_OUTPUTS = SHIM_CONSTANTS.signature_outputs
CLASSIFY_OUTPUT_CLASSES = SHIM_CONSTANTS.classify_output_classes
CLASSIFY_OUTPUT_SCORES = SHIM_CONSTANTS.classify_output_scores
REGRESS_METHOD_NAME = SHIM_CONSTANTS.regress_method_name
CLASSIFY_METHOD_NAME = SHIM_CONSTANTS.classify_method_name
PREDICT_METHOD_NAME = SHIM_CONSTANTS.predict_method_name
SIGNATURES_KEY = SHIM_CONSTANTS.signatures_key
ASSETS_KEY = SHIM_CONSTANTS.assets_key
INIT_OP_KEY = SHIM_CONSTANTS.init_op_key
META_GRAPH_DEF_FILENAME = SHIM_CONSTANTS.meta_graph_def_filename
VARIABLES_FILENAME_V2 = SHIM_CONSTANTS.variables_filename_v2
VARIABLES_FILENAME_PATTERN = SHIM_CONSTANTS.variables_filename_pattern
ASSETS_DIRECTORY = SHIM_CONSTANTS.assets_directory
SIGNATURES_TYPE_NAME = SHIM_CONSTANTS.signatures_type_name
SAVED_MODEL_FILENAME_PB = SHIM_CONSTANTS.saved_model_filename_pb
SAVED_MODEL_FILENAME_PBTXT = SHIM_CONSTANTS.saved_model_filename_pbtxt
SERVE_TAG = SHIM_CONSTANTS.serve_tag
