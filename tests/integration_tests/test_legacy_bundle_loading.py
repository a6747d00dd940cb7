"""Integration tests loading real legacy exports through the shim."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from bundle_shim import load_legacy_session_bundle
from bundle_shim.application.results import ModelBundle
from bundle_shim.errors import NotFoundError
from bundle_shim.signatures import (
    GenericSignature,
    LegacySignatureSet,
    RegressionSignature,
    TensorRef,
)

INPUT_TENSOR = "foo-input:0"
OUTPUT_TENSOR = "foo-output:0"


def _run_half_plus_two(
    bundle: ModelBundle, input_name: str, output_name: str
) -> np.ndarray:
    output = bundle.session.run(
        output_name, feed_dict={input_name: [[0.0], [1.0], [2.0], [3.0]]}
    )
    return np.asarray(output).ravel()


def test_half_plus_two_regression_export(tmp_path: Path, write_legacy_export) -> None:
    """Load a regression export, upgrade it, and run it by signature def."""
    export_dir = write_legacy_export(tmp_path / "half_plus_two")

    bundle = load_legacy_session_bundle(export_dir)
    try:
        assert bundle.is_session_bundle is True
        signature_def = bundle.signature_defs["serving_default"]
        assert signature_def.method_name == "tensorflow/serving/regress"
        assert signature_def.inputs["inputs"].name == INPUT_TENSOR
        assert signature_def.outputs["outputs"].name == OUTPUT_TENSOR

        proto = bundle.meta_graph_def.signature_def["serving_default"]
        assert proto.method_name == "tensorflow/serving/regress"
        assert proto.inputs["inputs"].name == INPUT_TENSOR

        output = _run_half_plus_two(
            bundle,
            signature_def.inputs["inputs"].name,
            signature_def.outputs["outputs"].name,
        )
        np.testing.assert_allclose(output, [2.0, 2.5, 3.0, 3.5])
    finally:
        bundle.close()


def test_named_signatures_take_precedence(
    tmp_path: Path, write_legacy_export
) -> None:
    """A generic inputs/outputs pair yields a predict signature def."""
    signatures = LegacySignatureSet(
        default=RegressionSignature(
            input=TensorRef(INPUT_TENSOR), output=TensorRef(OUTPUT_TENSOR)
        ),
        named={
            "inputs": GenericSignature(bindings={"x": TensorRef(INPUT_TENSOR)}),
            "outputs": GenericSignature(bindings={"y": TensorRef(OUTPUT_TENSOR)}),
        },
    )
    export_dir = write_legacy_export(tmp_path / "named", signatures)

    bundle = load_legacy_session_bundle(export_dir)
    try:
        signature_def = bundle.signature_defs["serving_default"]
        assert signature_def.method_name == "tensorflow/serving/predict"
        output = _run_half_plus_two(
            bundle, signature_def.inputs["x"].name, signature_def.outputs["y"].name
        )
        np.testing.assert_allclose(output, [2.0, 2.5, 3.0, 3.5])
    finally:
        bundle.close()


def test_export_without_signatures_still_loads(
    tmp_path: Path, write_legacy_export
) -> None:
    """Exports with no legacy signatures load with an empty signature map."""
    export_dir = write_legacy_export(tmp_path / "bare", None)

    bundle = load_legacy_session_bundle(export_dir)
    try:
        assert bundle.signature_defs == {}
        output = _run_half_plus_two(bundle, INPUT_TENSOR, OUTPUT_TENSOR)
        np.testing.assert_allclose(output, [2.0, 2.5, 3.0, 3.5])
    finally:
        bundle.close()


def test_missing_variables_raise_not_found(
    tmp_path: Path, write_legacy_export
) -> None:
    """A legacy export without its checkpoint is reported as not found."""
    export_dir = write_legacy_export(tmp_path / "no_vars", with_variables=False)

    with pytest.raises(NotFoundError, match="variables checkpoint missing"):
        load_legacy_session_bundle(export_dir)


def test_missing_export_directory_raises_not_found(tmp_path: Path, tf) -> None:
    """A nonexistent export directory is reported as not found."""
    del tf
    with pytest.raises(NotFoundError):
        load_legacy_session_bundle(tmp_path / "missing")


def test_sharded_v1_checkpoint_export(tmp_path: Path, write_legacy_export) -> None:
    """Exports saved as V1 ``export-?????-of-?????`` shards restore and run."""
    export_dir = write_legacy_export(tmp_path / "sharded", sharded_v1=True)
    assert not (export_dir / "export.index").exists()
    assert list(export_dir.glob("export-?????-of-?????"))

    bundle = load_legacy_session_bundle(export_dir)
    try:
        signature_def = bundle.signature_defs["serving_default"]
        output = _run_half_plus_two(
            bundle,
            signature_def.inputs["inputs"].name,
            signature_def.outputs["outputs"].name,
        )
        np.testing.assert_allclose(output, [2.0, 2.5, 3.0, 3.5])
    finally:
        bundle.close()
