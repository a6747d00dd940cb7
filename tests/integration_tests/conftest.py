"""Fixtures writing small TensorFlow exports in the legacy and SavedModel formats."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from bundle_shim.signatures import (
    LegacySignatureSet,
    RegressionSignature,
    TensorRef,
)

INPUT_TENSOR = "foo-input:0"
OUTPUT_TENSOR = "foo-output:0"

REGRESSION_SIGNATURES = LegacySignatureSet(
    default=RegressionSignature(
        input=TensorRef(INPUT_TENSOR), output=TensorRef(OUTPUT_TENSOR)
    )
)


def _half_plus_two(tf: Any) -> tuple[Any, Any]:
    """Build ``y = 0.5 * x + 2`` in the current default graph."""
    a = tf.compat.v1.Variable(0.5, name="a")
    b = tf.compat.v1.Variable(2.0, name="b")
    x = tf.compat.v1.placeholder(tf.float32, shape=[None, 1], name="foo-input")
    y = tf.add(tf.multiply(a, x), b, name="foo-output")
    return x, y


@pytest.fixture
def tf() -> Any:
    """Return TensorFlow or skip the test."""
    return pytest.importorskip("tensorflow")


@pytest.fixture
def write_legacy_export(tf: Any) -> Callable[..., Path]:
    """Write a half-plus-two legacy export with the given signatures."""

    def _write(
        export_dir: Path,
        signatures: LegacySignatureSet | None = REGRESSION_SIGNATURES,
        *,
        with_variables: bool = True,
        sharded_v1: bool = False,
    ) -> Path:
        from bundle_shim.constants import INIT_OP_KEY, SIGNATURES_KEY
        from bundle_shim.manifest import signatures_to_proto

        export_dir.mkdir(parents=True, exist_ok=True)
        graph = tf.Graph()
        with graph.as_default():
            _half_plus_two(tf)
            init_op = tf.group(name="serving_init")
            if sharded_v1:
                saver = tf.compat.v1.train.Saver(
                    sharded=True, write_version=tf.compat.v1.train.SaverDef.V1
                )
            else:
                saver = tf.compat.v1.train.Saver()
            with tf.compat.v1.Session(graph=graph) as session:
                session.run(tf.compat.v1.global_variables_initializer())
                if with_variables:
                    saver.save(
                        session, str(export_dir / "export"), write_meta_graph=False
                    )
            meta_graph_def = saver.export_meta_graph(clear_devices=True)

        if signatures is not None:
            packed = meta_graph_def.collection_def[SIGNATURES_KEY].any_list.value.add()
            packed.Pack(signatures_to_proto(signatures))
        meta_graph_def.collection_def[INIT_OP_KEY].node_list.value.append(init_op.name)
        (export_dir / "export.meta").write_bytes(meta_graph_def.SerializeToString())
        return export_dir

    return _write


@pytest.fixture
def write_saved_model(tf: Any) -> Callable[[Path], Path]:
    """Write a half-plus-two SavedModel with a predict signature def."""

    def _write(export_dir: Path) -> Path:
        graph = tf.Graph()
        with graph.as_default():
            x, y = _half_plus_two(tf)
            builder = tf.compat.v1.saved_model.Builder(str(export_dir))
            with tf.compat.v1.Session(graph=graph) as session:
                session.run(tf.compat.v1.global_variables_initializer())
                builder.add_meta_graph_and_variables(
                    session,
                    ["serve"],
                    signature_def_map={
                        "serving_default": (
                            tf.compat.v1.saved_model.predict_signature_def(
                                inputs={"x": x}, outputs={"y": y}
                            )
                        )
                    },
                )
            builder.save()
        return export_dir

    return _write
