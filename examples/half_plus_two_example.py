#!/usr/bin/env python3
"""Example script writing a legacy half-plus-two export and loading it."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import tensorflow as tf

from bundle_shim import load_model_bundle
from bundle_shim.constants import SIGNATURES_KEY
from bundle_shim.manifest import signatures_to_proto
from bundle_shim.signatures import LegacySignatureSet, RegressionSignature, TensorRef


def write_legacy_export(export_dir: Path) -> None:
    """Write ``y = 0.5 * x + 2`` with a legacy regression signature."""
    export_dir.mkdir(parents=True, exist_ok=True)
    graph = tf.Graph()
    with graph.as_default():
        a = tf.compat.v1.Variable(0.5, name="a")
        b = tf.compat.v1.Variable(2.0, name="b")
        x = tf.compat.v1.placeholder(tf.float32, shape=[None, 1], name="x")
        tf.add(tf.multiply(a, x), b, name="y")
        saver = tf.compat.v1.train.Saver()
        with tf.compat.v1.Session(graph=graph) as session:
            session.run(tf.compat.v1.global_variables_initializer())
            saver.save(session, str(export_dir / "export"), write_meta_graph=False)
        meta_graph_def = saver.export_meta_graph(clear_devices=True)

    signatures = LegacySignatureSet(
        default=RegressionSignature(input=TensorRef("x:0"), output=TensorRef("y:0"))
    )
    packed = meta_graph_def.collection_def[SIGNATURES_KEY].any_list.value.add()
    packed.Pack(signatures_to_proto(signatures))
    (export_dir / "export.meta").write_bytes(meta_graph_def.SerializeToString())


def main() -> None:
    """Load a legacy export and run it through its upgraded signature def."""
    print("=" * 60)
    print("Legacy Session Bundle Loading Example")
    print("=" * 60)

    export_dir = Path("outputs/half_plus_two/00000123")
    write_legacy_export(export_dir)

    bundle = load_model_bundle(export_dir)
    try:
        signature_def = bundle.signature_defs.get("serving_default")
        if signature_def is None:
            raise SystemExit("FAIL: no serving_default signature def was produced.")
        print(f"Method: {signature_def.method_name}")

        output = bundle.session.run(
            signature_def.outputs["outputs"].name,
            feed_dict={
                signature_def.inputs["inputs"].name: [[0.0], [1.0], [2.0], [3.0]]
            },
        )
    finally:
        bundle.close()

    expected = np.array([2.0, 2.5, 3.0, 3.5])
    actual = np.asarray(output).ravel()
    if not np.allclose(actual, expected):
        raise SystemExit(f"FAIL: unexpected output {actual.tolist()}.")

    print(f"PASS: {actual.tolist()}")


if __name__ == "__main__":
    main()
