"""TensorFlow-backed loaders for legacy session bundles and SavedModels."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from google.protobuf.message import DecodeError

from bundle_shim.adapters.metadata import signature_defs_from_meta_graph
from bundle_shim.application.options import LoadOptions
from bundle_shim.application.results import ModelBundle, SessionBundle
from bundle_shim.constants import SHIM_CONSTANTS
from bundle_shim.errors import DependencyError, NotFoundError
from bundle_shim.manifest import AssetFile
from bundle_shim.types import MetaGraphDefLike, SessionLike

logger = logging.getLogger(__name__)


def _import_tensorflow() -> Any:
    try:
        import tensorflow as tf
    except Exception as exc:
        raise DependencyError(
            "TensorFlow is required to load model exports."
        ) from exc
    return tf


def maybe_saved_model_directory(export_dir: Path) -> bool:
    """Return ``True`` when ``export_dir`` holds a SavedModel proto."""
    return (export_dir / SHIM_CONSTANTS.saved_model_filename_pb).is_file() or (
        export_dir / SHIM_CONSTANTS.saved_model_filename_pbtxt
    ).is_file()


def resolve_variables_path(export_dir: Path) -> Path | None:
    """Return the checkpoint path to restore from, or ``None`` when absent.

    V2 checkpoints are addressed by their ``export`` prefix; V1 sharded
    checkpoints by the ``export-?????-of-?????`` pattern.
    """
    prefix = export_dir / SHIM_CONSTANTS.variables_filename_v2
    index = prefix.with_name(prefix.name + SHIM_CONSTANTS.variables_index_suffix)
    if index.is_file():
        return prefix
    if any(export_dir.glob(SHIM_CONSTANTS.variables_filename_pattern)):
        return export_dir / SHIM_CONSTANTS.variables_filename_pattern
    return None


def is_possible_export_directory(export_dir: Path) -> bool:
    """Return ``True`` when ``export_dir`` holds a legacy ``export.meta``.

    The variables checkpoint is optional: graphs without a saver have none.
    """
    return (export_dir / SHIM_CONSTANTS.meta_graph_def_filename).is_file()


def _asset_feeds(meta_graph_def: MetaGraphDefLike, export_dir: Path) -> dict[str, str]:
    collection_def = meta_graph_def.collection_def
    if SHIM_CONSTANTS.assets_key not in collection_def:
        return {}
    assets_dir = export_dir / SHIM_CONSTANTS.assets_directory
    feeds: dict[str, str] = {}
    for packed in collection_def[SHIM_CONSTANTS.assets_key].any_list.value:
        asset = AssetFile()
        if not packed.Unpack(asset):
            logger.warning("Skipping asset with unexpected type url %r.", packed.type_url)
            continue
        feeds[asset.tensor_binding.tensor_name] = str(assets_dir / asset.filename)
    return feeds


class TensorflowSessionBundleLoader:
    """Load a legacy session bundle export into a TensorFlow session."""

    def read_meta_graph(self, export_dir: Path) -> MetaGraphDefLike:
        """Parse the ``export.meta`` meta graph of a legacy export.

        Parameters
        ----------
        export_dir : Path
            Legacy export directory.

        Returns
        -------
        MetaGraphDefLike
            Parsed ``MetaGraphDef`` proto.

        Raises
        ------
        NotFoundError
            If the meta graph file is missing or unreadable.
        """
        meta_graph_path = export_dir / SHIM_CONSTANTS.meta_graph_def_filename
        if not meta_graph_path.is_file():
            raise NotFoundError(f"Expected meta graph file missing: {meta_graph_path}")

        tf = _import_tensorflow()
        meta_graph_def = tf.compat.v1.MetaGraphDef()
        try:
            meta_graph_def.ParseFromString(meta_graph_path.read_bytes())
        except (OSError, DecodeError) as exc:
            raise NotFoundError(
                f"Unable to read meta graph {meta_graph_path}: {exc}"
            ) from exc
        return meta_graph_def

    def load(self, export_dir: Path, options: LoadOptions) -> SessionBundle:
        """Create a session, restore variables and run the init op.

        Parameters
        ----------
        export_dir : Path
            Legacy export directory.
        options : LoadOptions
            Session target and configuration.

        Returns
        -------
        SessionBundle
            Session holding the restored graph and the export's meta graph.

        Raises
        ------
        NotFoundError
            If the directory or meta graph is missing, or the meta graph has
            a saver but no variables checkpoint exists.
        """
        if not export_dir.is_dir():
            raise NotFoundError(f"Export directory not found: {export_dir}")
        meta_graph_def = self.read_meta_graph(export_dir)
        variables_path = resolve_variables_path(export_dir)
        if variables_path is None and meta_graph_def.saver_def.restore_op_name:
            raise NotFoundError(f"Expected variables checkpoint missing in {export_dir}")

        tf = _import_tensorflow()
        graph = tf.Graph()
        with graph.as_default():
            tf.compat.v1.import_graph_def(meta_graph_def.graph_def, name="")
        session = tf.compat.v1.Session(
            target=options.target, graph=graph, config=options.config
        )
        try:
            self._restore_variables(session, meta_graph_def, variables_path)
            self._run_init_op(session, meta_graph_def, export_dir)
        except tf.errors.NotFoundError as exc:
            session.close()
            raise NotFoundError(
                f"Unable to restore session bundle from {export_dir}: {exc}"
            ) from exc
        except Exception:
            session.close()
            raise

        logger.info("Loaded legacy session bundle from %s", export_dir)
        return SessionBundle(session=session, meta_graph_def=meta_graph_def)

    def _restore_variables(
        self,
        session: SessionLike,
        meta_graph_def: MetaGraphDefLike,
        variables_path: Path | None,
    ) -> None:
        saver_def = meta_graph_def.saver_def
        if not saver_def.restore_op_name or variables_path is None:
            logger.debug("Meta graph has no saver; nothing to restore.")
            return
        logger.debug("Restoring variables from %s", variables_path)
        session.run(
            saver_def.restore_op_name,
            feed_dict={saver_def.filename_tensor_name: str(variables_path)},
        )

    def _run_init_op(
        self,
        session: SessionLike,
        meta_graph_def: MetaGraphDefLike,
        export_dir: Path,
    ) -> None:
        collection_def = meta_graph_def.collection_def
        if SHIM_CONSTANTS.init_op_key not in collection_def:
            return
        init_ops = collection_def[SHIM_CONSTANTS.init_op_key].node_list.value
        if not init_ops:
            return
        # Several init ops are tolerated rather than rejected; only the first runs.
        if len(init_ops) > 1:
            logger.warning(
                "Expected one serving init op, found %d; running %r.",
                len(init_ops),
                init_ops[0],
            )
        session.run(init_ops[0], feed_dict=_asset_feeds(meta_graph_def, export_dir))


class TensorflowSavedModelLoader:
    """Load a SavedModel directory into a TensorFlow session."""

    def load(self, export_dir: Path, options: LoadOptions) -> ModelBundle:
        """Load the meta graph matching ``options.tags``.

        Parameters
        ----------
        export_dir : Path
            SavedModel directory.
        options : LoadOptions
            Session target, configuration and meta graph tags.

        Returns
        -------
        ModelBundle
            Bundle whose signature defs come from the SavedModel itself.
        """
        if not maybe_saved_model_directory(export_dir):
            raise NotFoundError(f"No SavedModel found in {export_dir}")

        tf = _import_tensorflow()
        graph = tf.Graph()
        session = tf.compat.v1.Session(
            target=options.target, graph=graph, config=options.config
        )
        try:
            with graph.as_default():
                meta_graph_def = tf.compat.v1.saved_model.loader.load(
                    session, sorted(options.tags), str(export_dir)
                )
        except (tf.errors.NotFoundError, OSError) as exc:
            session.close()
            raise NotFoundError(
                f"Unable to load SavedModel from {export_dir}: {exc}"
            ) from exc
        except Exception:
            session.close()
            raise

        logger.info("Loaded SavedModel from %s", export_dir)
        return ModelBundle(
            session=session,
            meta_graph_def=meta_graph_def,
            signature_defs=signature_defs_from_meta_graph(meta_graph_def),
            is_session_bundle=False,
        )
