#!/usr/bin/env python3
"""
bundle_shim.cli.cli

Typer-based CLI for inspecting and loading legacy session bundle exports.

The core conversion rules import without TensorFlow; commands that read
exports require the ``tensorflow`` extra.

Examples
--------
Install core + CLI only:

    uv pip install -e ".[cli]"

Install CLI + TensorFlow support:

    uv pip install -e ".[cli,tensorflow]"
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import typer

from bundle_shim.errors import BundleShimError

app = typer.Typer(
    name="bundle-shim",
    help="Upgrade legacy session bundle signatures to SavedModel signature defs.",
    no_args_is_help=True,
)

EXPORT_DIR_HELP = "Path to a legacy session bundle (or SavedModel) export directory."
TENSORFLOW_PURPOSE = "reading and loading model exports"


# -----------------------------
# Dependency checks / utilities
# -----------------------------
@dataclass(frozen=True)
class MissingDep:
    """Represent a missing optional dependency."""

    import_name: str
    extra_name: str
    purpose: str


def _is_importable(module: str) -> bool:
    """Check whether a module can be resolved.

    Parameters
    ----------
    module : str
        Module name to resolve.

    Returns
    -------
    bool
        ``True`` if the module can be imported, otherwise ``False``.
    """
    try:
        import importlib.util

        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


def _require_deps(missing: Sequence[MissingDep]) -> None:
    """Raise a Typer error if any required deps are missing.

    Parameters
    ----------
    missing : Sequence[MissingDep]
        Dependency requirements for a command.
    """
    not_found = [d for d in missing if not _is_importable(d.import_name)]
    if not not_found:
        return

    extras = sorted({d.extra_name for d in not_found})
    details = "\n".join(
        f"- Missing '{d.import_name}' ({d.purpose}). Install extra: .[{d.extra_name}]"
        for d in not_found
    )
    uv_hint = f'uv pip install -e ".[cli,{",".join(extras)}]"'
    pip_hint = f'pip install "session-bundle-shim[cli,{",".join(extras)}]"'

    msg = (
        "Missing optional dependencies for this command.\n\n"
        f"{details}\n\n"
        "Install with uv (recommended):\n"
        f"  {uv_hint}\n\n"
        "Or with pip:\n"
        f"  {pip_hint}\n"
    )
    raise typer.BadParameter(msg)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error and return the process exit code.

    Parameters
    ----------
    exc : Exception
        Exception raised while inspecting or loading.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _dump_signature_defs(signature_defs: dict[str, object]) -> str:
    return json.dumps(signature_defs, indent=2, sort_keys=True)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", help="Show debug logs and full tracebacks on error."
    ),
) -> None:
    """Initialize shared CLI state and logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("inspect")
def inspect_cmd(
    ctx: typer.Context,
    export_dir: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        help=EXPORT_DIR_HELP,
    ),
) -> None:
    """Print the signature defs a legacy export upgrades to, without loading it.

    Notes
    -----
    - Requires the `tensorflow` extra to parse ``export.meta``.
    - Prints ``{}`` when no legacy signature has a signature def mapping.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    _require_deps([MissingDep("tensorflow", "tensorflow", TENSORFLOW_PURPOSE)])

    try:
        from bundle_shim.api import inspect_legacy_signature_defs

        signature_defs = inspect_legacy_signature_defs(export_dir)
        typer.echo(
            _dump_signature_defs(
                {key: value.to_dict() for key, value in signature_defs.items()}
            )
        )
    except BundleShimError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("load")
def load_cmd(
    ctx: typer.Context,
    export_dir: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        help=EXPORT_DIR_HELP,
    ),
    tags: list[str] | None = typer.Option(
        None, "--tag", help="SavedModel meta graph tag (repeatable). Default: serve."
    ),
    target: str = typer.Option("", "--target", help="TensorFlow session target."),
) -> None:
    """Load an export into a session and print its signature defs.

    Notes
    -----
    - Requires the `tensorflow` extra.
    - SavedModel directories are loaded as-is; legacy exports go through the
      signature upgrade.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    _require_deps([MissingDep("tensorflow", "tensorflow", TENSORFLOW_PURPOSE)])

    try:
        from bundle_shim.api import load_model_bundle

        bundle = load_model_bundle(export_dir, tags=tags or None, target=target)
        try:
            kind = "SessionBundle" if bundle.is_session_bundle else "SavedModel"
            typer.echo(f"✓ Loaded {kind}: {export_dir}")
            typer.echo(
                _dump_signature_defs(
                    {key: value.to_dict() for key, value in bundle.signature_defs.items()}
                )
            )
        finally:
            bundle.close()
    except BundleShimError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions."""
    import importlib.metadata as metadata

    modules = [
        "session-bundle-shim",
        "tensorflow",
        "protobuf",
        "pydantic",
        "typer",
    ]

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in modules:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")


if __name__ == "__main__":
    app()
