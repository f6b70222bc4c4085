#!/usr/bin/env python3
"""
ditto.cli.cli

Typer-based CLI converting DOCX documents to PDF through headless LibreOffice.

Each failure class exits with its own status code so scripts can branch on
it:

    0   success
    2   usage error
    3   converter binary not found
    4   input file not found
    5   invalid request or options
    6   conversion timed out
    7   converter exited non-zero
    8   converter produced no output
    9   output could not be moved into place
    10  output is not a PDF
    11  conversion cancelled

Examples
--------
    ditto convert report.docx
    ditto convert report.docx out/report.pdf --timeout 300
    DITTO_SOFFICE_BINARY=/opt/libreoffice/program/soffice ditto doctor
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from ditto.application.options import DEFAULT_CONVERT_FILTER, DEFAULT_TIMEOUT_SECONDS
from ditto.errors import ConversionError

app = typer.Typer(
    name="ditto",
    help="Convert DOCX documents to PDF with headless LibreOffice.",
    no_args_is_help=True,
)

SOFFICE_HELP = "Path or name of the LibreOffice executable (default: search PATH)."
DOCTOR_VERSION_TIMEOUT = 30.0


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    partial = getattr(exc, "partial_output_dir", None)
    if partial is not None:
        typer.echo(f"  partial output kept in: {partial}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", help="Show full tracebacks and debug logs on error."
    ),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug output.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Path to the .docx document."),
    output_path: Path | None = typer.Argument(
        None, help="Where to write the PDF (default: next to the input)."
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT_SECONDS,
        "--timeout",
        envvar="DITTO_TIMEOUT",
        help="Seconds before the converter is terminated.",
    ),
    soffice: Path | None = typer.Option(
        None, "--soffice", envvar="DITTO_SOFFICE_BINARY", help=SOFFICE_HELP
    ),
    keep_partial: bool = typer.Option(
        False,
        "--keep-partial",
        help="Keep partially produced files when the conversion fails.",
    ),
    shared_profile: bool = typer.Option(
        False,
        "--shared-profile",
        help="Use the default LibreOffice user profile instead of a temporary one.",
    ),
    no_validate: bool = typer.Option(
        False, "--no-validate", help="Skip the PDF signature check on the output."
    ),
    convert_filter: str = typer.Option(
        DEFAULT_CONVERT_FILTER, "--filter", help="Value passed to soffice --convert-to."
    ),
) -> None:
    """Convert a DOCX document to PDF.

    Notes
    -----
    - Requires LibreOffice (``soffice``) on PATH or given via ``--soffice``.
    - Exits with a distinct status code per failure kind.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from ditto.api import convert_docx_to_pdf

        out = convert_docx_to_pdf(
            input_path=input_path,
            output_path=output_path,
            timeout=timeout,
            binary_override=soffice,
            cleanup_on_failure=not keep_partial,
            isolated_profile=not shared_profile,
            validate_output=not no_validate,
            convert_filter=convert_filter,
        )
        typer.echo(f"✓ Saved: {out}")
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug))


@app.command("doctor")
def doctor_cmd(
    soffice: Path | None = typer.Option(
        None, "--soffice", envvar="DITTO_SOFFICE_BINARY", help=SOFFICE_HELP
    ),
) -> None:
    """Print the resolved LibreOffice converter and its version."""
    import importlib.metadata as metadata

    from ditto.adapters.locators import PathBinaryLocator
    from ditto.adapters.runners import SubprocessExternalConverter
    from ditto.errors import BinaryNotFoundError

    typer.echo(f"Python: {sys.version.split()[0]}")
    try:
        typer.echo(f"ditto: {metadata.version('ditto-docx')}")
    except metadata.PackageNotFoundError:
        typer.echo("ditto: <not installed>")

    locator = PathBinaryLocator()
    binary = locator.locate(soffice)
    if binary is None:
        exc = BinaryNotFoundError(locator.candidates, override=soffice)
        typer.echo(f"converter: <not found> ({exc})", err=True)
        raise typer.Exit(code=exc.exit_code)
    typer.echo(f"converter: {binary}")

    try:
        outcome = SubprocessExternalConverter().run(
            [str(binary), "--version"], DOCTOR_VERSION_TIMEOUT
        )
    except ConversionError as exc:
        typer.echo(f"version: <unavailable> ({exc})")
        return
    if outcome.returncode == 0 and outcome.stdout.strip():
        typer.echo(f"version: {outcome.stdout.strip().splitlines()[0]}")
    else:
        typer.echo("version: <unavailable>")


if __name__ == "__main__":
    app()
