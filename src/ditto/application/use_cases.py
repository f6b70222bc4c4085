"""Application use-cases orchestrating DOCX to PDF conversion."""

from __future__ import annotations

import asyncio
import logging
import tempfile
import time
from contextlib import ExitStack
from datetime import timedelta
from pathlib import Path

from pydantic import ValidationError

from ditto.adapters.commands import build_soffice_command, expected_output_name
from ditto.adapters.locators import PathBinaryLocator
from ditto.adapters.runners import SubprocessExternalConverter
from ditto.application.options import (
    DEFAULT_CONVERT_FILTER,
    DEFAULT_STDERR_LIMIT,
    DEFAULT_TIMEOUT_SECONDS,
    ConversionOptions,
)
from ditto.application.ports import BinaryLocator, ExternalConverter, ProcessOutcome
from ditto.application.requests import CancellationToken, ConversionRequest
from ditto.application.results import (
    ConversionFailure,
    ConversionResult,
    ConversionSuccess,
)
from ditto.errors import (
    BinaryNotFoundError,
    ConversionCancelledError,
    ConversionError,
    ConversionTimeoutError,
    ExternalToolError,
    InputNotFoundError,
    InvalidRequestError,
    OutputMissingError,
)
from ditto.infrastructure.outputs import (
    create_staging_dir,
    ensure_output_parent,
    finalize_output,
    remove_staging_dir,
)
from ditto.schemas import ConversionOptionsConfig, DocxConversionConfig
from ditto.validate import validate_pdf_if_requested

logger = logging.getLogger(__name__)


def convert_docx_file(
    request: ConversionRequest,
    options: ConversionOptions,
    *,
    locator: BinaryLocator | None = None,
    converter: ExternalConverter | None = None,
    cancel_token: CancellationToken | None = None,
) -> ConversionResult:
    """Use-case: convert one DOCX document into PDF.

    Parameters
    ----------
    request : ConversionRequest
        Input document and requested PDF destination.
    options : ConversionOptions
        Timeout, binary override and cleanup policy.
    locator : BinaryLocator | None, default=None
        Converter lookup; defaults to :class:`PathBinaryLocator`.
    converter : ExternalConverter | None, default=None
        Process runner; defaults to :class:`SubprocessExternalConverter`.
    cancel_token : CancellationToken | None, default=None
        Set by the caller to terminate the conversion early.

    Returns
    -------
    ConversionResult
        ``ConversionSuccess`` or ``ConversionFailure`` carrying a
        :class:`~ditto.errors.ConversionError`. Only conversion errors are
        turned into failures; anything else propagates.
    """
    locator = locator or PathBinaryLocator()
    converter = converter or SubprocessExternalConverter()
    started = time.monotonic()
    try:
        output_path = _run_conversion(request, options, locator, converter, cancel_token)
    except ConversionError as exc:
        logger.warning(
            "conversion of %s failed (%s): %s", request.input_path, exc.kind, exc
        )
        return ConversionFailure(error=exc, source_path=request.input_path)

    duration = time.monotonic() - started
    logger.info(
        "converted %s -> %s in %.2fs", request.input_path, output_path, duration
    )
    return ConversionSuccess(
        output_path=output_path,
        source_path=request.input_path,
        duration=duration,
    )


async def convert_docx_file_async(
    request: ConversionRequest,
    options: ConversionOptions,
    *,
    locator: BinaryLocator | None = None,
    converter: ExternalConverter | None = None,
    cancel_token: CancellationToken | None = None,
) -> ConversionResult:
    """Use-case: :func:`convert_docx_file` without blocking the event loop.

    Cancelling the awaiting task terminates the converter, waits for
    cleanup to finish, then re-raises :class:`asyncio.CancelledError`.
    """
    token = cancel_token or CancellationToken()
    task = asyncio.ensure_future(
        asyncio.to_thread(
            convert_docx_file,
            request,
            options,
            locator=locator,
            converter=converter,
            cancel_token=token,
        )
    )
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        token.cancel()
        await task
        raise


def build_conversion_options(
    *,
    timeout: float | timedelta | None = None,
    binary_override: Path | str | None = None,
    cleanup_on_failure: bool = True,
    isolated_profile: bool = True,
    validate_output: bool = True,
    convert_filter: str = DEFAULT_CONVERT_FILTER,
    stderr_limit: int = DEFAULT_STDERR_LIMIT,
) -> ConversionOptions:
    """Build typed option object from command/API params.

    Raises
    ------
    InvalidRequestError
        If any option is out of range.
    """
    if timeout is None:
        timeout = DEFAULT_TIMEOUT_SECONDS
    elif isinstance(timeout, timedelta):
        timeout = timeout.total_seconds()
    try:
        config = ConversionOptionsConfig(
            timeout=timeout,
            binary_override=binary_override,
            cleanup_on_failure=cleanup_on_failure,
            isolated_profile=isolated_profile,
            validate_output=validate_output,
            convert_filter=convert_filter,
            stderr_limit=stderr_limit,
        )
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid conversion options: {exc}") from exc
    return ConversionOptions(**config.model_dump())


def truncate_diagnostics(text: str, limit: int) -> str:
    """Keep the last ``limit`` characters of converter output."""
    cleaned = text.strip()
    if len(cleaned) <= limit:
        return cleaned
    return "..." + cleaned[len(cleaned) - limit :]


def _run_conversion(
    request: ConversionRequest,
    options: ConversionOptions,
    locator: BinaryLocator,
    converter: ExternalConverter,
    cancel_token: CancellationToken | None,
) -> Path:
    binary = locator.locate(options.binary_override)
    if binary is None:
        raise BinaryNotFoundError(locator.candidates, override=options.binary_override)

    input_path = Path(request.input_path)
    if not input_path.exists():
        raise InputNotFoundError(input_path)
    if not input_path.is_file():
        raise InputNotFoundError(input_path, reason="is not a regular file")

    try:
        config = DocxConversionConfig(
            input_path=input_path,
            output_path=Path(request.output_path),
        )
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid conversion request: {exc}") from exc

    output_parent = ensure_output_parent(config.output_path)
    staging_dir = create_staging_dir(output_parent)
    succeeded = False
    try:
        with ExitStack() as stack:
            profile_dir = None
            if options.isolated_profile:
                profile_dir = Path(
                    stack.enter_context(
                        tempfile.TemporaryDirectory(
                            prefix="ditto-profile-", ignore_cleanup_errors=True
                        )
                    )
                )
            args = build_soffice_command(
                binary,
                config.input_path.resolve(),
                staging_dir,
                convert_filter=options.convert_filter,
                profile_dir=profile_dir,
            )
            outcome = converter.run(args, options.timeout, cancel_token)

        _raise_for_outcome(outcome, options)
        produced = staging_dir / expected_output_name(config.input_path)
        if not produced.is_file():
            raise OutputMissingError(produced)
        validate_pdf_if_requested(produced, options.validate_output)
        final_path = finalize_output(produced, config.output_path)
        succeeded = True
        return final_path
    except ConversionError as exc:
        if not options.cleanup_on_failure:
            exc.partial_output_dir = staging_dir
        raise
    finally:
        if succeeded or options.cleanup_on_failure:
            remove_staging_dir(staging_dir)


def _raise_for_outcome(outcome: ProcessOutcome, options: ConversionOptions) -> None:
    if outcome.cancelled:
        raise ConversionCancelledError()
    if outcome.timed_out:
        raise ConversionTimeoutError(options.timeout)
    if outcome.returncode != 0:
        diagnostics = outcome.stderr.strip() or outcome.stdout.strip()
        raise ExternalToolError(
            outcome.returncode if outcome.returncode is not None else -1,
            truncate_diagnostics(diagnostics, options.stderr_limit),
        )
