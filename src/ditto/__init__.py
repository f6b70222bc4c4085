"""Top-level API for DOCX to PDF conversion through headless LibreOffice."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from ditto.application.options import DEFAULT_CONVERT_FILTER, ConversionOptions
from ditto.application.requests import CancellationToken, ConversionRequest
from ditto.application.results import (
    ConversionFailure,
    ConversionResult,
    ConversionSuccess,
)
from ditto.errors import ConversionError
from ditto.types import PathLike

__version__ = "0.1.0"


def convert(
    input_path: PathLike,
    output_path: PathLike | None = None,
    options: ConversionOptions | None = None,
    *,
    cancel_token: CancellationToken | None = None,
) -> ConversionResult:
    """Convert a DOCX document to PDF.

    Parameters
    ----------
    input_path : PathLike
        Existing ``.docx`` document.
    output_path : PathLike | None, default=None
        Destination PDF. When omitted, defaults to
        ``input_path.with_suffix(".pdf")``.
    options : ConversionOptions | None, default=None
        Timeout, converter override and cleanup policy. Defaults apply
        when omitted.
    cancel_token : CancellationToken | None, default=None
        Token the caller may set from another thread to stop the
        conversion.

    Returns
    -------
    ConversionResult
        ``ConversionSuccess`` with the output path, or
        ``ConversionFailure`` with a typed :class:`ConversionError`.
    """
    from .api import convert as _impl

    return _impl(
        input_path=Path(input_path),
        output_path=Path(output_path) if output_path is not None else None,
        options=options,
        cancel_token=cancel_token,
    )


async def convert_async(
    input_path: PathLike,
    output_path: PathLike | None = None,
    options: ConversionOptions | None = None,
    *,
    cancel_token: CancellationToken | None = None,
) -> ConversionResult:
    """Convert without blocking the event loop.

    Cancelling the awaiting task terminates the converter process before
    :class:`asyncio.CancelledError` propagates.
    """
    from .api import convert_async as _impl

    return await _impl(
        input_path=Path(input_path),
        output_path=Path(output_path) if output_path is not None else None,
        options=options,
        cancel_token=cancel_token,
    )


def convert_docx_to_pdf(
    input_path: PathLike,
    output_path: PathLike | None = None,
    *,
    timeout: float | timedelta | None = None,
    binary_override: PathLike | None = None,
    cleanup_on_failure: bool = True,
    isolated_profile: bool = True,
    validate_output: bool = True,
    convert_filter: str = DEFAULT_CONVERT_FILTER,
) -> Path:
    """Convert a DOCX document to PDF and return the output path.

    Parameters mirror :class:`ConversionOptions`.

    Raises
    ------
    ConversionError
        Subclass matching the failure kind.
    """
    from .api import convert_docx_to_pdf as _impl

    return _impl(
        input_path=Path(input_path),
        output_path=Path(output_path) if output_path is not None else None,
        timeout=timeout,
        binary_override=Path(binary_override) if binary_override is not None else None,
        cleanup_on_failure=cleanup_on_failure,
        isolated_profile=isolated_profile,
        validate_output=validate_output,
        convert_filter=convert_filter,
    )


__all__ = [
    "CancellationToken",
    "ConversionError",
    "ConversionFailure",
    "ConversionOptions",
    "ConversionRequest",
    "ConversionResult",
    "ConversionSuccess",
    "convert",
    "convert_async",
    "convert_docx_to_pdf",
]
