"""Application-layer use-cases and option objects."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from ditto.application.options import ConversionOptions
from ditto.application.ports import (
    BinaryLocator,
    ExternalConverter,
    ProcessOutcome,
)
from ditto.application.requests import CancellationToken, ConversionRequest
from ditto.application.results import (
    ConversionFailure,
    ConversionResult,
    ConversionSuccess,
)


def build_conversion_options(
    *,
    timeout: float | timedelta | None = None,
    binary_override: Path | str | None = None,
    cleanup_on_failure: bool = True,
    isolated_profile: bool = True,
    validate_output: bool = True,
    convert_filter: str = "pdf",
    stderr_limit: int = 4000,
) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from ditto.application.use_cases import build_conversion_options as _impl

    return _impl(
        timeout=timeout,
        binary_override=binary_override,
        cleanup_on_failure=cleanup_on_failure,
        isolated_profile=isolated_profile,
        validate_output=validate_output,
        convert_filter=convert_filter,
        stderr_limit=stderr_limit,
    )


def convert_docx_file(
    request: ConversionRequest,
    options: ConversionOptions,
    *,
    locator: BinaryLocator | None = None,
    converter: ExternalConverter | None = None,
    cancel_token: CancellationToken | None = None,
) -> ConversionResult:
    """Convert a DOCX document via lazy use-case import."""
    from ditto.application.use_cases import convert_docx_file as _impl

    return _impl(
        request,
        options,
        locator=locator,
        converter=converter,
        cancel_token=cancel_token,
    )


__all__ = [
    "BinaryLocator",
    "CancellationToken",
    "ConversionFailure",
    "ConversionOptions",
    "ConversionRequest",
    "ConversionResult",
    "ConversionSuccess",
    "ExternalConverter",
    "ProcessOutcome",
    "build_conversion_options",
    "convert_docx_file",
]
