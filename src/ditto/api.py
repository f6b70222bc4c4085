"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from ditto.application.options import DEFAULT_CONVERT_FILTER, ConversionOptions
from ditto.application.requests import CancellationToken, ConversionRequest
from ditto.application.results import ConversionResult
from ditto.application.use_cases import (
    build_conversion_options,
    convert_docx_file,
    convert_docx_file_async,
)


def _request(input_path: Path, output_path: Optional[Path]) -> ConversionRequest:
    input_path = Path(input_path)
    resolved_output = Path(output_path) if output_path else input_path.with_suffix(".pdf")
    return ConversionRequest(input_path=input_path, output_path=resolved_output)


def convert(
    input_path: Path,
    output_path: Optional[Path] = None,
    options: Optional[ConversionOptions] = None,
    *,
    cancel_token: Optional[CancellationToken] = None,
) -> ConversionResult:
    """Convert a DOCX document to PDF and return a tagged result."""
    return convert_docx_file(
        _request(input_path, output_path),
        options or build_conversion_options(),
        cancel_token=cancel_token,
    )


async def convert_async(
    input_path: Path,
    output_path: Optional[Path] = None,
    options: Optional[ConversionOptions] = None,
    *,
    cancel_token: Optional[CancellationToken] = None,
) -> ConversionResult:
    """Async variant of :func:`convert`."""
    return await convert_docx_file_async(
        _request(input_path, output_path),
        options or build_conversion_options(),
        cancel_token=cancel_token,
    )


def convert_docx_to_pdf(
    input_path: Path,
    output_path: Optional[Path] = None,
    timeout: Union[float, timedelta, None] = None,
    binary_override: Optional[Path] = None,
    cleanup_on_failure: bool = True,
    isolated_profile: bool = True,
    validate_output: bool = True,
    convert_filter: str = DEFAULT_CONVERT_FILTER,
) -> Path:
    """Convert a DOCX document to PDF, raising on failure."""
    options = build_conversion_options(
        timeout=timeout,
        binary_override=binary_override,
        cleanup_on_failure=cleanup_on_failure,
        isolated_profile=isolated_profile,
        validate_output=validate_output,
        convert_filter=convert_filter,
    )
    result = convert(input_path, output_path, options)
    return result.unwrap()
