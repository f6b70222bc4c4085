"""Typed errors raised by the conversion pipeline.

Every error carries a ``kind`` (stable string used by callers to branch on
failure class) and an ``exit_code`` used by the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from ditto.types import ErrorKind


class ConversionError(Exception):
    """Base class for all conversion failures."""

    kind: ClassVar[ErrorKind | None] = None
    exit_code: ClassVar[int] = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.partial_output_dir: Path | None = None


class BinaryNotFoundError(ConversionError):
    """The external converter executable could not be located."""

    kind = "binary_not_found"
    exit_code = 3

    def __init__(self, searched: tuple[str, ...], override: Path | None = None) -> None:
        self.searched = searched
        self.override = override
        if override is not None:
            detail = f"configured converter '{override}' is not an executable"
        else:
            detail = f"none of {', '.join(searched)} found on PATH"
        super().__init__(
            f"LibreOffice converter not available: {detail}. Install LibreOffice "
            "or point --soffice / DITTO_SOFFICE_BINARY at the soffice executable."
        )


class InputNotFoundError(ConversionError):
    """The input document does not exist or is not a regular file."""

    kind = "input_not_found"
    exit_code = 4

    def __init__(self, input_path: Path, *, reason: str = "not found") -> None:
        self.input_path = input_path
        super().__init__(f"Input file {reason}: {input_path}")


class InvalidRequestError(ConversionError):
    """The request or options failed validation."""

    kind = "input_invalid"
    exit_code = 5


class ConversionTimeoutError(ConversionError):
    """The converter did not finish within the allotted time."""

    kind = "conversion_timeout"
    exit_code = 6

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Conversion timed out after {timeout:g}s; the converter was terminated. "
            "Retry with a longer --timeout."
        )


class ExternalToolError(ConversionError):
    """The converter exited with a non-zero status."""

    kind = "external_tool_error"
    exit_code = 7

    def __init__(self, returncode: int, diagnostics: str) -> None:
        self.returncode = returncode
        self.diagnostics = diagnostics
        message = f"Converter exited with status {returncode}"
        if diagnostics:
            message = f"{message}: {diagnostics}"
        super().__init__(message)


class OutputMissingError(ConversionError):
    """The converter reported success but produced no file."""

    kind = "output_missing"
    exit_code = 8

    def __init__(self, expected_path: Path) -> None:
        self.expected_path = expected_path
        super().__init__(
            f"Converter exited successfully but no PDF was written to {expected_path}"
        )


class OutputRenameError(ConversionError):
    """The produced file could not be moved to the requested output path."""

    kind = "output_rename_failed"
    exit_code = 9


class OutputInvalidError(ConversionError):
    """The produced file is not a PDF."""

    kind = "output_invalid"
    exit_code = 10


class ConversionCancelledError(ConversionError):
    """The caller cancelled the conversion before it finished."""

    kind = "cancelled"
    exit_code = 11

    def __init__(self) -> None:
        super().__init__("Conversion cancelled; the converter was terminated.")
