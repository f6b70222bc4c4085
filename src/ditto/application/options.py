"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from ditto.errors import InvalidRequestError

DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_STDERR_LIMIT = 4000
DEFAULT_CONVERT_FILTER = "pdf"
SOFFICE_EXECUTABLES = ("soffice", "libreoffice")


@dataclass(frozen=True)
class ConversionOptions:
    """Per-call conversion configuration.

    Parameters
    ----------
    timeout : float | timedelta, default=120.0
        Seconds the converter may run before it is terminated. A
        ``timedelta`` is stored as its total seconds.
    binary_override : Path | None, default=None
        Converter executable to use instead of searching ``PATH``.
    cleanup_on_failure : bool, default=True
        Delete partially produced files when a conversion fails. When
        ``False`` the staging directory is kept and reported on the error.
    isolated_profile : bool, default=True
        Run the converter with a throw-away user profile.
    validate_output : bool, default=True
        Require the produced file to start with the PDF signature.
    convert_filter : str, default="pdf"
        Value passed to ``--convert-to``.
    stderr_limit : int, default=4000
        Maximum number of diagnostic characters kept on tool errors.
    """

    timeout: float | timedelta = DEFAULT_TIMEOUT_SECONDS
    binary_override: Path | None = None
    cleanup_on_failure: bool = True
    isolated_profile: bool = True
    validate_output: bool = True
    convert_filter: str = DEFAULT_CONVERT_FILTER
    stderr_limit: int = DEFAULT_STDERR_LIMIT

    def __post_init__(self) -> None:
        timeout = self.timeout
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise InvalidRequestError(
                f"timeout must be seconds or a timedelta, got {self.timeout!r}."
            )
        if timeout <= 0:
            raise InvalidRequestError(f"timeout must be positive, got {timeout:g}s.")
        if self.stderr_limit <= 0:
            raise InvalidRequestError(
                f"stderr_limit must be positive, got {self.stderr_limit}."
            )
        # Frozen: normalize through object.__setattr__.
        object.__setattr__(self, "timeout", float(timeout))
        if isinstance(self.binary_override, str):
            object.__setattr__(self, "binary_override", Path(self.binary_override))
