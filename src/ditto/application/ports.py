"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ditto.application.requests import CancellationToken
from ditto.types import CommandArgs


@dataclass(frozen=True)
class ProcessOutcome:
    """Exit status and captured output of one converter process."""

    args: tuple[str, ...]
    returncode: int | None
    stdout: str = ""
    stderr: str = ""
    duration: float = 0.0
    timed_out: bool = False
    cancelled: bool = False


class BinaryLocator(Protocol):
    """Find the external converter executable."""

    def locate(self, override: Path | None = None) -> Path | None:
        """Return the executable path, or ``None`` when unavailable."""

    @property
    def candidates(self) -> tuple[str, ...]:
        """Executable names searched when no override is configured."""


class ExternalConverter(Protocol):
    """Run the external converter as a child process."""

    def run(
        self,
        args: CommandArgs,
        timeout: float,
        cancel_token: CancellationToken | None = None,
    ) -> ProcessOutcome:
        """Run ``args`` to completion, timeout, or cancellation."""
