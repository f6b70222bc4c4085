"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from ditto.errors import ConversionError
from ditto.types import ErrorKind


@dataclass(frozen=True)
class ConversionSuccess:
    """Conversion finished and the PDF exists at ``output_path``."""

    ok: ClassVar[bool] = True

    output_path: Path
    source_path: Path
    duration: float = 0.0

    def unwrap(self) -> Path:
        return self.output_path


@dataclass(frozen=True)
class ConversionFailure:
    """Conversion failed; ``error`` describes why."""

    ok: ClassVar[bool] = False

    error: ConversionError
    source_path: Path

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind

    def unwrap(self) -> Path:
        """Raise the carried error."""
        raise self.error


type ConversionResult = ConversionSuccess | ConversionFailure
