"""Conversion request value objects."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConversionRequest:
    """One DOCX to PDF conversion."""

    input_path: Path
    output_path: Path


class CancellationToken:
    """Thread-safe flag used to cancel an in-flight conversion."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
