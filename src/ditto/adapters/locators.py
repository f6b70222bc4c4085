"""Locate the LibreOffice converter executable."""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from ditto.application.options import SOFFICE_EXECUTABLES


def _is_executable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class PathBinaryLocator:
    """Resolve the converter from an explicit override or the ``PATH``."""

    def __init__(
        self,
        candidates: Iterable[str] = SOFFICE_EXECUTABLES,
        search_path: str | None = None,
    ) -> None:
        self._candidates = tuple(candidates)
        self._search_path = search_path

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    def locate(self, override: Path | None = None) -> Path | None:
        """Return the converter executable, or ``None`` when unavailable.

        Parameters
        ----------
        override : Path | None, default=None
            Explicit executable. A bare name (no directory part) is looked
            up on the search path. A configured override that cannot be
            used yields ``None``; ``PATH`` candidates are not tried then.

        Returns
        -------
        Path | None
            Absolute path of the executable.
        """
        if override is not None:
            return self._resolve_override(Path(override))

        for name in self._candidates:
            found = shutil.which(name, path=self._search_path)
            if found:
                return Path(found)
        return None

    def _resolve_override(self, override: Path) -> Path | None:
        if len(override.parts) == 1 and not override.is_absolute():
            found = shutil.which(str(override), path=self._search_path)
            return Path(found) if found else None
        expanded = override.expanduser()
        if _is_executable_file(expanded):
            return expanded.resolve()
        return None
