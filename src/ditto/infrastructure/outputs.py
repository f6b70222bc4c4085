"""Output staging, finalization and cleanup."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from ditto.errors import InvalidRequestError, OutputRenameError

logger = logging.getLogger(__name__)

STAGING_PREFIX = ".ditto-"


def ensure_output_parent(output_path: Path) -> Path:
    """Create the parent directory of ``output_path`` if needed."""
    parent = output_path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InvalidRequestError(
            f"Cannot create output directory {parent}: {exc}"
        ) from exc
    return parent


def create_staging_dir(output_parent: Path) -> Path:
    """Create a private directory next to the final output.

    Keeping it on the same filesystem lets :func:`finalize_output` use an
    atomic replace.
    """
    try:
        return Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=output_parent))
    except OSError as exc:
        raise InvalidRequestError(
            f"Output directory {output_parent} is not writable: {exc}"
        ) from exc


def finalize_output(produced: Path, output_path: Path) -> Path:
    """Move ``produced`` onto ``output_path``, replacing any existing file."""
    try:
        os.replace(produced, output_path)
    except OSError as exc:
        raise OutputRenameError(
            f"Cannot move converted PDF {produced} to {output_path}: {exc}"
        ) from exc
    return output_path


def remove_staging_dir(staging_dir: Path) -> None:
    """Delete the staging directory and anything left in it."""
    shutil.rmtree(staging_dir, ignore_errors=True)
    if staging_dir.exists():
        logger.warning("could not remove staging directory %s", staging_dir)
