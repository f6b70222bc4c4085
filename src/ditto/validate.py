"""PDF validation helpers."""

from __future__ import annotations

from pathlib import Path

from ditto.errors import OutputInvalidError

PDF_SIGNATURE = b"%PDF-"


def has_pdf_signature(path: Path) -> bool:
    """Return whether ``path`` starts with the PDF header signature."""
    with path.open("rb") as handle:
        return handle.read(len(PDF_SIGNATURE)) == PDF_SIGNATURE


def validate_pdf_if_requested(output_path: Path, validate: bool) -> None:
    """Validate a produced PDF when validation is enabled.

    Parameters
    ----------
    output_path : Path
        Path to the produced file.
    validate : bool
        Whether validation should be executed.

    Raises
    ------
    OutputInvalidError
        If the file is empty, unreadable, or lacks the ``%PDF-`` header.
    """
    if not validate:
        return

    try:
        valid = has_pdf_signature(output_path)
    except OSError as exc:
        raise OutputInvalidError(f"Cannot read produced file {output_path}: {exc}") from exc
    if not valid:
        raise OutputInvalidError(
            f"Produced file {output_path} does not start with the PDF signature."
        )
