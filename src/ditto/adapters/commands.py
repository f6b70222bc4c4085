"""Command-line construction for headless LibreOffice conversion."""

from __future__ import annotations

from pathlib import Path

from ditto.application.options import DEFAULT_CONVERT_FILTER


def build_soffice_command(
    binary: Path,
    input_path: Path,
    output_dir: Path,
    *,
    convert_filter: str = DEFAULT_CONVERT_FILTER,
    profile_dir: Path | None = None,
) -> list[str]:
    """Build the argument vector for one headless conversion.

    LibreOffice only accepts an output directory; the produced file is
    named after the input's stem with a ``.pdf`` suffix.
    """
    args = [str(binary), "--headless", "--norestore"]
    if profile_dir is not None:
        args.append(f"-env:UserInstallation={profile_dir.resolve().as_uri()}")
    args.extend(
        [
            "--convert-to",
            convert_filter,
            "--outdir",
            str(output_dir),
            str(input_path),
        ]
    )
    return args


def expected_output_name(input_path: Path) -> str:
    """Return the filename LibreOffice writes for ``input_path``."""
    return f"{input_path.stem}.pdf"
