"""Shared pytest configuration, marker assignment and converter fixtures."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

_FAKE_SOFFICE_SCRIPT = '''\
import os
import pathlib
import sys
import time

args = sys.argv[1:]
mode = os.environ.get("FAKE_SOFFICE_MODE", "ok")
if "--version" in args:
    print("LibreOffice 24.2.0.3 fake")
    sys.exit(0)
if mode == "fail":
    sys.stderr.write("Error: source file could not be loaded\\n")
    sys.exit(81)
if mode == "sleep":
    time.sleep(60)
outdir = pathlib.Path(args[args.index("--outdir") + 1])
source = pathlib.Path(args[-1])
if mode == "noop":
    sys.exit(0)
payload = b"not a pdf" if mode == "notpdf" else b"%PDF-1.7\\n% fake\\n%%EOF\\n"
(outdir / (source.stem + ".pdf")).write_bytes(payload)
print("convert " + str(source) + " -> " + str(outdir))
'''


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def docx_path(tmp_path: Path) -> Path:
    """Placeholder ``.docx`` input for tests that never parse it."""
    path = tmp_path / "report.docx"
    path.write_bytes(b"PK\x03\x04 dummy")
    return path


@pytest.fixture
def make_fake_soffice(tmp_path: Path) -> Callable[[str], Path]:
    """Build an executable that mimics ``soffice --convert-to pdf``.

    Behavior is selected through ``FAKE_SOFFICE_MODE``: ``ok`` writes a PDF,
    ``fail`` exits non-zero, ``sleep`` hangs, ``noop`` writes nothing and
    ``notpdf`` writes a non-PDF file.
    """
    if os.name != "posix":
        pytest.skip("fake soffice wrapper is a POSIX shell script")

    def _make(name: str = "soffice") -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        script = bin_dir / "fake_soffice.py"
        script.write_text(_FAKE_SOFFICE_SCRIPT, encoding="utf-8")
        wrapper = bin_dir / name
        wrapper.write_text(
            f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n',
            encoding="utf-8",
        )
        wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return wrapper

    return _make
