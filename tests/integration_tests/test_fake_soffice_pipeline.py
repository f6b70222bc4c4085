"""Integration tests running the full pipeline against a scripted soffice."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

import ditto
from ditto.application import build_conversion_options
from ditto.cli import cli as cli_module

runner = CliRunner()


@pytest.fixture
def fake_soffice(make_fake_soffice: Callable[..., Path]) -> Path:
    return make_fake_soffice()


def _options(soffice: Path, **overrides: object) -> ditto.ConversionOptions:
    return build_conversion_options(binary_override=soffice, **overrides)


def test_convert_with_scripted_converter(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Produce a PDF at the requested path through a real child process."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "ok")
    output_path = tmp_path / "out" / "renamed.pdf"

    result = ditto.convert(docx_path, output_path, _options(fake_soffice))

    assert result.ok is True, getattr(result, "error", None)
    assert result.output_path == output_path
    assert output_path.read_bytes().startswith(b"%PDF-")
    assert list(output_path.parent.glob(".ditto-*")) == []


def test_converter_found_on_path(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Discover the converter through PATH when no override is configured."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "ok")
    monkeypatch.setenv("PATH", str(fake_soffice.parent))

    result = ditto.convert(docx_path)

    assert result.ok is True, getattr(result, "error", None)
    assert result.output_path == docx_path.with_suffix(".pdf")


def test_scripted_converter_failure(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Surface the converter's stderr on non-zero exit."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "fail")

    result = ditto.convert(docx_path, tmp_path / "report.pdf", _options(fake_soffice))

    assert result.kind == "external_tool_error"
    assert result.error.returncode == 81
    assert "could not be loaded" in result.error.diagnostics


def test_scripted_converter_silent_failure(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Detect a zero exit status that wrote nothing."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "noop")

    result = ditto.convert(docx_path, tmp_path / "report.pdf", _options(fake_soffice))

    assert result.kind == "output_missing"


def test_scripted_converter_timeout(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Terminate a hanging converter and report the timeout."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "sleep")

    result = ditto.convert(
        docx_path, tmp_path / "report.pdf", _options(fake_soffice, timeout=0.5)
    )

    assert result.kind == "conversion_timeout"
    assert not (tmp_path / "report.pdf").exists()
    assert list(tmp_path.glob(".ditto-*")) == []


def test_hand_built_options_with_timedelta(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Accept a directly constructed options object with a timedelta timeout."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "ok")
    options = ditto.ConversionOptions(
        timeout=timedelta(seconds=30), binary_override=fake_soffice
    )

    result = ditto.convert(docx_path, tmp_path / "report.pdf", options)

    assert result.ok is True, getattr(result, "error", None)
    assert (tmp_path / "report.pdf").read_bytes().startswith(b"%PDF-")


def test_concurrent_same_stem_conversions_do_not_clobber(
    fake_soffice: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Convert several report.docx files into one directory at the same time."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "ok")
    out_dir = tmp_path / "out"
    jobs: list[tuple[Path, Path]] = []
    for index in range(6):
        source = tmp_path / f"in{index}" / "report.docx"
        source.parent.mkdir()
        source.write_bytes(b"PK\x03\x04 " + str(index).encode())
        jobs.append((source, out_dir / f"report-{index}.pdf"))
    options = _options(fake_soffice)

    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        results = list(
            pool.map(lambda job: ditto.convert(job[0], job[1], options), jobs)
        )

    assert all(result.ok for result in results), [
        getattr(result, "error", None) for result in results
    ]
    for (source, output_path), result in zip(jobs, results):
        assert result.output_path == output_path
        assert result.source_path == source
        assert output_path.read_bytes().startswith(b"%PDF-")
    assert list(out_dir.glob(".ditto-*")) == []
    assert sorted(path.name for path in out_dir.iterdir()) == sorted(
        output_path.name for _, output_path in jobs
    )


def test_cli_convert_end_to_end(
    fake_soffice: Path, docx_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Run the convert command against the scripted converter."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "ok")

    result = runner.invoke(
        cli_module.app,
        ["convert", str(docx_path), "--soffice", str(fake_soffice)],
    )

    assert result.exit_code == 0, result.output
    assert docx_path.with_suffix(".pdf").is_file()


def test_cli_convert_not_pdf_exit_code(
    fake_soffice: Path, docx_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Exit with the output-invalid status when the result is not a PDF."""
    monkeypatch.setenv("FAKE_SOFFICE_MODE", "notpdf")

    result = runner.invoke(
        cli_module.app,
        ["convert", str(docx_path), "--soffice", str(fake_soffice)],
    )

    assert result.exit_code == 10
    assert "OutputInvalidError" in result.output


def test_doctor_reports_converter_version(fake_soffice: Path) -> None:
    """Print the resolved converter and its version banner."""
    result = runner.invoke(cli_module.app, ["doctor", "--soffice", str(fake_soffice)])

    assert result.exit_code == 0, result.output
    assert f"converter: {fake_soffice.resolve()}" in result.output
    assert "LibreOffice 24.2.0.3" in result.output
