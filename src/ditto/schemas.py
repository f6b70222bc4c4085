"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SUPPORTED_INPUT_SUFFIXES = frozenset({".docx"})


class ConversionOptionsConfig(BaseModel):
    """Validated conversion options."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(gt=0.0)
    binary_override: Path | None = None
    cleanup_on_failure: bool = True
    isolated_profile: bool = True
    validate_output: bool = True
    convert_filter: str = "pdf"
    stderr_limit: int = Field(gt=0)

    @field_validator("convert_filter")
    @classmethod
    def _validate_filter(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("convert_filter cannot be empty.")
        if any(ch.isspace() for ch in cleaned):
            raise ValueError("convert_filter cannot contain whitespace.")
        return cleaned

    @field_validator("binary_override", mode="before")
    @classmethod
    def _blank_override_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DocxConversionConfig(BaseModel):
    """Validated input for a DOCX to PDF conversion.

    Existence of ``input_path`` is checked by the use-case before this
    schema runs, so a missing file is reported separately from a bad one.
    """

    model_config = ConfigDict(extra="forbid")

    input_path: Path
    output_path: Path

    @field_validator("input_path")
    @classmethod
    def _validate_input_suffix(cls, value: Path) -> Path:
        if value.suffix.lower() not in SUPPORTED_INPUT_SUFFIXES:
            raise ValueError(
                f"input must be a .docx document, got '{value.suffix or value.name}'."
            )
        return value

    @field_validator("output_path")
    @classmethod
    def _validate_output_path(cls, value: Path) -> Path:
        if value.is_dir():
            raise ValueError(f"output path is a directory: {value}")
        if not value.name:
            raise ValueError("output path must name a file.")
        return value

    @model_validator(mode="after")
    def _validate_distinct_paths(self) -> DocxConversionConfig:
        if self.output_path.resolve() == self.input_path.resolve():
            raise ValueError(
                f"output path would overwrite the input document: {self.output_path}"
            )
        return self
