"""Shared type aliases for the conversion shim."""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Literal

type PathLike = str | os.PathLike[str]
type CommandArgs = Sequence[str]

type ErrorKind = Literal[
    "binary_not_found",
    "input_not_found",
    "input_invalid",
    "conversion_timeout",
    "external_tool_error",
    "output_missing",
    "output_rename_failed",
    "output_invalid",
    "cancelled",
]
