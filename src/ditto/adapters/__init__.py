"""Default adapters for locating and running the external converter."""

from ditto.adapters.commands import build_soffice_command
from ditto.adapters.locators import PathBinaryLocator
from ditto.adapters.runners import SubprocessExternalConverter

__all__ = [
    "PathBinaryLocator",
    "SubprocessExternalConverter",
    "build_soffice_command",
]
