"""Exception types raised by the module generator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import GenerationReport


class ModkitError(RuntimeError):
    """Base class for errors raised by modkit."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidModuleNameError(ModkitError, ValueError):
    """Raised when a module name cannot be mapped onto a namespace."""


class TemplateNotFoundError(FileNotFoundError, ModkitError):
    """Raised when a stub cannot be located."""


class GenerationError(ModkitError):
    """Raised when a generation run is aborted by a filesystem failure.

    ``report`` holds the results recorded before the failure, including the
    failed artifact itself. Files written earlier in the run are left on disk.
    """

    def __init__(self, message: str, report: "GenerationReport") -> None:
        super().__init__(message)
        self.report = report
