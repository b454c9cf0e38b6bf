"""Scaffolding for feature modules of Laravel style applications.

The package derives class, table, route and namespace names from a module
path such as ``Blog/Posts``, renders bundled (or project supplied) stubs with
literal token replacement and writes the resulting files without ever
overwriting an existing one. It can be used programmatically through
:class:`ModuleGenerator` or from the ``modkit`` command line interface.
"""

from __future__ import annotations

from .config import ArtifactFlags, GeneratorSettings, ModuleNames
from .errors import GenerationError, InvalidModuleNameError, ModkitError, TemplateNotFoundError
from .generators import ModuleGenerator
from .naming import camel, kebab, plural, singular, snake, studly
from .schema import ArtifactKind, ArtifactResult, ArtifactStatus, GenerationReport
from .template import StubRenderer

__all__ = [
    "ArtifactFlags",
    "ArtifactKind",
    "ArtifactResult",
    "ArtifactStatus",
    "GenerationError",
    "GenerationReport",
    "GeneratorSettings",
    "InvalidModuleNameError",
    "ModkitError",
    "ModuleGenerator",
    "ModuleNames",
    "StubRenderer",
    "TemplateNotFoundError",
    "camel",
    "kebab",
    "plural",
    "singular",
    "snake",
    "studly",
]

__version__ = "0.1.0"
