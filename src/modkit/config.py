"""Configuration helpers shared by the module generator and CLI."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping

from .errors import InvalidModuleNameError, ModkitError, TemplateNotFoundError
from .naming import camel, kebab, lcfirst, plural, singular, snake, studly

LOGGER = logging.getLogger(__name__)

DEFAULT_ROOT_NAMESPACE = "App\\"
PACKAGE_STUBS = Path(__file__).resolve().parent / "stubs"

_SEGMENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def split_module_name(name: str) -> tuple[str, ...]:
    """Split ``name`` into namespace segments.

    Backslashes are accepted as separators and empty segments are dropped, so
    ``"Blog\\\\Posts"``, ``"/Blog//Posts/"`` and ``"Blog/Posts"`` are
    equivalent. Segments are kept exactly as typed; each one must be a valid
    identifier because it becomes both a directory and a namespace part.
    """

    normalized = name.strip().replace("\\", "/")
    segments = tuple(part.strip() for part in normalized.split("/") if part.strip())
    if not segments:
        raise InvalidModuleNameError("module name must not be empty")

    for segment in segments:
        if not _SEGMENT.fullmatch(segment):
            raise InvalidModuleNameError(f"invalid module name segment '{segment}' in '{name}'")

    return segments


def normalize_root_namespace(namespace: str) -> str:
    """Return ``namespace`` with exactly one trailing backslash."""

    stripped = namespace.strip().strip("\\")
    if not stripped:
        return ""
    return stripped + "\\"


@dataclass(slots=True, frozen=True)
class ModuleNames:
    """Identifiers derived from a module name.

    Attributes
    ----------
    name:
        The normalised module path, e.g. ``"Blog/Posts"``.
    segments:
        The individual path segments of :attr:`name`.
    controller:
        StudlyCase form of the last segment, used for the controller and the
        Vue component (``"Posts"``).
    model:
        Singular StudlyCase form of the last segment (``"Post"``).
    model_variable:
        lowerCamel form of :attr:`model` (``"post"``).
    table:
        Plural snake_case form of the last segment (``"posts"``).
    route_prefix:
        Plural kebab-case form of :attr:`model_variable` (``"posts"``).
    root_namespace:
        Application root namespace including the trailing backslash.
    """

    name: str
    segments: tuple[str, ...]
    controller: str
    model: str
    model_variable: str
    table: str
    route_prefix: str
    root_namespace: str = DEFAULT_ROOT_NAMESPACE

    @classmethod
    def from_name(cls, name: str, *, root_namespace: str = DEFAULT_ROOT_NAMESPACE) -> "ModuleNames":
        segments = split_module_name(name)
        basename = segments[-1]

        controller = studly(basename)
        model = singular(controller)
        model_variable = camel(model)

        return cls(
            name="/".join(segments),
            segments=segments,
            controller=controller,
            model=model,
            model_variable=model_variable,
            table=plural(snake(basename)),
            route_prefix=plural(kebab(lcfirst(model))),
            root_namespace=normalize_root_namespace(root_namespace),
        )

    @property
    def basename(self) -> str:
        return self.segments[-1]

    @property
    def controller_class(self) -> str:
        return f"{self.controller}Controller"

    @property
    def migration_class(self) -> str:
        return f"Create{studly(self.table)}Table"

    @property
    def namespace(self) -> str:
        """Namespace of the module itself, e.g. ``App\\Modules\\Blog\\Posts``."""

        return "\\".join((f"{self.root_namespace}Modules", *self.segments))

    def namespace_for(self, *parts: str) -> str:
        return "\\".join((self.namespace, *parts))

    def context(self) -> Mapping[str, str]:
        """Return the tokens shared by every stub."""

        return {
            "DummyRootNamespace": self.root_namespace,
            "DummyModelClass": self.model,
            "DummyModelVariable": self.model_variable,
            "DummyRoutePrefix": self.route_prefix,
            "DummyTable": self.table,
        }


@dataclass(slots=True, frozen=True)
class ArtifactFlags:
    """Which artifacts a run should produce.

    The field order is the order in which artifacts are generated.
    """

    model: bool = False
    controller: bool = False
    api: bool = False
    migration: bool = False
    vue: bool = False
    view: bool = False

    @classmethod
    def from_options(cls, **options: bool) -> "ArtifactFlags":
        """Build flags from CLI style options; ``all`` switches every flag on."""

        everything = options.pop("all", False)
        unknown = set(options) - cls.names()
        if unknown:
            raise ValueError(f"unknown artifact flags: {', '.join(sorted(unknown))}")
        if everything:
            return cls.everything()
        return cls(**{key: bool(value) for key, value in options.items()})

    @classmethod
    def everything(cls) -> "ArtifactFlags":
        return cls(**{name: True for name in cls.names()})

    @classmethod
    def names(cls) -> set[str]:
        return {field.name for field in fields(cls)}

    def selected(self) -> tuple[str, ...]:
        return tuple(field.name for field in fields(self) if getattr(self, field.name))

    def any(self) -> bool:
        return bool(self.selected())


def detect_root_namespace(base_path: str | Path) -> str:
    """Read the application namespace from ``composer.json``.

    The PSR-4 autoload entry mapped to ``app/`` wins. Projects without a
    ``composer.json`` or without such an entry use ``App\\``.
    """

    composer_path = Path(base_path) / "composer.json"
    if not composer_path.is_file():
        return DEFAULT_ROOT_NAMESPACE

    try:
        composer = json.loads(composer_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ModkitError(f"cannot parse {composer_path}: {exc}") from exc

    # composer writes empty objects as [], so any level may be a list
    autoload = composer.get("autoload") if isinstance(composer, dict) else None
    psr4 = autoload.get("psr-4") if isinstance(autoload, dict) else None
    for namespace, paths in (psr4.items() if isinstance(psr4, dict) else ()):
        if isinstance(paths, str):
            candidates = [paths]
        elif isinstance(paths, list):
            candidates = [candidate for candidate in paths if isinstance(candidate, str)]
        else:
            continue
        if any(candidate.strip("/") == "app" for candidate in candidates):
            return normalize_root_namespace(namespace)

    LOGGER.debug("no psr-4 entry for app/ in %s, using %s", composer_path, DEFAULT_ROOT_NAMESPACE)
    return DEFAULT_ROOT_NAMESPACE


@dataclass(slots=True)
class GeneratorSettings:
    """Where stubs are read from and where generated files go.

    Attributes
    ----------
    base_path:
        Project root. Vue components and views are written below
        ``resources/`` inside it.
    app_path:
        Application directory holding the ``Modules`` tree.
    root_namespace:
        Namespace mapped to :attr:`app_path`, with a trailing backslash.
    stub_dirs:
        Directories searched in order when a stub is loaded.
    modules_dir:
        Name of the directory below :attr:`app_path` containing modules.
    """

    base_path: Path
    app_path: Path
    root_namespace: str = DEFAULT_ROOT_NAMESPACE
    stub_dirs: tuple[Path, ...] = (PACKAGE_STUBS,)
    modules_dir: str = "Modules"

    @classmethod
    def from_base_path(
        cls,
        base_path: str | Path,
        *,
        app_path: str | Path | None = None,
        root_namespace: str | None = None,
        stubs: str | Path | None = None,
        default_stubs: bool = True,
    ) -> "GeneratorSettings":
        """Build settings for the project rooted at ``base_path``.

        Parameters
        ----------
        base_path:
            The project root.
        app_path:
            Override the application directory, ``<base_path>/app`` by default.
        root_namespace:
            Override the namespace detected from ``composer.json``.
        stubs:
            Directory searched before the bundled stubs. Defaults to
            ``<base_path>/resources/stubs`` when that directory exists.
        default_stubs:
            When ``False`` the stubs shipped with modkit are not used as a
            fallback.
        """

        base = Path(base_path).expanduser().resolve()
        app = Path(app_path).expanduser().resolve() if app_path is not None else base / "app"

        if root_namespace is None:
            namespace = detect_root_namespace(base)
        else:
            namespace = normalize_root_namespace(root_namespace)

        stub_dirs: list[Path] = []
        if stubs is not None:
            stub_dirs.append(Path(stubs).expanduser().resolve())
        elif (base / "resources" / "stubs").is_dir():
            stub_dirs.append(base / "resources" / "stubs")
        if default_stubs:
            stub_dirs.append(PACKAGE_STUBS)

        return cls(
            base_path=base,
            app_path=app,
            root_namespace=namespace,
            stub_dirs=tuple(stub_dirs),
        )

    def module_path(self, names: ModuleNames, *parts: str) -> Path:
        return self.app_path.joinpath(self.modules_dir, *names.segments, *parts)

    def resource_path(self, *parts: str) -> Path:
        return self.base_path.joinpath("resources", *parts)

    def resolve_stub(self, name: str) -> Path:
        for directory in self.stub_dirs:
            candidate = Path(directory) / name
            if candidate.is_file():
                return candidate

        searched = ", ".join(str(directory) for directory in self.stub_dirs) or "<none>"
        raise TemplateNotFoundError(f"stub '{name}' not found in {searched}")
