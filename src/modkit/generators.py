"""Write-once generators for the files making up a module."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Mapping

from .config import ArtifactFlags, GeneratorSettings, ModuleNames
from .errors import GenerationError
from .schema import ArtifactKind, ArtifactResult, GenerationReport
from .template import StubRenderer

__all__ = ["ModuleGenerator", "VIEW_NAMES"]

LOGGER = logging.getLogger(__name__)

VIEW_NAMES = ("create", "edit", "index", "show")
MIGRATION_TIMESTAMP = "%Y_%m_%d_%H%M%S"


class ModuleGenerator:
    """Create the model, controllers, routes, migration and views of a module.

    Every file is written at most once: when the destination already exists an
    ``exists`` result is recorded and the file is left untouched. Results are
    collected in :attr:`report`.
    """

    def __init__(
        self,
        names: ModuleNames,
        settings: GeneratorSettings,
        *,
        renderer: StubRenderer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.names = names
        self.settings = settings
        self.renderer = renderer or StubRenderer()
        self._clock = clock or datetime.now
        self.report = GenerationReport(module=names.name)

    def generate(self, flags: ArtifactFlags, *, keep_going: bool = False) -> GenerationReport:
        """Run the generators selected by ``flags`` in their fixed order.

        A filesystem failure aborts the run with :class:`GenerationError`
        unless ``keep_going`` is set, in which case the failure is only
        recorded. Files written before the failure are kept. Each call starts
        a new :attr:`report`.
        """

        self.report = GenerationReport(module=self.names.name)
        steps: Mapping[str, Callable[[], None]] = {
            "model": self.create_model,
            "controller": self.create_controller,
            "api": self.create_api_controller,
            "migration": self.create_migration,
            "vue": self.create_vue_component,
            "view": self.create_views,
        }

        for artifact in flags.selected():
            try:
                steps[artifact]()
            except OSError as exc:
                if not keep_going:
                    raise GenerationError(
                        f"generating {artifact} for {self.names.name} failed: {exc}", self.report
                    ) from exc
                LOGGER.error("generating %s for %s failed: %s", artifact, self.names.name, exc)

        return self.report

    def create_model(self) -> None:
        names = self.names
        self._emit(
            ArtifactKind.MODEL,
            self.settings.module_path(names, "Models", f"{names.model}.php"),
            "model.stub",
            {
                "DummyNamespace": names.namespace_for("Models"),
                "DummyClass": names.model,
            },
        )

    def create_controller(self) -> None:
        """Create the web controller, then the web routes pointing at it."""

        names = self.names
        self._emit(
            ArtifactKind.CONTROLLER,
            self.settings.module_path(names, "Controllers", f"{names.controller_class}.php"),
            "controller.stub",
            {
                "DummyNamespace": names.namespace_for("Controllers"),
                "DummyClass": names.controller_class,
            },
        )
        self.create_routes()

    def create_api_controller(self) -> None:
        """Create the API resource controller, then the API routes pointing at it."""

        names = self.names
        self._emit(
            ArtifactKind.API_CONTROLLER,
            self.settings.module_path(names, "Controllers", "Api", f"{names.controller_class}.php"),
            "controller.model.api.stub",
            {
                "DummyNamespace": names.namespace_for("Controllers", "Api"),
                "DummyClass": names.controller_class,
                "DummyFullModelClass": names.namespace_for("Models", names.model),
            },
        )
        self.create_api_routes()

    def create_routes(self) -> None:
        names = self.names
        self._emit(
            ArtifactKind.WEB_ROUTES,
            self.settings.module_path(names, "Routes", "web.php"),
            "routes.web.stub",
            {
                "DummyNamespace": names.namespace_for("Controllers"),
                "DummyClass": names.controller_class,
            },
        )

    def create_api_routes(self) -> None:
        names = self.names
        self._emit(
            ArtifactKind.API_ROUTES,
            self.settings.module_path(names, "Routes", "api.php"),
            "routes.api.stub",
            {
                "DummyNamespace": names.namespace_for("Controllers"),
                "DummyClass": f"Api\\{names.controller_class}",
            },
        )

    def create_migration(self) -> None:
        """Create the ``create_<table>_table`` migration.

        Failures are recorded and logged here instead of being raised, so the
        remaining artifacts of the run are still generated.
        """

        names = self.names
        directory = self.settings.module_path(names, "Migrations")
        suffix = f"_create_{names.table}_table.php"

        existing = sorted(directory.glob(f"*{suffix}")) if directory.is_dir() else []
        if existing:
            self._record_existing(ArtifactKind.MIGRATION, existing[0])
            return

        destination = directory / f"{self._clock().strftime(MIGRATION_TIMESTAMP)}{suffix}"
        try:
            self._emit(
                ArtifactKind.MIGRATION,
                destination,
                "migration.create.stub",
                {"DummyClass": names.migration_class},
            )
        except OSError as exc:
            LOGGER.error("migration for %s was not created: %s", names.name, exc)

    def create_vue_component(self) -> None:
        names = self.names
        self._emit(
            ArtifactKind.VUE_COMPONENT,
            self.settings.resource_path("js", "components", *names.segments[:-1], f"{names.basename}.vue"),
            "vue.component.stub",
            {"DummyClass": names.controller},
        )

    def create_views(self) -> None:
        names = self.names
        for view in VIEW_NAMES:
            self._emit(
                ArtifactKind.VIEW,
                self.settings.resource_path("views", *names.segments, f"{view}.blade.php"),
                "view.stub",
                {"DummyClass": names.controller, "DummyView": view},
            )

    def _record_existing(self, kind: ArtifactKind, destination: Path) -> ArtifactResult:
        LOGGER.info("%s exists, skipping", destination)
        return self.report.add(ArtifactResult.exists(kind, destination))

    def _emit(
        self,
        kind: ArtifactKind,
        destination: Path,
        stub_name: str,
        replacements: Mapping[str, str],
    ) -> ArtifactResult:
        if destination.exists():
            return self._record_existing(kind, destination)

        context = {**self.names.context(), **replacements}
        try:
            stub_path = self.settings.resolve_stub(stub_name)
            rendered = self.renderer.render_file(stub_path, context)
            destination.parent.mkdir(parents=True, exist_ok=True)
            with destination.open("x", encoding=self.renderer.encoding) as handle:
                handle.write(rendered)
        except OSError as exc:
            if isinstance(exc, FileExistsError) and destination.is_file():
                return self._record_existing(kind, destination)
            self.report.add(ArtifactResult.failed(kind, destination, str(exc)))
            raise

        leftovers = self.renderer.leftover_tokens(rendered)
        if leftovers:
            LOGGER.warning("%s still contains unreplaced tokens: %s", destination, ", ".join(leftovers))

        LOGGER.debug("wrote %s from %s", destination, stub_path)
        return self.report.add(ArtifactResult.created(kind, destination))
