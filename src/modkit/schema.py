"""Result models describing what a generation run did."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ArtifactKind(str, Enum):
    """Files the module generator knows how to emit."""

    MODEL = "model"
    CONTROLLER = "controller"
    API_CONTROLLER = "api_controller"
    MIGRATION = "migration"
    VUE_COMPONENT = "vue_component"
    VIEW = "view"
    WEB_ROUTES = "web_routes"
    API_ROUTES = "api_routes"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ArtifactKind.MODEL: "Model",
    ArtifactKind.CONTROLLER: "Controller",
    ArtifactKind.API_CONTROLLER: "Api Controller",
    ArtifactKind.MIGRATION: "Migration",
    ArtifactKind.VUE_COMPONENT: "Vue Component",
    ArtifactKind.VIEW: "View",
    ArtifactKind.WEB_ROUTES: "Web Routes",
    ArtifactKind.API_ROUTES: "Api Routes",
}


class ArtifactStatus(str, Enum):
    CREATED = "created"
    EXISTS = "exists"
    FAILED = "failed"


class EventLevel(str, Enum):
    """Severity attached to an :class:`ArtifactResult`."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ArtifactResult(BaseModel):
    """Outcome of a single write-once attempt."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ArtifactKind = Field(..., description="Type of file that was generated.")
    path: str = Field(..., description="Destination path of the file.")
    status: ArtifactStatus = Field(..., description="Whether the file was written, skipped or failed.")
    level: EventLevel = Field(default=EventLevel.INFO, description="Severity of the outcome.")
    message: str = Field(..., description="Human-readable description of the outcome.")

    @classmethod
    def created(cls, kind: ArtifactKind, path: str | Path) -> "ArtifactResult":
        return cls(
            kind=kind,
            path=str(path),
            status=ArtifactStatus.CREATED,
            level=EventLevel.INFO,
            message=f"{kind.label} created successfully.",
        )

    @classmethod
    def exists(cls, kind: ArtifactKind, path: str | Path) -> "ArtifactResult":
        return cls(
            kind=kind,
            path=str(path),
            status=ArtifactStatus.EXISTS,
            level=EventLevel.ERROR,
            message=f"{kind.label} already exists!",
        )

    @classmethod
    def failed(cls, kind: ArtifactKind, path: str | Path, reason: str) -> "ArtifactResult":
        return cls(
            kind=kind,
            path=str(path),
            status=ArtifactStatus.FAILED,
            level=EventLevel.ERROR,
            message=f"{kind.label} could not be created: {reason}",
        )


class GenerationReport(BaseModel):
    """Ordered record of every artifact attempted for a module."""

    model_config = ConfigDict(extra="forbid")

    module: str = Field(..., description="Module name the report belongs to.")
    results: List[ArtifactResult] = Field(default_factory=list, description="Results in emission order.")

    def add(self, result: ArtifactResult) -> ArtifactResult:
        self.results.append(result)
        return result

    def with_status(self, status: ArtifactStatus) -> tuple[ArtifactResult, ...]:
        return tuple(result for result in self.results if result.status == status)

    @property
    def created(self) -> tuple[ArtifactResult, ...]:
        return self.with_status(ArtifactStatus.CREATED)

    @property
    def skipped(self) -> tuple[ArtifactResult, ...]:
        return self.with_status(ArtifactStatus.EXISTS)

    @property
    def failed(self) -> tuple[ArtifactResult, ...]:
        return self.with_status(ArtifactStatus.FAILED)

    @property
    def ok(self) -> bool:
        """``True`` when nothing failed; skipped files do not count as failures."""

        return not self.failed
