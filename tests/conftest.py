from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from modkit.config import GeneratorSettings  # noqa: E402


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """An empty project root with an ``app/`` directory."""

    root = tmp_path / "project"
    (root / "app").mkdir(parents=True)
    return root


@pytest.fixture()
def settings(project: Path) -> GeneratorSettings:
    return GeneratorSettings.from_base_path(project)


@pytest.fixture()
def clock():
    return lambda: datetime(2024, 3, 5, 14, 30, 9)
