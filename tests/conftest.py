"""Pytest configuration and shared fixtures for cabinet manufacturing tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from cabinet_mfg.application import CabinetPipeline
from cabinet_mfg.domain import Cabinet, CabinetIntent, default_catalog
from cabinet_mfg.domain.registries import MaterialCatalog


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def catalog() -> MaterialCatalog:
    """The built-in material catalogue."""
    return default_catalog()


@pytest.fixture
def default_intent() -> CabinetIntent:
    """A 600 x 720 x 560 base cabinet with one shelf and an inset back."""
    return CabinetIntent()


@pytest.fixture
def pipeline() -> CabinetPipeline:
    return CabinetPipeline()


@pytest.fixture
def cabinet(pipeline: CabinetPipeline, default_intent: CabinetIntent) -> Cabinet:
    """The default cabinet, computed in DRAFT."""
    return pipeline.compute(default_intent)


# =============================================================================
# Project file fixtures
# =============================================================================


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a project file into tmp_path and return its path.

    The data is merged over a minimal valid project, so tests only spell out
    the sections they care about. Pass ``raw`` to write text verbatim.
    """

    def _write(
        data: dict[str, Any] | None = None,
        name: str = "project.json",
        raw: str | None = None,
    ) -> Path:
        path = tmp_path / name
        if raw is not None:
            path.write_text(raw)
            return path
        project: dict[str, Any] = {"schema_version": "1.0"}
        project.update(data or {})
        path.write_text(json.dumps(project, indent=2))
        return path

    return _write
