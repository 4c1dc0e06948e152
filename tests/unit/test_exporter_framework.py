"""Tests for the exporter framework (base.py)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

import pytest

from cabinet_mfg.application import CabinetPipeline, Freeze, Release
from cabinet_mfg.domain import Cabinet, CabinetIntent
from cabinet_mfg.domain.value_objects import CabinetDimensions, ExportFormat
from cabinet_mfg.infrastructure.exporters import (
    BomGenerator,
    CncProgramExporter,
    CutListExporter,
    DxfExporter,
    ExportBlockedError,
    Exporter,
    ExporterRegistry,
    ExportManager,
    ManifestExporter,
)


class TestExporterRegistry:
    """Tests for ExporterRegistry."""

    def setup_method(self) -> None:
        """Store original exporters before each test."""
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        """Restore original exporters after each test."""
        ExporterRegistry._exporters = self._original_exporters

    def test_builtin_exporters_registered(self) -> None:
        assert ExporterRegistry.get("cutlist") is CutListExporter
        assert ExporterRegistry.get("bom") is BomGenerator
        assert ExporterRegistry.get("manifest") is ManifestExporter
        assert ExporterRegistry.get("dxf") is DxfExporter
        assert ExporterRegistry.get("cnc") is CncProgramExporter

    def test_every_gate_format_has_an_exporter(self) -> None:
        assert sorted(f.value for f in ExportFormat) == ExporterRegistry.available_formats()

    def test_get_unknown_format_raises_key_error(self) -> None:
        """get() should raise KeyError for unknown formats."""
        with pytest.raises(KeyError) as exc_info:
            ExporterRegistry.get("unknown_format")
        assert "No exporter registered for format 'unknown_format'" in str(exc_info.value)

    def test_register_new_exporter(self) -> None:
        """register() should add a new exporter to the registry."""

        @ExporterRegistry.register("test_format")
        class TestExporter:
            format_name: ClassVar[str] = "test_format"
            file_extension: ClassVar[str] = "test"

            def export(self, cabinet, path: Path) -> None:
                pass

        assert ExporterRegistry.is_registered("test_format")
        assert ExporterRegistry.get("test_format") is TestExporter

    def test_clear_removes_all_exporters(self) -> None:
        ExporterRegistry.clear()
        assert ExporterRegistry.available_formats() == []


class TestExporterProtocol:
    """Tests for the Exporter protocol."""

    @pytest.mark.parametrize(
        "exporter",
        [CutListExporter(), BomGenerator(), ManifestExporter(), DxfExporter(), CncProgramExporter()],
    )
    def test_builtin_exporters_implement_protocol(self, exporter: object) -> None:
        assert isinstance(exporter, Exporter)


class TestExportManager:
    """Tests for ExportManager."""

    def test_draft_formats_written(self, cabinet: Cabinet, tmp_path: Path) -> None:
        manager = ExportManager(tmp_path / "out")
        results = manager.export_all(["cutlist", "bom", "manifest"], cabinet, "kitchen")

        assert results == {
            "cutlist": tmp_path / "out" / "kitchen_cutlist.csv",
            "bom": tmp_path / "out" / "kitchen_bom.csv",
            "manifest": tmp_path / "out" / "kitchen_manifest.json",
        }
        assert all(path.exists() for path in results.values())

    def test_blocked_format_writes_nothing(self, cabinet: Cabinet, tmp_path: Path) -> None:
        """A DXF request on a draft fails before any file is written."""
        out = tmp_path / "out"
        manager = ExportManager(out)
        with pytest.raises(ExportBlockedError) as exc_info:
            manager.export_all(["cutlist", "dxf"], cabinet)
        assert exc_info.value.permission.format == ExportFormat.DXF
        assert "requires frozen state" in str(exc_info.value)
        assert not out.exists()

    def test_skip_blocked(
        self, cabinet: Cabinet, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        manager = ExportManager(tmp_path)
        with caplog.at_level(logging.WARNING):
            results = manager.export_all(["cutlist", "dxf", "cnc"], cabinet, skip_blocked=True)
        assert list(results) == ["cutlist"]
        assert "Skipping dxf export" in caplog.text

    def test_validation_errors_block_draft_formats(
        self, pipeline: CabinetPipeline, tmp_path: Path
    ) -> None:
        broken = pipeline.compute(CabinetIntent(dimensions=CabinetDimensions(width=100)))
        with pytest.raises(ExportBlockedError):
            ExportManager(tmp_path).export_single("cutlist", broken)

    def test_frozen_allows_dxf(
        self, pipeline: CabinetPipeline, cabinet: Cabinet, tmp_path: Path
    ) -> None:
        frozen = pipeline.reduce(cabinet, Freeze())
        path = ExportManager(tmp_path).export_single("dxf", frozen)
        assert path == tmp_path / "cabinet_dxf.dxf"
        assert path.exists()

    def test_released_allows_cnc(
        self, pipeline: CabinetPipeline, cabinet: Cabinet, tmp_path: Path
    ) -> None:
        released = pipeline.reduce(pipeline.reduce(cabinet, Freeze()), Release())
        path = ExportManager(tmp_path).export_single("cnc", released)
        assert path.read_text().startswith("{")

    def test_exporter_options_passed_through(
        self, pipeline: CabinetPipeline, cabinet: Cabinet, tmp_path: Path
    ) -> None:
        frozen = pipeline.reduce(cabinet, Freeze())
        manager = ExportManager(tmp_path, {"dxf": {"mode": "per_panel"}})
        path = manager.export_single("dxf", frozen, "job")
        assert path == tmp_path / "job_dxf"
        assert path.is_dir()
        assert len(list(path.glob("*.dxf"))) == 6

    def test_unknown_format_raises_key_error(self, cabinet: Cabinet, tmp_path: Path) -> None:
        with pytest.raises(KeyError):
            ExportManager(tmp_path).export_all(["unknown_format"], cabinet)
