"""Tests for the cut list CSV exporter."""

from __future__ import annotations

import csv
import io
from dataclasses import replace
from pathlib import Path

import pytest

from cabinet_mfg.domain import Cabinet
from cabinet_mfg.infrastructure.exporters import CutListExporter
from cabinet_mfg.infrastructure.exporters.cut_list import COLUMNS


def read_rows(text: str) -> dict[str, dict[str, str]]:
    return {row["panel_id"]: row for row in csv.DictReader(io.StringIO(text))}


@pytest.fixture
def rows(cabinet: Cabinet) -> dict[str, dict[str, str]]:
    return read_rows(CutListExporter().export_string(cabinet))


class TestCutListExporter:
    """Tests for CutListExporter."""

    def test_header(self, cabinet: Cabinet) -> None:
        first_line = CutListExporter().export_string(cabinet).splitlines()[0]
        assert first_line.split(",") == COLUMNS

    def test_one_row_per_panel(self, cabinet: Cabinet, rows: dict[str, dict[str, str]]) -> None:
        assert list(rows) == [p.id for p in cabinet.panels]

    def test_side_row(self, rows: dict[str, dict[str, str]]) -> None:
        """Banded edges add the 0.5 mm pre-mill trim to the saw size."""
        side = rows["left_side"]
        assert side["role"] == "left_side"
        assert side["core"] == "core-pb-16"
        assert side["thickness"] == "16.80"
        assert side["finish_width"] == "560.00"
        assert side["finish_height"] == "620.00"
        assert side["cut_width"] == "559.00"
        assert side["cut_height"] == "618.00"
        assert side["saw_width"] == "559.50"
        assert side["saw_height"] == "619.00"
        banded = [side[f"edge_{s}"] for s in ("top", "bottom", "left", "right") if side[f"edge_{s}"]]
        assert banded == ["edge-pvc-white-10"] * 3

    def test_unbanded_back(self, rows: dict[str, dict[str, str]]) -> None:
        back = rows["back"]
        assert back["saw_width"] == back["cut_width"] == "600.00"
        assert back["saw_height"] == back["cut_height"] == "620.00"
        assert back["face_a"] == ""
        assert back["face_b"] == ""

    def test_shelf_weight(self, rows: dict[str, dict[str, str]]) -> None:
        assert rows["shelf_1"]["weight_kg"] == "3.16"
        assert rows["shelf_1"]["face_a"] == "surf-mel-white"

    def test_export_writes_file(self, cabinet: Cabinet, tmp_path: Path) -> None:
        path = tmp_path / "cutlist.csv"
        exporter = CutListExporter()
        exporter.export(cabinet, path)
        assert path.read_text() == exporter.export_string(cabinet)

    def test_empty_cabinet_is_header_only(self, cabinet: Cabinet) -> None:
        empty = replace(cabinet, panels=())
        assert CutListExporter().export_string(empty).strip() == ",".join(COLUMNS)
