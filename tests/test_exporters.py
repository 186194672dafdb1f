"""Tests for clash report exporters."""

import csv
import json

import pandas as pd
import pytest

from regatta_clash.engine import ClashEngine
from regatta_clash.exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter


@pytest.fixture
def report(pair_entries, setx_inventory, eight_a_silence):
    engine = ClashEngine(day_order=["Sat"], race_id="r1")
    return engine.report(pair_entries, [], [eight_a_silence], [], setx_inventory)


class TestJSONExporter:
    def test_export(self, report, tmp_path):
        output = tmp_path / "out" / "clashes.json"
        JSONExporter().export(report, output)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["race_id"] == "r1"
        assert data["boat_clashes"][0]["silenced"] is True
        assert data["blade_clashes"][0]["amount"] == 2
        assert data["total_unresolved"] == 1


class TestCSVExporter:
    """Tests for CSVExporter class."""

    def test_creates_three_files(self, report, tmp_path):
        CSVExporter().export(report, tmp_path / "csv")
        names = sorted(p.name for p in (tmp_path / "csv").iterdir())
        assert names == ["blade_clashes.csv", "boat_clashes.csv", "summary.csv"]

    def test_boat_rows(self, report, tmp_path):
        CSVExporter().export(report, tmp_path)
        with open(tmp_path / "boat_clashes.csv", encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert rows == [
            {
                "key": "Sat::J16::Eight A",
                "day": "Sat",
                "group": "J16",
                "boat": "Eight A",
                "count": "2",
                "silenced": "True",
            }
        ]

    def test_empty_report_writes_headers(self, tmp_path):
        report = ClashEngine().report([], [], [], [], [])
        CSVExporter().export(report, tmp_path)
        header = (tmp_path / "blade_clashes.csv").read_text(encoding="utf-8").strip()
        assert header == "key,day,group,blade,used,amount,silenced"


class TestExcelExporter:
    """Tests for ExcelExporter class."""

    def test_sheets(self, report, tmp_path):
        output = tmp_path / "clashes.xlsx"
        ExcelExporter().export(report, output)

        sheets = pd.read_excel(output, sheet_name=None)
        assert list(sheets) == ["Boat Clashes", "Blade Clashes", "Summary"]
        blades = sheets["Blade Clashes"]
        assert list(blades.columns) == ["Key", "Day", "Group", "Blade", "Used", "Amount", "Silenced"]
        assert blades.loc[0, "Used"] == 4


class TestGetExporter:
    """Tests for get_exporter function."""

    @pytest.mark.parametrize(
        "format_type,cls",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, format_type, cls):
        assert isinstance(get_exporter(format_type), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("pdf")
