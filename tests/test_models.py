"""Tests for data models."""

import math
from datetime import date

from regatta_clash.issues import IssueCollector
from regatta_clash.models import (
    BladeClash,
    BladeSet,
    BladeSilence,
    Boat,
    BoatClash,
    BoatSilence,
    ClashReport,
    ClashSummary,
    DayGroup,
    DivisionGroup,
    Entry,
    Race,
)


class TestEntry:
    """Tests for Entry model."""

    def test_from_dict(self):
        entry = Entry.from_dict(
            {
                "raceId": "r1",
                "day": "Sat 14 Jun",
                "div": "J16",
                "event": "J16 2-",
                "boat": "Eight A",
                "blades": "SetX",
                "status": "entered",
                "athleteNames": "A. Rower, B. Rower",
                "crewChanged": True,
                "crewNumber": 3,
            },
            doc_id="e1",
        )
        assert entry.id == "e1"
        assert entry.race_id == "r1"
        assert entry.boat == "Eight A"
        assert entry.is_entered
        assert entry.crew_changed is True
        assert entry.crew_number == 3

    def test_id_from_document(self):
        assert Entry.from_dict({"id": "e9"}).id == "e9"

    def test_missing_fields_default(self):
        entry = Entry.from_dict({})
        assert entry.boat == ""
        assert entry.blades == ""
        assert entry.status == "ready"
        assert not entry.is_entered

    def test_required_fields_recorded(self):
        issues = IssueCollector("entries", "e1")
        Entry.from_dict({"status": "entered"}, "e1", issues)
        fields = {i.field for i in issues.issues if i.level == "error"}
        assert fields == {"raceId", "day", "div", "event"}

    def test_unknown_status_withdrawn_flag(self):
        issues = IssueCollector("entries", "e1")
        entry = Entry.from_dict({"status": "gone", "withdrawn": True}, "e1", issues)
        assert entry.status == "withdrawn"
        assert any("fallback to 'withdrawn'" in i.message for i in issues.issues)

    def test_unknown_status_rejected_flag(self):
        entry = Entry.from_dict({"rejected": "TRUE"})
        assert entry.status == "rejected"

    def test_withdrawn_flag_takes_precedence(self):
        entry = Entry.from_dict({"withdrawn": True, "rejected": True})
        assert entry.status == "withdrawn"

    def test_known_status_ignores_flags(self):
        entry = Entry.from_dict({"status": "entered", "withdrawn": True})
        assert entry.status == "entered"

    def test_non_dict_document(self):
        entry = Entry.from_dict("garbage", doc_id="e1")
        assert entry.id == "e1"
        assert entry.status == "ready"

    def test_to_dict_round_trip(self):
        entry = Entry(id="e1", race_id="r1", day="Sat", div="J16", event="J16 2-", boat="A")
        assert Entry.from_dict(entry.to_dict()) == entry


class TestDivisionGroup:
    """Tests for DivisionGroup model."""

    def test_from_dict(self):
        group = DivisionGroup.from_dict(
            {"raceId": "r1", "day": "Sat", "group": "Juniors", "divisions": ["J15", "J16"]},
            "g1",
        )
        assert group.divisions == ["J15", "J16"]

    def test_spreadsheet_divisions(self):
        group = DivisionGroup.from_dict({"divisions": "J15, J16"})
        assert group.divisions == ["J15", "J16"]

    def test_missing_divisions_recorded(self):
        issues = IssueCollector("divisionGroups", "g1")
        group = DivisionGroup.from_dict({"raceId": "r1", "day": "Sat", "group": "A"}, "g1", issues)
        assert group.divisions == []
        assert [i.field for i in issues.issues] == ["divisions"]


class TestBoat:
    def test_from_dict(self):
        boat = Boat.from_dict({"name": "Eight A", "type": "8+", "active": "yes", "weight": "90"})
        assert boat.name == "Eight A"
        assert boat.active is True
        assert boat.weight == 90


class TestBladeSet:
    """Tests for BladeSet model."""

    def test_amount(self):
        blade = BladeSet.from_dict({"name": "SetX", "amount": 8, "lengthCode": "3"}, "b1")
        assert blade.amount == 8
        assert blade.available == 8
        assert blade.length_code == "3"

    def test_missing_amount_unlimited(self):
        blade = BladeSet.from_dict({"name": "SetX"})
        assert blade.amount is None
        assert math.isinf(blade.available)

    def test_non_numeric_amount_unlimited(self):
        issues = IssueCollector("blades", "b1")
        blade = BladeSet.from_dict({"name": "SetX", "amount": "lots"}, "b1", issues)
        assert math.isinf(blade.available)
        assert issues.issues[0].field == "amount"

    def test_unknown_length_code(self):
        issues = IssueCollector("blades", "b1")
        blade = BladeSet.from_dict({"name": "SetX", "lengthCode": "9"}, "b1", issues)
        assert blade.length_code is None
        assert "fallback to none" in issues.issues[0].message


class TestSilences:
    def test_boat_silence(self):
        silence = BoatSilence.from_dict(
            {"raceId": "r1", "day": "Sat", "group": "J16", "boat": "Eight A"}, "s1"
        )
        assert (silence.day, silence.group, silence.boat) == ("Sat", "J16", "Eight A")

    def test_blade_silence_required_fields(self):
        issues = IssueCollector("silencedBladeClashes", "s1")
        BladeSilence.from_dict({"raceId": "r1"}, "s1", issues)
        assert {i.field for i in issues.issues} == {"day", "group", "blade"}


class TestRace:
    def test_from_dict(self):
        race = Race.from_dict(
            {"name": "Summer", "startDate": "2025-06-14", "endDate": "2025-06-15"}, "r1"
        )
        assert race.start_date == date(2025, 6, 14)
        assert race.to_dict()["endDate"] == "2025-06-15"


class TestClashes:
    """Tests for derived clash records."""

    def test_day_group_defaults_to_declared(self):
        assert DayGroup("Sat", "Juniors").implicit is False

    def test_boat_clash_key(self):
        clash = BoatClash(day="Sat", group="J16", boat="Eight A", count=2)
        assert clash.key == "Sat::J16::Eight A"
        assert clash.to_dict()["silenced"] is False

    def test_blade_clash_shortfall(self):
        clash = BladeClash(day="Sat", group="J16", blade="SetX", used=6, amount=4)
        assert clash.shortfall == 2
        assert clash.key == "Sat::J16::SetX"

    def test_report_counts(self):
        report = ClashReport(
            boat_clashes=[
                BoatClash("Sat", "J16", "A", 2, silenced=True),
                BoatClash("Sat", "J16", "B", 2),
            ],
            blade_clashes=[BladeClash("Sat", "J16", "SetX", 4, 2)],
            summary=ClashSummary(True, True, True),
        )
        assert report.total_clashes == 3
        assert report.total_unresolved == 2
        assert [c.boat for c in report.unresolved_boat_clashes] == ["B"]
        data = report.to_dict()
        assert data["total_unresolved"] == 2
        assert len(data["boat_clashes"]) == 2
