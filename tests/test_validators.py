"""Tests for snapshot document validation."""

from regatta_clash.validators import run_validation


def _messages(result, collection=None):
    return [i.message for i in result.issues if collection in (None, i.collection)]


class TestRunValidation:
    """Tests for run_validation function."""

    def test_clean_snapshot(self, snapshot_documents):
        result = run_validation(snapshot_documents)
        assert result.issues == []
        assert result.scanned == 11
        assert not result.has_errors

    def test_missing_required_field(self):
        result = run_validation({"entries": [{"id": "e1", "raceId": "r1", "day": "Sat"}]})
        errors = result.errors
        assert {i.field for i in errors} == {"div", "event"}
        assert all(i.doc_id == "e1" for i in errors)
        assert result.has_errors

    def test_type_fallback_warning(self):
        doc = {"id": "b1", "name": "SetX", "amount": "two"}
        result = run_validation({"blades": [doc]}, collections=["blades"])
        assert [i.field for i in result.warnings] == ["amount", "amount"]
        assert "type fallback" in result.warnings[0].message
        assert "unlimited" in result.warnings[1].message

    def test_negative_amount(self):
        result = run_validation({"blades": [{"id": "b1", "name": "SetX", "amount": -2}]})
        assert _messages(result) == ["Negative amount -2"]

    def test_unknown_event_class_warned_for_entered(self):
        entry = {
            "id": "e1",
            "raceId": "r1",
            "day": "Sat",
            "div": "J16",
            "event": "Tub race",
            "status": "entered",
        }
        result = run_validation({"entries": [entry]})
        assert [i.field for i in result.warnings] == ["event"]

    def test_empty_blade_part(self):
        entry = {
            "id": "e1",
            "raceId": "r1",
            "day": "Sat",
            "div": "J16",
            "event": "J16 2x",
            "blades": "SetA + ",
            "status": "ready",
        }
        result = run_validation({"entries": [entry]})
        assert [i.field for i in result.warnings] == ["blades"]

    def test_unknown_boat_type(self):
        result = run_validation({"boats": [{"id": "bt1", "name": "Tub", "type": "bathtub"}]})
        assert _messages(result) == ["Unknown boat type 'bathtub'"]

    def test_duplicate_division_in_group(self):
        group = {
            "id": "g1",
            "raceId": "r1",
            "day": "Sat",
            "group": "A",
            "divisions": ["J16", "J16"],
        }
        result = run_validation({"divisionGroups": [group]})
        assert _messages(result) == ["Division 'J16' listed twice"]

    def test_overlapping_groups(self):
        groups = [
            {"id": "g1", "raceId": "r1", "day": "Sat", "group": "A", "divisions": ["J16"]},
            {"id": "g2", "raceId": "r1", "day": "Sat", "group": "B", "divisions": ["J16"]},
        ]
        result = run_validation({"divisionGroups": groups})
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.doc_id == "g2"
        assert issue.field == "divisions"
        assert "entries go to 'A'" in issue.message

    def test_overlap_in_other_race_is_fine(self):
        groups = [
            {"id": "g1", "raceId": "r1", "day": "Sat", "group": "A", "divisions": ["J16"]},
            {"id": "g2", "raceId": "r2", "day": "Sat", "group": "B", "divisions": ["J16"]},
        ]
        assert run_validation({"divisionGroups": groups}).issues == []

    def test_race_end_before_start(self):
        race = {"id": "r1", "name": "Regatta", "startDate": "2025-06-15", "endDate": "2025-06-14"}
        result = run_validation({"races": [race]})
        assert [i.field for i in result.warnings] == ["endDate"]

    def test_unsupported_collection(self):
        result = run_validation({}, collections=["coaches"])
        assert result.issues[0].message == "Unsupported collection"
        assert result.issues[0].level == "warn"

    def test_limit_per_collection(self):
        boats = [{"id": f"bt{i}", "name": f"Boat {i}", "type": "1x"} for i in range(10)]
        result = run_validation({"boats": boats}, limit_per_collection=3)
        assert result.scanned == 3

    def test_max_issues(self):
        entries = [{"id": f"e{i}"} for i in range(20)]
        result = run_validation({"entries": entries}, max_issues=5)
        assert len(result.issues) == 5

    def test_selected_collections_only(self, snapshot_documents):
        snapshot_documents["boats"].append({"id": "bad"})
        result = run_validation(snapshot_documents, collections=["entries"])
        assert result.issues == []
        assert result.scanned == 5

    def test_to_dict(self):
        result = run_validation({"boats": [{"id": "bt1"}]})
        data = result.to_dict()
        assert data["scanned"] == 1
        assert {i["field"] for i in data["issues"]} == {"name", "type"}
