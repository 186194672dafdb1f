"""Test fixtures for regatta clash tests."""

import json

import pytest

from regatta_clash.models import BladeSet, BladeSilence, BoatSilence, DivisionGroup, Entry

RACE_ID = "r1"


@pytest.fixture
def make_entry():
    """Factory for entered crews with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        day="Sat",
        div="J16",
        event="J16 2-",
        boat="",
        blades="",
        status="entered",
        race_id=RACE_ID,
    ):
        return Entry(
            id=f"e{next(counter)}",
            race_id=race_id,
            day=day,
            div=div,
            event=event,
            boat=boat,
            blades=blades,
            status=status,
        )

    return _make


@pytest.fixture
def pair_entries(make_entry):
    """Two J16 pairs sharing boat "Eight A" and blade set "SetX"."""
    return [
        make_entry(boat="Eight A", blades="SetX"),
        make_entry(boat="Eight A", blades="SetX"),
    ]


@pytest.fixture
def setx_inventory():
    return [BladeSet(id="b1", name="SetX", amount=2)]


@pytest.fixture
def eight_a_silence():
    return BoatSilence(id="s1", race_id=RACE_ID, day="Sat", group="J16", boat="Eight A")


@pytest.fixture
def setx_silence():
    return BladeSilence(id="bs1", race_id=RACE_ID, day="Sat", group="J16", blade="SetX")


@pytest.fixture
def junior_group():
    """J15 and J16 race together on Saturday."""
    return DivisionGroup(
        id="g1", race_id=RACE_ID, day="Sat", group="Juniors", divisions=["J15", "J16"]
    )


@pytest.fixture
def snapshot_documents():
    """Raw documents of a small two-day regatta."""
    return {
        "races": [
            {
                "id": RACE_ID,
                "name": "Summer Regatta",
                "startDate": "2025-06-14",
                "endDate": "2025-06-15",
            }
        ],
        "entries": [
            {
                "id": "e1",
                "raceId": RACE_ID,
                "day": "Sun 15 Jun",
                "div": "J16",
                "event": "J16 2-",
                "boat": "Pair B",
                "blades": "SetX",
                "status": "entered",
            },
            {
                "id": "e2",
                "raceId": RACE_ID,
                "day": "Sun 15 Jun",
                "div": "J16",
                "event": "J16 2-",
                "boat": "Pair B",
                "blades": "SetX",
                "status": "entered",
            },
            {
                "id": "e3",
                "raceId": RACE_ID,
                "day": "Sat 14 Jun",
                "div": "J15",
                "event": "J15 4x+",
                "boat": "Quad A",
                "blades": "SetY",
                "status": "entered",
            },
            {
                "id": "e4",
                "raceId": RACE_ID,
                "day": "Sat 14 Jun",
                "div": "J16",
                "event": "J16 4x+",
                "boat": "Quad A",
                "blades": "SetY",
                "status": "entered",
            },
            {
                "id": "e5",
                "raceId": RACE_ID,
                "day": "Sat 14 Jun",
                "div": "J16",
                "event": "J16 1x",
                "boat": "Quad A",
                "blades": "",
                "status": "withdrawn",
            },
        ],
        "boats": [
            {"id": "bt1", "name": "Pair B", "type": "2-"},
            {"id": "bt2", "name": "Quad A", "type": "4x+"},
        ],
        "blades": [
            {"id": "b1", "name": "SetX", "amount": 2, "lengthCode": "3"},
            {"id": "b2", "name": "SetY", "amount": 8, "lengthCode": "2"},
        ],
        "divisionGroups": [
            {
                "id": "g1",
                "raceId": RACE_ID,
                "day": "Sat 14 Jun",
                "group": "Juniors",
                "divisions": ["J15", "J16"],
            }
        ],
        "silencedClashes": [],
        "silencedBladeClashes": [],
    }


@pytest.fixture
def snapshot_dir(tmp_path, snapshot_documents):
    """Snapshot directory with one JSON file per collection."""
    directory = tmp_path / "snapshot"
    directory.mkdir()
    for collection, documents in snapshot_documents.items():
        with open(directory / f"{collection}.json", "w", encoding="utf-8") as f:
            json.dump(documents, f)
    return directory
