"""Snapshot loading from an exported document store.

A snapshot directory holds one file per collection, named after the
collection (``entries.json``, ``blades.csv``, ``divisionGroups.xlsx``...).
JSON files contain either a list of documents or an object mapping document
ids to documents. Spreadsheets have one document per row.
"""

import json
import logging
import zipfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from .constants import (
    ALL_COLLECTIONS,
    COLLECTION_BLADES,
    COLLECTION_BOATS,
    COLLECTION_DIVISION_GROUPS,
    COLLECTION_ENTRIES,
    COLLECTION_RACES,
    COLLECTION_SILENCED_BLADE_CLASHES,
    COLLECTION_SILENCED_CLASHES,
    RACE_SCOPED_COLLECTIONS,
    SNAPSHOT_EXTENSIONS,
)
from .engine.ordering import race_day_order
from .exceptions import CollectionFormatError, SnapshotNotFoundError
from .models import (
    BladeSet,
    BladeSilence,
    Boat,
    BoatSilence,
    DivisionGroup,
    Entry,
    Race,
)
from .normalization import as_string

logger = logging.getLogger(__name__)

RawDocument = dict[str, Any]


@dataclass
class RaceSnapshot:
    """All collections of a snapshot, as models and as raw documents."""

    races: list[Race] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)
    boats: list[Boat] = field(default_factory=list)
    blades: list[BladeSet] = field(default_factory=list)
    division_groups: list[DivisionGroup] = field(default_factory=list)
    silences: list[BoatSilence] = field(default_factory=list)
    blade_silences: list[BladeSilence] = field(default_factory=list)
    raw: dict[str, list[RawDocument]] = field(default_factory=dict)
    race_id: str | None = None

    @property
    def race(self) -> Race | None:
        """The selected race, or the only race of the snapshot."""
        if self.race_id is not None:
            return next((r for r in self.races if r.id == self.race_id), None)
        if len(self.races) == 1:
            return self.races[0]
        return None

    @property
    def race_ids(self) -> list[str]:
        """Race ids seen in races and entries, in first-seen order."""
        ids = [r.id for r in self.races] + [e.race_id for e in self.entries]
        return [race_id for race_id in dict.fromkeys(ids) if race_id]

    def day_order(self) -> list[str]:
        """Day labels of the selected race, empty when unknown."""
        race = self.race
        if race is None:
            return []
        return race_day_order(race.start_date, race.end_date)

    def for_race(self, race_id: str) -> "RaceSnapshot":
        """Return a copy restricted to one race.

        Boats and blades are club-wide and kept as they are.
        """
        raw = {
            name: [doc for doc in docs if as_string(doc.get("raceId")) == race_id]
            if name in RACE_SCOPED_COLLECTIONS
            else list(docs)
            for name, docs in self.raw.items()
        }
        return replace(
            self,
            races=[r for r in self.races if r.id == race_id],
            entries=[e for e in self.entries if e.race_id == race_id],
            division_groups=[g for g in self.division_groups if g.race_id == race_id],
            silences=[s for s in self.silences if s.race_id == race_id],
            blade_silences=[s for s in self.blade_silences if s.race_id == race_id],
            raw=raw,
            race_id=race_id,
        )


class SnapshotLoader:
    """Loads collections from a snapshot directory."""

    MODEL_TYPES = {
        COLLECTION_RACES: Race,
        COLLECTION_ENTRIES: Entry,
        COLLECTION_BOATS: Boat,
        COLLECTION_BLADES: BladeSet,
        COLLECTION_DIVISION_GROUPS: DivisionGroup,
        COLLECTION_SILENCED_CLASHES: BoatSilence,
        COLLECTION_SILENCED_BLADE_CLASHES: BladeSilence,
    }

    def __init__(self, snapshot_dir: Path | str):
        """
        Initialize snapshot loader.

        Args:
            snapshot_dir: Directory containing one file per collection.

        Raises:
            SnapshotNotFoundError: If the directory does not exist
        """
        self.snapshot_dir = Path(snapshot_dir)
        if not self.snapshot_dir.is_dir():
            raise SnapshotNotFoundError(str(self.snapshot_dir))

    def _get_path(self, collection: str) -> Path | None:
        """Get path to a collection file if one exists."""
        for extension in SNAPSHOT_EXTENSIONS:
            path = self.snapshot_dir / f"{collection}{extension}"
            if path.exists():
                return path
        return None

    def read_collection(self, collection: str) -> list[RawDocument]:
        """Read the raw documents of one collection.

        Missing collection files yield an empty list. Every returned document
        has an ``id`` key.

        Raises:
            CollectionFormatError: If the file cannot be parsed
        """
        path = self._get_path(collection)
        if path is None:
            logger.info(f"No '{collection}' file in {self.snapshot_dir}; treating as empty")
            return []

        if path.suffix == ".json":
            documents = self._read_json(collection, path)
        else:
            documents = self._read_table(collection, path)

        logger.debug(f"Read {len(documents)} '{collection}' documents from {path.name}")
        return documents

    def _read_json(self, collection: str, path: Path) -> list[RawDocument]:
        """Read a JSON collection file (list of docs or id -> doc object)."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CollectionFormatError(collection, str(path), str(e)) from e

        if isinstance(data, dict):
            items = [(str(doc_id), doc) for doc_id, doc in data.items()]
        elif isinstance(data, list):
            items = [(None, doc) for doc in data]
        else:
            raise CollectionFormatError(
                collection, str(path), f"expected a list or object, got {type(data).__name__}"
            )

        documents: list[RawDocument] = []
        for position, (doc_id, doc) in enumerate(items):
            if not isinstance(doc, dict):
                logger.warning(
                    f"Skipping '{collection}' document #{position} in {path.name}: "
                    f"not an object"
                )
                continue
            documents.append(self._with_id(doc, doc_id, position))
        return documents

    def _read_table(self, collection: str, path: Path) -> list[RawDocument]:
        """Read a CSV or Excel collection file, one document per row."""
        try:
            if path.suffix == ".csv":
                df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
            else:
                df = pd.read_excel(
                    path, dtype=str, keep_default_na=False, na_values=[""], engine="openpyxl"
                )
        except (OSError, ValueError, zipfile.BadZipFile, InvalidFileException) as e:
            raise CollectionFormatError(collection, str(path), str(e)) from e

        df = df.dropna(how="all")
        records = df.to_dict(orient="records")
        return [
            self._with_id(record, None, position) for position, record in enumerate(records)
        ]

    @staticmethod
    def _with_id(doc: RawDocument, doc_id: str | None, position: int) -> RawDocument:
        """Copy a document, making sure it carries an id."""
        document = dict(doc)
        if doc_id is not None:
            document["id"] = doc_id
        elif not as_string(document.get("id")):
            document["id"] = f"#{position}"
        return document

    def load(self, race_id: str | None = None) -> RaceSnapshot:
        """Load every collection of the snapshot.

        Args:
            race_id: Restrict race-scoped collections to this race

        Returns:
            RaceSnapshot with models and raw documents
        """
        raw = {collection: self.read_collection(collection) for collection in ALL_COLLECTIONS}

        def build(collection: str) -> list:
            model = self.MODEL_TYPES[collection]
            return [model.from_dict(doc, as_string(doc.get("id"))) for doc in raw[collection]]

        snapshot = RaceSnapshot(
            races=build(COLLECTION_RACES),
            entries=build(COLLECTION_ENTRIES),
            boats=build(COLLECTION_BOATS),
            blades=build(COLLECTION_BLADES),
            division_groups=build(COLLECTION_DIVISION_GROUPS),
            silences=build(COLLECTION_SILENCED_CLASHES),
            blade_silences=build(COLLECTION_SILENCED_BLADE_CLASHES),
            raw=raw,
        )
        logger.info(
            f"Loaded snapshot from {self.snapshot_dir}: {len(snapshot.races)} races, "
            f"{len(snapshot.entries)} entries, {len(snapshot.blades)} blade sets"
        )

        if race_id is not None:
            return snapshot.for_race(race_id)
        return snapshot
