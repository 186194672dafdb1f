"""Data models for regatta entries, equipment and clashes."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, NamedTuple, Self

from .constants import (
    BLADE_LENGTH_CODES,
    ENTRY_STATUSES,
    KEY_SEPARATOR,
    STATUS_ENTERED,
    STATUS_READY,
    STATUS_REJECTED,
    STATUS_WITHDRAWN,
)
from .issues import IssueCollector
from .normalization import (
    as_bool,
    as_date,
    as_number,
    as_record,
    as_string,
    as_string_list,
)


def _doc_id(data: dict[str, Any], doc_id: str | None) -> str:
    return doc_id if doc_id is not None else as_string(data.get("id"))


@dataclass
class Entry:
    """A crew's race registration.

    Attributes:
        id: Document id
        race_id: Race the entry belongs to
        day: Day label (e.g. "Sat 14 Jun")
        div: Division label (e.g. "J16")
        event: Free-text event descriptor (e.g. "J16 2-")
        boat: Assigned boat name, may be blank
        blades: Blade-set name(s), "+"-joined when shared
        status: in_progress, ready, entered, withdrawn or rejected
    """

    id: str
    race_id: str
    day: str
    div: str
    event: str
    boat: str = ""
    blades: str = ""
    status: str = STATUS_READY
    athlete_names: str = ""
    notes: str = ""
    crew_changed: bool = False
    crew_number: int | None = None

    @property
    def is_entered(self) -> bool:
        """True if the entry takes part in clash detection."""
        return self.status == STATUS_ENTERED

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        """Create an Entry from a raw document."""
        record = as_record(data)
        status = as_string(record.get("status"), issues=issues, field="status")
        if status not in ENTRY_STATUSES:
            if as_bool(record.get("withdrawn"), False):
                fallback = STATUS_WITHDRAWN
            elif as_bool(record.get("rejected"), False):
                fallback = STATUS_REJECTED
            else:
                fallback = STATUS_READY
            if issues is not None:
                issues.warn(
                    f"Unknown status '{status}'; fallback to '{fallback}'", "status"
                )
            status = fallback

        crew_number = as_number(
            record.get("crewNumber"), None, issues=issues, field="crewNumber"
        )
        return cls(
            id=_doc_id(record, doc_id),
            race_id=as_string(record.get("raceId"), required=True, issues=issues, field="raceId"),
            day=as_string(record.get("day"), required=True, issues=issues, field="day"),
            div=as_string(record.get("div"), required=True, issues=issues, field="div"),
            event=as_string(record.get("event"), required=True, issues=issues, field="event"),
            boat=as_string(record.get("boat"), issues=issues, field="boat"),
            blades=as_string(record.get("blades"), issues=issues, field="blades"),
            status=status,
            athlete_names=as_string(
                record.get("athleteNames"), issues=issues, field="athleteNames"
            ),
            notes=as_string(record.get("notes"), issues=issues, field="notes"),
            crew_changed=bool(
                as_bool(record.get("crewChanged"), False, issues=issues, field="crewChanged")
            ),
            crew_number=int(crew_number) if crew_number is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a raw document."""
        return {
            "id": self.id,
            "raceId": self.race_id,
            "day": self.day,
            "div": self.div,
            "event": self.event,
            "athleteNames": self.athlete_names,
            "boat": self.boat,
            "blades": self.blades,
            "notes": self.notes,
            "status": self.status,
            "crewChanged": self.crew_changed,
            "crewNumber": self.crew_number,
        }


@dataclass
class DivisionGroup:
    """Divisions racing together on one day and sharing equipment."""

    id: str
    race_id: str
    day: str
    group: str
    divisions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        """Create a DivisionGroup from a raw document."""
        record = as_record(data)
        if "divisions" not in record and issues is not None:
            issues.missing("divisions")
        return cls(
            id=_doc_id(record, doc_id),
            race_id=as_string(record.get("raceId"), required=True, issues=issues, field="raceId"),
            day=as_string(record.get("day"), required=True, issues=issues, field="day"),
            group=as_string(record.get("group"), required=True, issues=issues, field="group"),
            divisions=as_string_list(record.get("divisions"), issues=issues, field="divisions"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a raw document."""
        return {
            "id": self.id,
            "raceId": self.race_id,
            "day": self.day,
            "group": self.group,
            "divisions": list(self.divisions),
        }


@dataclass
class Boat:
    """A boat in the club inventory. ``name`` is the join key for entries."""

    id: str
    name: str
    type: str = ""
    active: bool | None = None
    weight: float | None = None

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        """Create a Boat from a raw document."""
        record = as_record(data)
        return cls(
            id=_doc_id(record, doc_id),
            name=as_string(record.get("name"), required=True, issues=issues, field="name"),
            type=as_string(record.get("type"), required=True, issues=issues, field="type"),
            active=as_bool(record.get("active"), None, issues=issues, field="active"),
            weight=as_number(record.get("weight"), None, issues=issues, field="weight"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a raw document."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "active": self.active,
            "weight": self.weight,
        }


@dataclass
class BladeSet:
    """A named set of oars.

    Attributes:
        id: Document id
        name: Join key used in an entry's ``blades`` field
        amount: Number of individual oars; None means unlimited
        length_code: "1"-"5" or "NA"
        active: Whether the set is in use
    """

    id: str
    name: str
    amount: int | float | None = None
    length_code: str | None = None
    active: bool | None = None

    @property
    def available(self) -> float:
        """Oars available, ``math.inf`` when the amount is unknown."""
        if self.amount is None or not math.isfinite(self.amount):
            return math.inf
        return self.amount

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        """Create a BladeSet from a raw document."""
        record = as_record(data)
        length_code = as_string(record.get("lengthCode"), issues=issues, field="lengthCode")
        if length_code and length_code not in BLADE_LENGTH_CODES:
            if issues is not None:
                issues.warn(
                    f"Unknown length code '{length_code}'; fallback to none", "lengthCode"
                )
            length_code = ""
        return cls(
            id=_doc_id(record, doc_id),
            name=as_string(record.get("name"), required=True, issues=issues, field="name"),
            amount=as_number(record.get("amount"), None, issues=issues, field="amount"),
            length_code=length_code or None,
            active=as_bool(record.get("active"), None, issues=issues, field="active"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a raw document."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "lengthCode": self.length_code,
            "active": self.active,
        }


@dataclass
class BoatSilence:
    """Acknowledgment of one boat clash, keyed by (race, day, group, boat)."""

    id: str
    race_id: str
    day: str
    group: str
    boat: str

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        record = as_record(data)
        return cls(
            id=_doc_id(record, doc_id),
            race_id=as_string(record.get("raceId"), required=True, issues=issues, field="raceId"),
            day=as_string(record.get("day"), required=True, issues=issues, field="day"),
            group=as_string(record.get("group"), required=True, issues=issues, field="group"),
            boat=as_string(record.get("boat"), required=True, issues=issues, field="boat"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "raceId": self.race_id,
            "day": self.day,
            "group": self.group,
            "boat": self.boat,
        }


@dataclass
class BladeSilence:
    """Acknowledgment of one blade clash, keyed by (race, day, group, blade)."""

    id: str
    race_id: str
    day: str
    group: str
    blade: str

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        record = as_record(data)
        return cls(
            id=_doc_id(record, doc_id),
            race_id=as_string(record.get("raceId"), required=True, issues=issues, field="raceId"),
            day=as_string(record.get("day"), required=True, issues=issues, field="day"),
            group=as_string(record.get("group"), required=True, issues=issues, field="group"),
            blade=as_string(record.get("blade"), required=True, issues=issues, field="blade"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "raceId": self.race_id,
            "day": self.day,
            "group": self.group,
            "blade": self.blade,
        }


@dataclass
class Race:
    """A regatta. Its dates determine the display order of entry days."""

    id: str
    name: str
    start_date: date | None = None
    end_date: date | None = None

    @classmethod
    def from_dict(
        cls,
        data: Any,
        doc_id: str | None = None,
        issues: IssueCollector | None = None,
    ) -> Self:
        """Create a Race from a raw document."""
        record = as_record(data)
        return cls(
            id=_doc_id(record, doc_id),
            name=as_string(record.get("name"), required=True, issues=issues, field="name"),
            start_date=as_date(
                record.get("startDate"), required=True, issues=issues, field="startDate"
            ),
            end_date=as_date(record.get("endDate"), issues=issues, field="endDate"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


class DayGroup(NamedTuple):
    """Bucket key: entries sharing one equipment pool.

    ``implicit`` marks the singleton group of an ungrouped division, whose
    ``group`` is the division label itself. Such a bucket is counted apart
    from a declared group of the same name, but clash keys and silences only
    see (day, group, item): both buckets' clashes share a key and one silence
    covers both. Avoid naming groups after divisions.
    """

    day: str
    group: str
    implicit: bool = False


@dataclass
class BoatClash:
    """A boat assigned to two or more entries in the same bucket."""

    day: str
    group: str
    boat: str
    count: int
    silenced: bool = False

    @property
    def key(self) -> str:
        return KEY_SEPARATOR.join((self.day, self.group, self.boat))

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "day": self.day,
            "group": self.group,
            "boat": self.boat,
            "count": self.count,
            "silenced": self.silenced,
        }


@dataclass
class BladeClash:
    """A blade set whose oar demand in a bucket exceeds its inventory."""

    day: str
    group: str
    blade: str
    used: int
    amount: int | float
    silenced: bool = False

    @property
    def key(self) -> str:
        return KEY_SEPARATOR.join((self.day, self.group, self.blade))

    @property
    def shortfall(self) -> int | float:
        """Oars missing to cover the demand."""
        return self.used - self.amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "day": self.day,
            "group": self.group,
            "blade": self.blade,
            "used": self.used,
            "amount": self.amount,
            "silenced": self.silenced,
        }


@dataclass
class ClashSummary:
    """Race-level flags used by list views."""

    has_boat_clash: bool = False
    has_blade_clash: bool = False
    has_any_clash: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "has_boat_clash": self.has_boat_clash,
            "has_blade_clash": self.has_blade_clash,
            "has_any_clash": self.has_any_clash,
        }


@dataclass
class ClashReport:
    """Ordered clash listing for display and export."""

    boat_clashes: list[BoatClash] = field(default_factory=list)
    blade_clashes: list[BladeClash] = field(default_factory=list)
    summary: ClashSummary = field(default_factory=ClashSummary)
    race_id: str | None = None
    day_order: list[str] = field(default_factory=list)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def unresolved_boat_clashes(self) -> list[BoatClash]:
        """Boat clashes nobody has silenced."""
        return [c for c in self.boat_clashes if not c.silenced]

    @property
    def unresolved_blade_clashes(self) -> list[BladeClash]:
        """Blade clashes nobody has silenced."""
        return [c for c in self.blade_clashes if not c.silenced]

    @property
    def total_clashes(self) -> int:
        return len(self.boat_clashes) + len(self.blade_clashes)

    @property
    def total_unresolved(self) -> int:
        return len(self.unresolved_boat_clashes) + len(self.unresolved_blade_clashes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "race_id": self.race_id,
            "day_order": list(self.day_order),
            "summary": self.summary.to_dict(),
            "total_clashes": self.total_clashes,
            "total_unresolved": self.total_unresolved,
            "boat_clashes": [c.to_dict() for c in self.boat_clashes],
            "blade_clashes": [c.to_dict() for c in self.blade_clashes],
        }
