"""Read-only validation of raw snapshot documents.

The validator re-checks documents field by field and reports problems as
issues. It never changes data and does not depend on clash results; it is
where bad data the clash engine silently ignores becomes visible.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .boat_classes import classify_event
from .constants import (
    ALL_COLLECTIONS,
    BLADE_SET_SEPARATOR,
    COLLECTION_BLADES,
    COLLECTION_BOATS,
    COLLECTION_DIVISION_GROUPS,
    COLLECTION_ENTRIES,
    COLLECTION_RACES,
    COLLECTION_SILENCED_BLADE_CLASHES,
    COLLECTION_SILENCED_CLASHES,
    DEFAULT_LIMIT_PER_COLLECTION,
    DEFAULT_MAX_ISSUES,
    LEVEL_ERROR,
    LEVEL_WARN,
)
from .engine.grouping import find_overlapping_divisions
from .issues import IssueCollector, ValidationIssue
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
class ValidationResult:
    """Outcome of a validation scan."""

    scanned: int = 0
    issues: list[ValidationIssue] = field(default_factory=list)
    last_run_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == LEVEL_ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == LEVEL_WARN]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scanned": self.scanned,
            "last_run_at": self.last_run_at,
            "issues": [i.to_dict() for i in self.issues],
        }


def validate_entry(doc: RawDocument, issues: IssueCollector) -> None:
    """Check an entry document."""
    entry = Entry.from_dict(doc, issues.doc_id, issues)

    raw_blades = entry.blades.strip()
    if BLADE_SET_SEPARATOR in raw_blades:
        parts = [part.strip() for part in raw_blades.split(BLADE_SET_SEPARATOR)]
        if not all(parts):
            issues.warn(f"Empty blade-set name in '{raw_blades}'", "blades")

    if entry.is_entered and entry.event and classify_event(entry.event) is None:
        issues.warn(
            f"Event '{entry.event}' has no recognised boat class; no blades are counted",
            "event",
        )


def validate_boat(doc: RawDocument, issues: IssueCollector) -> None:
    """Check a boat document."""
    boat = Boat.from_dict(doc, issues.doc_id, issues)
    if boat.type and classify_event(boat.type) is None:
        issues.warn(f"Unknown boat type '{boat.type}'", "type")


def validate_blade_set(doc: RawDocument, issues: IssueCollector) -> None:
    """Check a blade-set document."""
    blade = BladeSet.from_dict(doc, issues.doc_id, issues)
    if blade.amount is None:
        issues.warn("No 'amount' set; blade set is treated as unlimited", "amount")
    elif blade.amount < 0:
        issues.warn(f"Negative amount {blade.amount}", "amount")
    if BLADE_SET_SEPARATOR in blade.name:
        issues.warn(
            f"Name '{blade.name}' contains '{BLADE_SET_SEPARATOR}' and cannot be "
            "referenced from an entry",
            "name",
        )


def validate_division_group(doc: RawDocument, issues: IssueCollector) -> None:
    """Check a division group document."""
    group = DivisionGroup.from_dict(doc, issues.doc_id, issues)
    seen: set[str] = set()
    for div in group.divisions:
        if div in seen:
            issues.warn(f"Division '{div}' listed twice", "divisions")
        seen.add(div)


def validate_boat_silence(doc: RawDocument, issues: IssueCollector) -> None:
    BoatSilence.from_dict(doc, issues.doc_id, issues)


def validate_blade_silence(doc: RawDocument, issues: IssueCollector) -> None:
    BladeSilence.from_dict(doc, issues.doc_id, issues)


def validate_race(doc: RawDocument, issues: IssueCollector) -> None:
    """Check a race document."""
    race = Race.from_dict(doc, issues.doc_id, issues)
    if race.start_date and race.end_date and race.end_date < race.start_date:
        issues.warn("End date is before start date", "endDate")


VALIDATORS: dict[str, Callable[[RawDocument, IssueCollector], None]] = {
    COLLECTION_RACES: validate_race,
    COLLECTION_ENTRIES: validate_entry,
    COLLECTION_BOATS: validate_boat,
    COLLECTION_BLADES: validate_blade_set,
    COLLECTION_DIVISION_GROUPS: validate_division_group,
    COLLECTION_SILENCED_CLASHES: validate_boat_silence,
    COLLECTION_SILENCED_BLADE_CLASHES: validate_blade_silence,
}


def check_overlapping_groups(
    docs: Sequence[RawDocument], issues: list[ValidationIssue], max_issues: int
) -> None:
    """Report divisions listed in more than one group on the same race day.

    The clash engine assigns such a division to the first group only.
    """
    by_race: dict[str, list[DivisionGroup]] = defaultdict(list)
    for doc in docs:
        group = DivisionGroup.from_dict(doc, as_string(doc.get("id")))
        by_race[group.race_id].append(group)

    for groups in by_race.values():
        doc_ids = {(g.day, g.group): g.id for g in groups}
        for (day, div), names in find_overlapping_divisions(groups).items():
            collector = IssueCollector(
                COLLECTION_DIVISION_GROUPS,
                doc_ids[(day, names[1])],
                issues,
                max_issues,
            )
            collector.warn(
                f"Division '{div}' on '{day}' is listed in groups "
                f"{', '.join(repr(n) for n in names)}; entries go to '{names[0]}'",
                "divisions",
            )


def run_validation(
    raw_collections: dict[str, list[RawDocument]],
    limit_per_collection: int = DEFAULT_LIMIT_PER_COLLECTION,
    max_issues: int = DEFAULT_MAX_ISSUES,
    collections: Sequence[str] | None = None,
) -> ValidationResult:
    """Validate raw documents collection by collection.

    Args:
        raw_collections: Collection name -> raw documents (each with an "id")
        limit_per_collection: Maximum documents scanned per collection
        max_issues: Stop once this many issues were found
        collections: Collections to scan; all known collections by default

    Returns:
        ValidationResult
    """
    targets = list(collections) if collections else list(ALL_COLLECTIONS)
    result = ValidationResult()

    for collection in targets:
        validator = VALIDATORS.get(collection)
        if validator is None:
            IssueCollector(collection, "-", result.issues, max_issues).warn(
                "Unsupported collection"
            )
            continue

        docs = raw_collections.get(collection, [])[:limit_per_collection]
        for doc in docs:
            collector = IssueCollector(
                collection, as_string(doc.get("id"), "-"), result.issues, max_issues
            )
            if collector.full:
                break
            result.scanned += 1
            try:
                validator(doc, collector)
            except Exception as e:
                collector.error(f"Unexpected error - {e}")

        if collection == COLLECTION_DIVISION_GROUPS:
            check_overlapping_groups(docs, result.issues, max_issues)

        if len(result.issues) >= max_issues:
            logger.warning(f"Validation stopped after {max_issues} issues")
            break

    logger.info(f"Validated {result.scanned} documents, found {len(result.issues)} issues")
    return result
