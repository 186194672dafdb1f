"""Clash summary and report facade."""

import logging
from collections.abc import Sequence

from ..boat_classes import BoatClassifier
from ..models import (
    BladeSet,
    BladeSilence,
    BoatSilence,
    ClashReport,
    ClashSummary,
    DivisionGroup,
    Entry,
)
from .blades import detect_blade_clashes
from .boats import detect_boat_clashes
from .grouping import build_group_index, partition_entries

logger = logging.getLogger(__name__)


def summarize(
    entries: Sequence[Entry],
    groups: Sequence[DivisionGroup],
    silences: Sequence[BoatSilence],
    blade_silences: Sequence[BladeSilence],
    blades: Sequence[BladeSet],
    race_id: str | None = None,
) -> ClashSummary:
    """Compute race-level clash flags for list views.

    A flag is set when at least one unsilenced clash of that kind exists.
    Races without any entered crew return all-false without running the
    detectors.

    Args:
        entries: Entries of the race
        groups: Division groups of the race
        silences: Boat silences
        blade_silences: Blade silences
        blades: Blade-set inventory
        race_id: Only apply silences of this race

    Returns:
        ClashSummary
    """
    buckets = partition_entries(entries, build_group_index(groups))
    if not buckets:
        return ClashSummary()

    boat_clashes = detect_boat_clashes(buckets, silences, race_id=race_id)
    blade_clashes = detect_blade_clashes(buckets, blades, blade_silences, race_id=race_id)
    has_boat_clash = any(not c.silenced for c in boat_clashes)
    has_blade_clash = any(not c.silenced for c in blade_clashes)
    return ClashSummary(
        has_boat_clash=has_boat_clash,
        has_blade_clash=has_blade_clash,
        has_any_clash=has_boat_clash or has_blade_clash,
    )


class ClashEngine:
    """Computes ordered clash reports from a race snapshot.

    The engine holds configuration only; every call recomputes from the
    inputs it is given.
    """

    def __init__(
        self,
        day_order: Sequence[str] | None = None,
        race_id: str | None = None,
        classifier: BoatClassifier | None = None,
    ):
        """Initialize engine.

        Args:
            day_order: Day labels in race order. Clashes keep discovery order
                       when None.
            race_id: Only apply silences recorded for this race
            classifier: Boat class rules; defaults to the standard table
        """
        self.day_order = list(day_order) if day_order is not None else None
        self.race_id = race_id
        self.classifier = classifier or BoatClassifier()

    def report(
        self,
        entries: Sequence[Entry],
        groups: Sequence[DivisionGroup],
        silences: Sequence[BoatSilence],
        blade_silences: Sequence[BladeSilence],
        blades: Sequence[BladeSet],
    ) -> ClashReport:
        """Compute all boat and blade clashes, ordered for display."""
        buckets = partition_entries(entries, build_group_index(groups))
        logger.debug(
            f"Partitioned {sum(len(v) for v in buckets.values())} entered crews "
            f"into {len(buckets)} day/group buckets"
        )

        boat_clashes = detect_boat_clashes(
            buckets, silences, day_order=self.day_order, race_id=self.race_id
        )
        blade_clashes = detect_blade_clashes(
            buckets,
            blades,
            blade_silences,
            day_order=self.day_order,
            race_id=self.race_id,
            classifier=self.classifier,
        )

        has_boat_clash = any(not c.silenced for c in boat_clashes)
        has_blade_clash = any(not c.silenced for c in blade_clashes)
        report = ClashReport(
            boat_clashes=boat_clashes,
            blade_clashes=blade_clashes,
            summary=ClashSummary(
                has_boat_clash=has_boat_clash,
                has_blade_clash=has_blade_clash,
                has_any_clash=has_boat_clash or has_blade_clash,
            ),
            race_id=self.race_id,
            day_order=list(self.day_order or []),
        )
        logger.info(
            f"Found {len(boat_clashes)} boat and {len(blade_clashes)} blade clashes "
            f"({report.total_unresolved} unresolved)"
        )
        return report
