"""Regatta Clash - equipment clash detection for rowing regatta entries.

Finds boats entered twice in the same day/group pool and blade sets whose
oar demand exceeds the inventory, honours acknowledged ("silenced") clashes,
and validates the underlying documents.

Example usage:
    from regatta_clash import ClashEngine, SnapshotLoader

    snapshot = SnapshotLoader("data/snapshot").load(race_id="r1")
    engine = ClashEngine(day_order=snapshot.day_order(), race_id="r1")
    report = engine.report(
        snapshot.entries,
        snapshot.division_groups,
        snapshot.silences,
        snapshot.blade_silences,
        snapshot.blades,
    )

    for clash in report.unresolved_boat_clashes:
        print(f"{clash.day} | {clash.group} | {clash.boat} x{clash.count}")

    # Export to JSON
    from regatta_clash.exporters import JSONExporter
    JSONExporter().export(report, "clashes.json")
"""

from .boat_classes import BoatClassifier, blades_required, classify_event
from .engine import ClashEngine, summarize
from .exceptions import CollectionFormatError, RegattaClashError, SnapshotNotFoundError
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .issues import ValidationIssue
from .loader import RaceSnapshot, SnapshotLoader
from .models import (
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
from .repair import RepairAction, RepairPlaybook, generate_repair_playbook
from .validators import ValidationResult, run_validation

__version__ = "0.1.0"

__all__ = [
    # Engine
    "ClashEngine",
    "summarize",
    # Boat classes
    "BoatClassifier",
    "classify_event",
    "blades_required",
    # Models
    "Entry",
    "DivisionGroup",
    "Boat",
    "BladeSet",
    "BoatSilence",
    "BladeSilence",
    "Race",
    "DayGroup",
    "BoatClash",
    "BladeClash",
    "ClashSummary",
    "ClashReport",
    # Loading
    "SnapshotLoader",
    "RaceSnapshot",
    # Validation and repair
    "run_validation",
    "ValidationResult",
    "ValidationIssue",
    "generate_repair_playbook",
    "RepairPlaybook",
    "RepairAction",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "RegattaClashError",
    "SnapshotNotFoundError",
    "CollectionFormatError",
]
