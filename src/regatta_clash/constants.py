"""Constants for regatta equipment clash detection."""

from pathlib import Path

# Entry statuses
STATUS_IN_PROGRESS = "in_progress"
STATUS_READY = "ready"
STATUS_ENTERED = "entered"
STATUS_WITHDRAWN = "withdrawn"
STATUS_REJECTED = "rejected"
ENTRY_STATUSES = [
    STATUS_IN_PROGRESS,
    STATUS_READY,
    STATUS_ENTERED,
    STATUS_WITHDRAWN,
    STATUS_REJECTED,
]

# Blade length codes
BLADE_LENGTH_CODES = ["1", "2", "3", "4", "5", "NA"]

# Separator used in composite clash keys ("day::group::item")
KEY_SEPARATOR = "::"

# Separator for blade sets shared across a compound boat ("Set A + Set B")
BLADE_SET_SEPARATOR = "+"

# Sort position for days missing from the display order
UNKNOWN_DAY_INDEX = 9999

# Day label format used on entries, e.g. "Sat 14 Jun"
DAY_LABEL_FORMAT = "%a %d %b"

# Collection names (match the document store export layout)
COLLECTION_RACES = "races"
COLLECTION_ENTRIES = "entries"
COLLECTION_BOATS = "boats"
COLLECTION_BLADES = "blades"
COLLECTION_DIVISION_GROUPS = "divisionGroups"
COLLECTION_SILENCED_CLASHES = "silencedClashes"
COLLECTION_SILENCED_BLADE_CLASHES = "silencedBladeClashes"
ALL_COLLECTIONS = [
    COLLECTION_RACES,
    COLLECTION_ENTRIES,
    COLLECTION_BOATS,
    COLLECTION_BLADES,
    COLLECTION_DIVISION_GROUPS,
    COLLECTION_SILENCED_CLASHES,
    COLLECTION_SILENCED_BLADE_CLASHES,
]

# Collections whose documents carry a raceId
RACE_SCOPED_COLLECTIONS = {
    COLLECTION_ENTRIES,
    COLLECTION_DIVISION_GROUPS,
    COLLECTION_SILENCED_CLASHES,
    COLLECTION_SILENCED_BLADE_CLASHES,
}

# Supported snapshot file extensions, in lookup order
SNAPSHOT_EXTENSIONS = [".json", ".csv", ".xlsx"]

# Default location of an exported snapshot
DEFAULT_SNAPSHOT_DIR = Path("data/snapshot")

# Validator limits
DEFAULT_LIMIT_PER_COLLECTION = 50
DEFAULT_MAX_ISSUES = 100

# Issue levels
LEVEL_WARN = "warn"
LEVEL_ERROR = "error"
