"""Equipment clash detection engine.

Given a race's entries, division groups, blade inventory and silences, finds
boats and blade sets that are double-booked within a day/group pool. The
engine is pure: it never mutates its inputs, keeps no state between calls and
never raises on malformed fields.

Usage:
    from regatta_clash.engine import ClashEngine

    engine = ClashEngine(day_order=["Sat 14 Jun", "Sun 15 Jun"], race_id="r1")
    report = engine.report(entries, groups, silences, blade_silences, blades)
"""

from .blades import (
    build_inventory,
    bucket_blade_demand,
    detect_blade_clashes,
    parse_blade_sets,
    split_blade_demand,
)
from .boats import count_boats, detect_boat_clashes
from .grouping import (
    build_group_index,
    find_overlapping_divisions,
    partition_entries,
    resolve_group,
)
from .ordering import natural_key, race_day_order, sort_clashes
from .silences import silence_keys
from .summary import ClashEngine, summarize

__all__ = [
    # Facade
    "ClashEngine",
    "summarize",
    # Grouping
    "build_group_index",
    "find_overlapping_divisions",
    "partition_entries",
    "resolve_group",
    # Boats
    "count_boats",
    "detect_boat_clashes",
    # Blades
    "build_inventory",
    "bucket_blade_demand",
    "detect_blade_clashes",
    "parse_blade_sets",
    "split_blade_demand",
    # Ordering
    "natural_key",
    "race_day_order",
    "sort_clashes",
    # Silences
    "silence_keys",
]
