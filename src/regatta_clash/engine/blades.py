"""Blade (oar set) clash detection.

Each entered crew needs a number of oars determined by its boat class. A crew
may draw on several blade sets ("Set A + Set B"); its demand is spread across
them as evenly as possible. A blade set clashes in a bucket when the summed
demand exceeds the oars it holds.
"""

import math
from collections.abc import Iterable, Mapping, Sequence

from ..boat_classes import BoatClassifier
from ..constants import BLADE_SET_SEPARATOR
from ..models import BladeClash, BladeSet, BladeSilence, DayGroup, Entry
from .ordering import sort_clashes
from .silences import silence_keys


def build_inventory(blades: Iterable[BladeSet]) -> dict[str, float]:
    """Map blade-set names to available oars.

    Names are trimmed; unnamed records are ignored. Sets without a finite
    amount are unlimited (``math.inf``). A later record overrides an earlier
    one with the same name.
    """
    inventory: dict[str, float] = {}
    for blade in blades:
        name = (blade.name or "").strip()
        if name:
            inventory[name] = blade.available
    return inventory


def parse_blade_sets(raw: str | None) -> list[str]:
    """Split an entry's blades field into blade-set names.

    "Set A + Set B" -> ["Set A", "Set B"]; empty parts are dropped.
    """
    text = (raw or "").strip()
    if not text:
        return []
    if BLADE_SET_SEPARATOR not in text:
        return [text]
    parts = (part.strip() for part in text.split(BLADE_SET_SEPARATOR))
    return [part for part in parts if part]


def split_blade_demand(needed: int, parts: Sequence[str]) -> list[tuple[str, int]]:
    """Distribute an oar requirement over blade sets.

    Every part gets ``needed // n`` oars and the first ``needed % n`` parts
    (in listed order) get one more, e.g. 8 oars over 3 sets -> 3, 3, 2.

    Args:
        needed: Oars the crew needs
        parts: Blade-set names in listed order

    Returns:
        List of (blade-set name, oars) pairs
    """
    if not parts:
        return []
    base, remainder = divmod(needed, len(parts))
    return [(part, base + (1 if i < remainder else 0)) for i, part in enumerate(parts)]


def bucket_blade_demand(
    entries: Iterable[Entry], classifier: BoatClassifier | None = None
) -> dict[str, int]:
    """Sum the oar demand per blade set for the entries of one bucket."""
    classifier = classifier or BoatClassifier()
    used: dict[str, int] = {}
    for entry in entries:
        needed = classifier.blades_for(entry.event)
        if needed <= 0:
            continue
        parts = parse_blade_sets(entry.blades)
        for name, oars in split_blade_demand(needed, parts):
            used[name] = used.get(name, 0) + oars
    return used


def detect_blade_clashes(
    buckets: Mapping[DayGroup, list[Entry]],
    blade_inventory: Iterable[BladeSet],
    silences: Iterable[BladeSilence],
    day_order: Sequence[str] | None = None,
    race_id: str | None = None,
    classifier: BoatClassifier | None = None,
) -> list[BladeClash]:
    """Find blade sets whose demand exceeds their inventory in a bucket.

    Blade sets missing from the inventory or without an amount never clash.
    Silenced clashes are returned too, flagged ``silenced=True``.

    Args:
        buckets: Entries partitioned by (day, group)
        blade_inventory: Blade-set records
        silences: Blade silences
        day_order: Day labels in race order; discovery order when None
        race_id: Only apply silences of this race
        classifier: Boat class rules; defaults to the standard table

    Returns:
        List of BladeClash
    """
    inventory = build_inventory(blade_inventory)
    silenced = silence_keys(silences, "blade", race_id)
    classifier = classifier or BoatClassifier()

    clashes: list[BladeClash] = []
    for key, entries in buckets.items():
        for blade, used in bucket_blade_demand(entries, classifier).items():
            amount = inventory.get(blade, math.inf)
            if math.isinf(amount) or used <= amount:
                continue
            clashes.append(
                BladeClash(
                    day=key.day,
                    group=key.group,
                    blade=blade,
                    used=used,
                    amount=amount,
                    silenced=(key.day, key.group, blade) in silenced,
                )
            )

    if day_order is None:
        return clashes
    return sort_clashes(clashes, day_order, "blade")
