"""Division grouping and entry partitioning.

Divisions that race together on a day share one pool of boats and blades.
Entries are bucketed by (day, group) so each pool is checked on its own.
"""

from collections import defaultdict
from collections.abc import Iterable

from ..models import DayGroup, DivisionGroup, Entry

# day -> group name -> divisions, insertion ordered
GroupIndex = dict[str, dict[str, set[str]]]


def build_group_index(groups: Iterable[DivisionGroup]) -> GroupIndex:
    """Build a (day, group) lookup from division group records.

    No validation is performed. Groups keep their declaration order, which
    decides ties when a division is listed in more than one group. A later
    record with the same day and group name replaces the earlier one.

    Args:
        groups: Division group records for one race

    Returns:
        Mapping of day -> group name -> set of divisions
    """
    index: GroupIndex = {}
    for group in groups:
        index.setdefault(group.day, {})[group.group] = set(group.divisions or [])
    return index


def resolve_group(index: GroupIndex, day: str, div: str) -> DayGroup:
    """Find the bucket for a division on a day.

    The first group (in declaration order) listing the division wins. A
    division no group lists forms its own implicit group named after itself.

    Args:
        index: Index from build_group_index
        day: Day label
        div: Division label

    Returns:
        DayGroup bucket key
    """
    for group_name, divisions in index.get(day, {}).items():
        if div in divisions:
            return DayGroup(day=day, group=group_name)
    return DayGroup(day=day, group=div, implicit=True)


def partition_entries(
    entries: Iterable[Entry], index: GroupIndex
) -> dict[DayGroup, list[Entry]]:
    """Bucket entered crews by (day, group).

    Only entries with status "entered" are kept. Entries without a day or
    division cannot be grouped and are skipped.

    Args:
        entries: Entries of one race
        index: Index from build_group_index

    Returns:
        Mapping of bucket key -> entries, in discovery order
    """
    buckets: dict[DayGroup, list[Entry]] = defaultdict(list)
    for entry in entries:
        if not entry.is_entered:
            continue
        if not entry.day or not entry.div:
            continue
        buckets[resolve_group(index, entry.day, entry.div)].append(entry)
    return dict(buckets)


def find_overlapping_divisions(
    groups: Iterable[DivisionGroup],
) -> dict[tuple[str, str], list[str]]:
    """Find divisions listed in more than one group on the same day.

    Returns:
        Mapping of (day, division) -> group names, in declaration order
    """
    seen: dict[tuple[str, str], list[str]] = defaultdict(list)
    for group in groups:
        for div in dict.fromkeys(group.divisions or []):
            names = seen[(group.day, div)]
            if group.group not in names:
                names.append(group.group)
    return {key: names for key, names in seen.items() if len(names) > 1}
