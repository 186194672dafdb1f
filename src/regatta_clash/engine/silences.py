"""Lookup of acknowledged (silenced) clashes."""

from collections.abc import Iterable

from ..models import BladeSilence, BoatSilence

SilenceKey = tuple[str, str, str]


def silence_keys(
    silences: Iterable[BoatSilence | BladeSilence],
    name_attr: str,
    race_id: str | None = None,
) -> set[SilenceKey]:
    """Build the set of silenced (day, group, item) keys.

    Matching is exact. When ``race_id`` is given, silences recorded for other
    races are ignored; otherwise every silence applies.

    Args:
        silences: Boat or blade silences
        name_attr: "boat" or "blade"
        race_id: Race the clashes belong to, optional

    Returns:
        Set of (day, group, item name) tuples
    """
    keys: set[SilenceKey] = set()
    for silence in silences:
        if race_id and silence.race_id != race_id:
            continue
        keys.add((silence.day, silence.group, getattr(silence, name_attr)))
    return keys
