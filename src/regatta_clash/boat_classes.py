"""Boat class detection for regatta events.

Event names are free text ("Novice 8x+", "J16 2-"). The boat class is found by
case-insensitive substring matching against an ordered rule list, checked
most-specific first so a shorter token never matches inside a longer one:
"8x+" before "8+", "4x+" before "4x" before "4+" before "4-".
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoatClassRule:
    """One recognised boat class.

    Attributes:
        code: Canonical boat-class code (e.g. "4x+")
        blades: Number of individual oars the class needs
        description: Human readable name
    """

    code: str
    blades: int
    description: str

    def matches(self, event_text: str) -> bool:
        return self.code in event_text.lower()


# Precedence order matters: first match wins
BOAT_CLASS_RULES: tuple[BoatClassRule, ...] = (
    BoatClassRule("8x+", 16, "Coxed octuple scull"),
    BoatClassRule("8+", 8, "Coxed eight"),
    BoatClassRule("4x+", 8, "Coxed quad scull"),
    BoatClassRule("4x-", 8, "Coxless quad scull"),
    BoatClassRule("4x", 8, "Quad scull"),
    BoatClassRule("4+", 4, "Coxed four"),
    BoatClassRule("4-", 4, "Coxless four"),
    BoatClassRule("2x-", 4, "Double scull"),
    BoatClassRule("2x", 4, "Double scull"),
    BoatClassRule("2-", 2, "Coxless pair"),
    BoatClassRule("1x-", 2, "Single scull"),
    BoatClassRule("1x", 2, "Single scull"),
)

BLADES_REQUIRED: dict[str, int] = {rule.code: rule.blades for rule in BOAT_CLASS_RULES}


def find_rule(
    event_text: str | None, rules: tuple[BoatClassRule, ...] = BOAT_CLASS_RULES
) -> BoatClassRule | None:
    """Return the first rule whose code appears in the event text."""
    if not isinstance(event_text, str) or not event_text:
        return None
    for rule in rules:
        if rule.matches(event_text):
            return rule
    return None


def classify_event(event_text: str | None) -> str | None:
    """Detect the boat class of an event.

    Args:
        event_text: Free-text event label

    Returns:
        Boat-class code, or None if no known class is mentioned
    """
    rule = find_rule(event_text)
    return rule.code if rule else None


def blades_required(code: str | None) -> int:
    """Number of oars a boat class needs (0 for unknown classes)."""
    if code is None:
        return 0
    return BLADES_REQUIRED.get(code, 0)


def blades_required_for_event(event_text: str | None) -> int:
    """Number of oars needed by an event, 0 when its class is unknown."""
    return blades_required(classify_event(event_text))


class BoatClassifier:
    """Classifies events against an ordered rule list."""

    def __init__(self, rules: tuple[BoatClassRule, ...] | None = None):
        """Initialize classifier.

        Args:
            rules: Rules in precedence order. Defaults to BOAT_CLASS_RULES.
        """
        self.rules = rules if rules is not None else BOAT_CLASS_RULES

    def classify(self, event_text: str | None) -> BoatClassRule | None:
        """Return the first rule matching the event, if any."""
        return find_rule(event_text, self.rules)

    def blades_for(self, event_text: str | None) -> int:
        rule = self.classify(event_text)
        return rule.blades if rule else 0

    def get_rule(self, code: str) -> BoatClassRule | None:
        """Look up a rule by its code."""
        for rule in self.rules:
            if rule.code == code:
                return rule
        return None
