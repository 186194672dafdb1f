"""Repair playbook generation from validation issues.

A playbook lists suggested manual fixes, one per offending document field.
Nothing is applied automatically.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .issues import ValidationIssue

logger = logging.getLogger(__name__)

ACTION_SET = "set"
ACTION_CONVERT = "convert"

NOTE_MISSING = "Missing required field; set safe default (review)"
NOTE_TYPE = "Type mismatch; consider converting or setting safe default (review)"
NOTE_REVIEW = "Review manually; safe default suggested"


@dataclass
class RepairAction:
    """A suggested fix for one field of one document."""

    collection: str
    doc_id: str
    field: str
    action: str
    suggested_value: Any = ""
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "collection": self.collection,
            "doc_id": self.doc_id,
            "field": self.field,
            "action": self.action,
            "suggested_value": self.suggested_value,
            "note": self.note,
        }


@dataclass
class RepairPlaybook:
    actions: list[RepairAction] = field(default_factory=list)
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "actions": [a.to_dict() for a in self.actions],
        }


def safe_default(field_name: str) -> Any:
    """Suggested replacement value for a field."""
    return ""


def issue_to_action(issue: ValidationIssue) -> RepairAction | None:
    """Map an issue to a repair action, None for issues not tied to a field."""
    if not issue.field:
        return None

    message = issue.message.lower()
    if "missing" in message or "required" in message:
        action, note = ACTION_SET, NOTE_MISSING
    elif "fallback" in message or "type" in message:
        action, note = ACTION_CONVERT, NOTE_TYPE
    else:
        action, note = ACTION_SET, NOTE_REVIEW

    return RepairAction(
        collection=issue.collection,
        doc_id=issue.doc_id,
        field=issue.field,
        action=action,
        suggested_value=safe_default(issue.field),
        note=note,
    )


def generate_repair_playbook(issues: Iterable[ValidationIssue]) -> RepairPlaybook:
    """Build a playbook with at most one action per (collection, doc, field).

    The first issue for a field decides its action.
    """
    actions: dict[tuple[str, str, str], RepairAction] = {}
    for issue in issues:
        key = (issue.collection, issue.doc_id, issue.field or "")
        if key in actions:
            continue
        action = issue_to_action(issue)
        if action is not None:
            actions[key] = action

    logger.debug(f"Generated repair playbook with {len(actions)} actions")
    return RepairPlaybook(actions=list(actions.values()))


def to_markdown(playbook: RepairPlaybook) -> str:
    """Render a playbook as a Markdown checklist."""
    if not playbook.actions:
        return "No repairs suggested."

    lines = ["# Repair Playbook", f"Generated: {playbook.generated_at}", ""]
    for a in playbook.actions:
        line = (
            f"- **{a.collection}/{a.doc_id}** `{a.field}`: {a.action.upper()} "
            f"`{json.dumps(a.suggested_value)}`"
        )
        if a.note:
            line += f" ({a.note})"
        lines.append(line)
    return "\n".join(lines)


def to_json(playbook: RepairPlaybook) -> str:
    return json.dumps(playbook.to_dict(), indent=2, ensure_ascii=False)
