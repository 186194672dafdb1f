"""Validation issue records shared by coercion and validation."""

from dataclasses import dataclass, field as dataclass_field
from typing import Any

from .constants import LEVEL_ERROR, LEVEL_WARN


@dataclass
class ValidationIssue:
    """A single problem found in a raw document.

    Attributes:
        collection: Collection name (e.g. "entries")
        doc_id: Document id, or "-" for collection-level problems
        level: "warn" or "error"
        message: Human readable description
        field: Offending field, when the problem is tied to one
    """

    collection: str
    doc_id: str
    level: str
    message: str
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "collection": self.collection,
            "doc_id": self.doc_id,
            "level": self.level,
            "message": self.message,
            "field": self.field,
        }

    def __str__(self) -> str:
        location = f"{self.collection}/{self.doc_id}"
        if self.field:
            location += f" [{self.field}]"
        return f"{self.level.upper()} {location} {self.message}"


@dataclass
class IssueCollector:
    """Collects validation issues for one document.

    The ``issues`` list may be shared between collectors so a whole scan
    stops once ``max_issues`` is reached.
    """

    collection: str
    doc_id: str
    issues: list[ValidationIssue] = dataclass_field(default_factory=list)
    max_issues: int | None = None

    @property
    def full(self) -> bool:
        return self.max_issues is not None and len(self.issues) >= self.max_issues

    def add(self, level: str, message: str, field: str | None = None) -> None:
        if self.full:
            return
        self.issues.append(
            ValidationIssue(
                collection=self.collection,
                doc_id=self.doc_id,
                level=level,
                message=message,
                field=field,
            )
        )

    def warn(self, message: str, field: str | None = None) -> None:
        self.add(LEVEL_WARN, message, field)

    def error(self, message: str, field: str | None = None) -> None:
        self.add(LEVEL_ERROR, message, field)

    def missing(self, field: str) -> None:
        self.error(f"Missing required field '{field}'", field)

    def type_fallback(self, field: str, value: Any, expected: str) -> None:
        self.warn(
            f"Unexpected type {type(value).__name__} for '{field}'; type fallback to {expected}",
            field,
        )
