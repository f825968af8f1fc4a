"""
Validation Report Data Models

Defines ValidationIssue and ValidationReport dataclasses used across
the validation module for structured error/warning reporting.
"""

import json
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional


# Issue categories
CATEGORY_PARSE = "parse"
CATEGORY_SCHEMA = "schema"
CATEGORY_REFERENCE = "reference"
CATEGORY_PAGINATION = "pagination"
CATEGORY_I18N = "i18n"
CATEGORY_BUNDLE = "bundle"


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation issue found during validation.

    Attributes:
        level: Severity level (error, warning, info)
        category: Which validator produced it (parse, schema, reference,
            pagination, i18n, bundle)
        document: Snapshot path (or bundle id) of the offending document
        field: The field path within the document
        message: Human-readable description of the issue
        expected: The constraint that was violated, if any
        actual: The offending value rendered as text, if any
        suggestion: Optional suggestion for fixing the issue
    """
    level: Literal["error", "warning", "info"]
    category: str
    document: str
    field: str
    message: str
    expected: Optional[str] = None
    actual: Optional[str] = None
    suggestion: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        d = {
            "level": self.level,
            "category": self.category,
            "document": self.document,
            "field": self.field,
            "message": self.message,
        }
        if self.expected is not None:
            d["expected"] = self.expected
        if self.actual is not None:
            d["actual"] = self.actual
        if self.suggestion:
            d["suggestion"] = self.suggestion
        return d


def render_value(value: Any, limit: int = 80) -> str:
    """Short textual form of an offending value for issue records."""
    try:
        text = json.dumps(value, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


@dataclass
class ValidationReport:
    """Structured report from a validation run over a whole snapshot.

    Attributes:
        source: Content directory (or other label) that was validated
        issues: List of validation issues found, in validator order
        documents_checked: Number of documents examined
        strict: Whether warnings count as failures
        timestamp: When validation was performed (UTC)
        duration_ms: How long validation took in milliseconds
    """
    source: str
    issues: List[ValidationIssue] = field(default_factory=list)
    documents_checked: int = 0
    strict: bool = False
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    duration_ms: int = 0

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def infos(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "info"]

    @property
    def is_valid(self) -> bool:
        if self.errors:
            return False
        return not (self.strict and self.warnings)

    def by_document(self) -> "OrderedDict[str, List[ValidationIssue]]":
        """Issues grouped by document, documents in sorted order."""
        grouped: Dict[str, List[ValidationIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.document, []).append(issue)
        return OrderedDict((doc, grouped[doc]) for doc in sorted(grouped))

    def by_category(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for issue in self.issues:
            counts[issue.category] = counts.get(issue.category, 0) + 1
        return dict(sorted(counts.items()))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "is_valid": self.is_valid,
            "strict": self.strict,
            "documents_checked": self.documents_checked,
            "documents": {
                doc: [i.to_dict() for i in issues]
                for doc, issues in self.by_document().items()
            },
            "timestamp": self.timestamp,
            "duration_ms": self.duration_ms,
            "summary": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "infos": len(self.infos),
                "by_category": self.by_category(),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def format_human(self) -> str:
        """Format report for human-readable console output."""
        if self.is_valid and not self.warnings:
            icon = "✅"
            status = "Valid"
        elif self.is_valid and self.warnings:
            icon = "✅"
            status = "Valid (with warnings)"
        else:
            icon = "❌"
            status = "Failed"

        lines = [f"{icon} {self.source}: {status} ({self.documents_checked} document(s) checked)"]

        for document, issues in self.by_document().items():
            lines.append(f"  {document}")
            for issue in issues:
                if issue.level == "error":
                    prefix = "    ❌"
                elif issue.level == "warning":
                    prefix = "    ⚠"
                else:
                    prefix = "    ℹ"
                lines.append(f"{prefix} [{issue.category}] {issue.field}: {issue.message}")
                if issue.suggestion:
                    lines.append(f"        → {issue.suggestion}")

        lines.append(
            f"  {len(self.errors)} error(s), {len(self.warnings)} warning(s)"
        )
        return "\n".join(lines)
