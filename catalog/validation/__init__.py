"""
Validation Module for the Content Catalog

Provides schema, reference, pagination and i18n validation for every
document of a content snapshot, plus bundle definition checks.
"""

from catalog.validation.report import ValidationIssue, ValidationReport
from catalog.validation.engine import ValidationEngine

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "ValidationEngine",
]
