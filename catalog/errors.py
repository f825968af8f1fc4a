"""
Catalog Error Hierarchy

Validation problems are reported as ValidationIssue records, not raised.
The exceptions here cover the cases where an operation cannot produce a
result at all.

Error Categories:
- Configuration Errors: invalid YAML, unknown keys, bad values
- Load Errors: unparseable JSON when the loader is asked to fail fast
- Schema Errors: a bundle definition that fails its schema
- Resolution Errors: a bundle that resolves to nothing or to an unknown workspace
"""

from typing import List, Optional


class CatalogError(Exception):
    """Base exception for all catalog engine errors."""
    pass


class ConfigurationError(CatalogError):
    """Error loading or validating engine configuration.

    Attributes:
        file_path: Configuration file involved (if any)
    """

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class DocumentParseError(CatalogError):
    """A content document is not parseable JSON.

    Attributes:
        path: Snapshot path of the document
        original_error: The underlying decode error
    """

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"Invalid JSON in {path}{detail}")
        self.path = path
        self.original_error = original_error


class SchemaError(CatalogError):
    """A document failed schema validation where a result was required.

    Attributes:
        document: Path or id of the offending document
        issues: Field-level ValidationIssue records
    """

    def __init__(self, document: str, issues: Optional[List] = None):
        self.document = document
        self.issues = list(issues or [])
        fields = ", ".join(sorted({i.field for i in self.issues})) or "root"
        super().__init__(
            f"Schema validation failed for {document} "
            f"({len(self.issues)} issue(s): {fields})"
        )


class BundleResolutionError(CatalogError):
    """A bundle definition could not be resolved into items.

    Attributes:
        bundle_id: Id of the bundle that failed
    """

    def __init__(self, bundle_id: str, message: str):
        super().__init__(f"Bundle '{bundle_id}': {message}")
        self.bundle_id = bundle_id


class BundleNotFoundError(CatalogError):
    """Raised when a requested bundle id doesn't exist."""

    def __init__(self, bundle_id: str, available_bundles: List[str]):
        self.bundle_id = bundle_id
        self.available_bundles = available_bundles
        available_str = ", ".join(sorted(available_bundles)) if available_bundles else "none"
        super().__init__(
            f"Bundle '{bundle_id}' not found. "
            f"Available bundles: {available_str}"
        )
