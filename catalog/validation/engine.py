"""
Validation Engine

Central orchestrator that runs every validator over one snapshot and
merges their issue lists into a ValidationReport. Validators are pure
functions of the snapshot; the engine only sequences them and collects
their results. Validation never stops at the first failing document.
"""

import logging
import time
from typing import Iterable, List, Optional

from catalog.config.schema import EngineConfig
from catalog.snapshot import (
    KIND_CATALOG,
    KIND_INDEX,
    KIND_PACK,
    ContentSnapshot,
    ContentTreeLoader,
    detect_document_kind,
)
from catalog.utils.logging_config import logging_config
from catalog.validation.cross_reference import check_content_path, resolve_references
from catalog.validation.i18n import I18nValidator
from catalog.validation.pagination import validate_pagination
from catalog.validation.report import (
    CATEGORY_BUNDLE,
    CATEGORY_PARSE,
    CATEGORY_REFERENCE,
    ValidationIssue,
    ValidationReport,
)
from catalog.validation.schema_validator import validate_bundle_definition, validate_document


logger = logging.getLogger(__name__)


class ValidationEngine:
    """Central validation orchestrator for content snapshots.

    Runs schema, i18n, reference and pagination validation over every
    document, plus schema, reference and resolution checks over bundle
    definitions.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """Initialize the validation engine.

        Args:
            config: Engine configuration; defaults apply when omitted.
        """
        self.config = config or EngineConfig()

    def validate_directory(self, content_dir: str, bundles_dir: Optional[str] = None) -> ValidationReport:
        """Load a content directory (and optional bundle directory) and validate it.

        Args:
            content_dir: Directory holding one content version (e.g. content/v1).
            bundles_dir: Optional directory of bundle definitions.

        Returns:
            ValidationReport for the directory.

        Raises:
            FileNotFoundError: If content_dir does not exist.
        """
        from catalog.bundles.loader import BundleLoader

        loader = ContentTreeLoader(content_dir, version_prefix=self.config.version_prefix)
        snapshot = loader.load()

        bundle_loader = BundleLoader(bundles_dir)
        report = self.validate_snapshot(
            snapshot, bundles=bundle_loader.sources(), source=content_dir
        )
        report.issues.extend(bundle_loader.issues)
        return report

    def validate_snapshot(
        self,
        snapshot: ContentSnapshot,
        bundles: Iterable = (),
        source: str = "<snapshot>",
    ) -> ValidationReport:
        """Validate every document and chain of a snapshot.

        Args:
            snapshot: Loaded content tree.
            bundles: Optional BundleSource records to validate against it.
            source: Label for the report.

        Returns:
            ValidationReport with all issues found.
        """
        start = time.time()
        issues: List[ValidationIssue] = []

        issues.extend(self._parse_issues(snapshot))

        with logging_config.timed("Document validation"):
            issues.extend(self.validate_documents(snapshot))

        with logging_config.timed("Reference resolution"):
            issues.extend(resolve_references(snapshot, self.config).issues)

        with logging_config.timed("Pagination validation"):
            issues.extend(validate_pagination(snapshot, self.config))

        bundles = list(bundles)
        if bundles:
            with logging_config.timed("Bundle validation"):
                issues.extend(self.validate_bundles(bundles, snapshot))

        report = ValidationReport(
            source=source,
            issues=issues,
            documents_checked=len(snapshot) + len(snapshot.parse_failures) + len(bundles),
            strict=self.config.strict,
            duration_ms=int((time.time() - start) * 1000),
        )
        logger.info(
            f"Validated {report.documents_checked} document(s): "
            f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        )
        return report

    def validate_documents(self, snapshot: ContentSnapshot) -> List[ValidationIssue]:
        """Schema and i18n validation of each catalog, index and pack document."""
        i18n = I18nValidator(self.config)
        issues: List[ValidationIssue] = []

        for path in snapshot.paths():
            kind = detect_document_kind(path)
            if kind not in (KIND_CATALOG, KIND_INDEX, KIND_PACK):
                logger.debug(f"Skipping unrecognised document {path}")
                continue
            data = snapshot.get(path)
            issues.extend(validate_document(data, kind, document=path))
            issues.extend(i18n.validate_document(data, document=path))
        return issues

    def validate_bundles(self, bundles: Iterable, snapshot: ContentSnapshot) -> List[ValidationIssue]:
        """Validate bundle definitions and check that each resolves to items.

        Args:
            bundles: BundleSource records (path + raw definition).
            snapshot: The snapshot the bundles resolve against.

        Returns:
            List of ValidationIssue; a failing bundle never hides the others.
        """
        from catalog.bundles.resolver import BundleResolver
        from catalog.errors import BundleResolutionError

        resolver = BundleResolver(snapshot, self.config)
        i18n = I18nValidator(self.config)
        issues: List[ValidationIssue] = []

        for source in bundles:
            schema_issues = validate_bundle_definition(source.data, document=source.path)
            issues.extend(schema_issues)
            if isinstance(source.data, dict):
                issues.extend(i18n.validate_document(source.data, document=source.path))
            if schema_issues:
                continue

            workspace = source.data["workspace"]
            if snapshot.catalog_for_workspace(workspace) is None:
                issues.append(ValidationIssue(
                    level="error",
                    category=CATEGORY_REFERENCE,
                    document=source.path,
                    field="workspace",
                    message=f"Bundle workspace '{workspace}' has no catalog",
                    actual=workspace,
                ))
                continue

            try:
                resolved = resolver.resolve(source.data)
            except BundleResolutionError as e:
                issues.append(ValidationIssue(
                    level="error",
                    category=CATEGORY_BUNDLE,
                    document=source.path,
                    field="filters",
                    message=str(e),
                    suggestion="Relax the filters or add matching content.",
                ))
                continue

            for item in resolved.items:
                problem = check_content_path(item.url, self.config.version_prefix)
                if problem:
                    issues.append(ValidationIssue(
                        level="warning",
                        category=CATEGORY_BUNDLE,
                        document=source.path,
                        field="items",
                        message=f"Item {item.kind}:{item.id}: {problem}",
                    ))
            logger.debug(f"Bundle {source.path} resolves to {len(resolved.items)} item(s)")

        return issues

    def _parse_issues(self, snapshot: ContentSnapshot) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                level="error",
                category=CATEGORY_PARSE,
                document=failure.path,
                field="root",
                message=failure.message,
                suggestion="Check that the file contains valid JSON.",
            )
            for failure in snapshot.parse_failures
        ]
