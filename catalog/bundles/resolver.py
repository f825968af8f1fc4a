"""
Bundle resolver.

Resolves a bundle definition against a snapshot: schema check, flatten the
workspace, filter, order. A definition that fails its schema raises
SchemaError before any filtering; a filter that selects nothing raises
BundleResolutionError. An empty bundle is never returned.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from catalog.bundles.filters import filter_items
from catalog.bundles.flatten import CorpusItem, flatten_workspace
from catalog.bundles.ordering import order_items
from catalog.config.schema import EngineConfig
from catalog.errors import BundleResolutionError, SchemaError
from catalog.snapshot import ContentSnapshot
from catalog.validation.schema_validator import (
    parse_bundle_definition,
    validate_bundle_definition,
)
from catalog.validation.schemas import BundleDefinition


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedBundle:
    """Ordered items of a bundle plus the definition they came from."""
    definition: BundleDefinition
    items: Tuple[CorpusItem, ...]

    @property
    def bundle_id(self) -> str:
        return self.definition.id

    @property
    def total_minutes(self) -> int:
        return sum(item.duration_mins for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = self.definition
        return {
            "version": d.version,
            "bundleId": d.id,
            "workspace": d.workspace,
            "title": d.title,
            "description": d.description,
            "filters": d.filters.model_dump(by_alias=True, exclude_none=True),
            "includeKinds": list(d.includeKinds),
            "ordering": list(d.ordering.by),
            "totalItems": len(self.items),
            "totalMinutes": self.total_minutes,
            "items": [item.to_dict() for item in self.items],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize with sorted keys; equal bundles give identical bytes."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True, ensure_ascii=False)


def _document_label(data: Any) -> str:
    if isinstance(data, Mapping) and isinstance(data.get("id"), str):
        return data["id"]
    return "<bundle>"


class BundleResolver:
    """Resolves bundle definitions against one snapshot.

    The resolver holds no state besides the snapshot and configuration, so
    any number of resolutions may run against the same instance.
    """

    def __init__(self, snapshot: ContentSnapshot, config: Optional[EngineConfig] = None):
        self.snapshot = snapshot
        self.config = config or EngineConfig()

    def resolve(self, definition: Union[BundleDefinition, Mapping[str, Any]]) -> ResolvedBundle:
        """Resolve one bundle definition.

        Args:
            definition: A BundleDefinition or a raw definition document.

        Returns:
            ResolvedBundle with at least one item.

        Raises:
            SchemaError: If the raw definition fails schema validation
                (including `ordering.stable` absent or not true).
            BundleResolutionError: If the workspace is unknown or the
                filters select no items.
        """
        if not isinstance(definition, BundleDefinition):
            raw = dict(definition) if isinstance(definition, Mapping) else definition
            label = _document_label(raw)
            issues = validate_bundle_definition(raw, document=label)
            if issues:
                raise SchemaError(label, issues)
            definition = parse_bundle_definition(raw)

        if self.snapshot.catalog_for_workspace(definition.workspace) is None:
            raise BundleResolutionError(
                definition.id,
                f"workspace '{definition.workspace}' has no catalog in the snapshot",
            )

        corpus = flatten_workspace(self.snapshot, definition.workspace)
        selected = filter_items(corpus, definition.filters, definition.includeKinds)
        if not selected:
            active = definition.filters.model_dump(by_alias=True, exclude_none=True)
            raise BundleResolutionError(
                definition.id,
                f"filters {json.dumps(active, sort_keys=True)} with includeKinds "
                f"{list(definition.includeKinds)} match no items "
                f"({len(corpus)} item(s) in workspace '{definition.workspace}')",
            )

        ordered = order_items(selected, definition.ordering.by)
        logger.info(
            f"Resolved bundle '{definition.id}': {len(ordered)} of {len(corpus)} item(s)"
        )
        return ResolvedBundle(definition=definition, items=tuple(ordered))
