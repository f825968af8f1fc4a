"""
Schema Validator

Wraps the Pydantic document schemas (catalog, index, pack, bundle) for
validation with field-level error details. Returns ValidationIssue lists
instead of raising exceptions, and reports every violated field rather
than stopping at the first.
"""

from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from catalog.snapshot import (
    KIND_BUNDLE,
    KIND_CATALOG,
    KIND_INDEX,
    KIND_PACK,
)
from catalog.validation.report import CATEGORY_SCHEMA, ValidationIssue, render_value
from catalog.validation.schemas import (
    PACK_VARIANTS,
    BundleDefinition,
    CatalogDocument,
    IndexPage,
    PackBase,
)


VALID_DOCUMENT_KINDS = [KIND_CATALOG, KIND_INDEX, KIND_PACK, KIND_BUNDLE]


def format_location(loc) -> str:
    """Render a Pydantic error location as `items[0].text`."""
    if not loc:
        return "root"
    parts: List[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            parts.append(("." if parts else "") + str(part))
    return "".join(parts)


def _pydantic_errors_to_issues(
    errors: list,
    document: str,
    kind: str,
) -> List[ValidationIssue]:
    """Convert Pydantic validation errors to ValidationIssue list."""
    issues = []
    for err in errors:
        field_path = format_location(err["loc"])
        missing = err["type"] == "missing"
        issues.append(ValidationIssue(
            level="error",
            category=CATEGORY_SCHEMA,
            document=document,
            field=field_path,
            message=f"{err['msg']} (type={err['type']})",
            expected=err["msg"],
            actual="<missing>" if missing else render_value(err.get("input")),
            suggestion=f"Check the '{field_path}' field in your {kind} document.",
        ))
    return issues


def _validate_model(
    model: Type[BaseModel],
    data: Any,
    document: str,
    kind: str,
) -> List[ValidationIssue]:
    if not isinstance(data, dict):
        return [ValidationIssue(
            level="error",
            category=CATEGORY_SCHEMA,
            document=document,
            field="root",
            message=f"{kind} document must be a JSON object",
            expected="object",
            actual=type(data).__name__,
        )]
    try:
        model.model_validate(data)
    except ValidationError as e:
        return _pydantic_errors_to_issues(e.errors(), document, kind)
    return []


def validate_catalog(data: Any, document: str = "<catalog>") -> List[ValidationIssue]:
    """Validate data against the catalog schema.

    Args:
        data: Parsed JSON data to validate.
        document: Path used in the issue records.

    Returns:
        List of ValidationIssue (empty if valid).
    """
    return _validate_model(CatalogDocument, data, document, KIND_CATALOG)


def validate_index(data: Any, document: str = "<index>") -> List[ValidationIssue]:
    """Validate data against the index page schema."""
    return _validate_model(IndexPage, data, document, KIND_INDEX)


def validate_pack(data: Any, document: str = "<pack>") -> List[ValidationIssue]:
    """Validate data against the pack variant selected by its `type` tag.

    Packs with a missing or unknown type are checked against the shared
    base fields, so the type error is reported together with every other
    base-field problem.
    """
    tag = data.get("type") if isinstance(data, dict) else None
    variant = PACK_VARIANTS.get(tag) if isinstance(tag, str) else None
    return _validate_model(variant or PackBase, data, document, KIND_PACK)


def validate_bundle_definition(data: Any, document: str = "<bundle>") -> List[ValidationIssue]:
    """Validate data against the bundle definition schema.

    A definition whose `ordering.stable` is absent or not true fails here.
    """
    return _validate_model(BundleDefinition, data, document, KIND_BUNDLE)


_VALIDATORS = {
    KIND_CATALOG: validate_catalog,
    KIND_INDEX: validate_index,
    KIND_PACK: validate_pack,
    KIND_BUNDLE: validate_bundle_definition,
}


def validate_document(
    data: Any,
    kind: str,
    document: Optional[str] = None,
) -> List[ValidationIssue]:
    """Validate data against the schema of the given document kind.

    Args:
        data: Parsed JSON data.
        kind: One of 'catalog', 'index', 'pack', 'bundle'.
        document: Path used in the issue records.

    Returns:
        List of ValidationIssue.

    Raises:
        ValueError: If kind is invalid.
    """
    if kind not in _VALIDATORS:
        raise ValueError(
            f"Unknown document kind: {kind}. "
            f"Valid kinds: {VALID_DOCUMENT_KINDS}"
        )
    return _VALIDATORS[kind](data, document or f"<{kind}>")


def parse_bundle_definition(data: Dict[str, Any]) -> BundleDefinition:
    """Build a BundleDefinition from a document already known to be valid."""
    return BundleDefinition.model_validate(data)
