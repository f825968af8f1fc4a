"""
Cross-Reference Validator

Walks the catalog -> section -> index -> pack links of a snapshot:
- Collects every URL-shaped field (itemsUrl, packUrl, nextPage) with its target
- Checks paths carry the version prefix and are never external URLs
- Checks referenced documents exist
- Checks pack ids against their storage path and against the PackRefs
- Flags packs no index references (warning)

Broken nextPage links are left to the pagination validator so each broken
link is reported exactly once.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from catalog.config.schema import EngineConfig
from catalog.snapshot import (
    KIND_INDEX,
    KIND_PACK,
    ContentSnapshot,
    detect_document_kind,
    is_external_url,
    pack_id_from_path,
)
from catalog.validation.report import CATEGORY_REFERENCE, ValidationIssue, render_value


logger = logging.getLogger(__name__)


REF_ITEMS_URL = "itemsUrl"
REF_PACK_URL = "packUrl"
REF_NEXT_PAGE = "nextPage"


@dataclass(frozen=True)
class Reference:
    """One URL-shaped field and where it points.

    Attributes:
        source: Path of the document holding the field
        field: Field path within that document
        kind: itemsUrl, packUrl or nextPage
        url: The literal path
        resolved: Whether a document exists at that path
    """
    source: str
    field: str
    kind: str
    url: str
    resolved: bool


@dataclass
class ReferenceResolution:
    """Result of resolving all references of a snapshot."""
    references: List[Reference] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)
    referenced_packs: Set[str] = field(default_factory=set)

    @property
    def unresolved(self) -> List[Reference]:
        return [r for r in self.references if not r.resolved]

    def targets(self) -> Dict[str, List[Reference]]:
        """References grouped by target path."""
        grouped: Dict[str, List[Reference]] = {}
        for ref in self.references:
            grouped.setdefault(ref.url, []).append(ref)
        return grouped


def check_content_path(url: str, version_prefix: str) -> Optional[str]:
    """Return a problem description if `url` is not an absolute content path."""
    if is_external_url(url):
        return f"'{url}' is a fully-qualified URL; content paths must be absolute paths under {version_prefix}"
    if not url.startswith(version_prefix):
        return f"'{url}' must start with the version prefix {version_prefix}"
    return None


def _error(document: str, field_path: str, message: str, **kwargs) -> ValidationIssue:
    return ValidationIssue(
        level="error",
        category=CATEGORY_REFERENCE,
        document=document,
        field=field_path,
        message=message,
        **kwargs,
    )


def resolve_references(
    snapshot: ContentSnapshot,
    config: Optional[EngineConfig] = None,
) -> ReferenceResolution:
    """Resolve and check every cross-document reference in a snapshot.

    Args:
        snapshot: Loaded content tree.
        config: Engine configuration (version prefix).

    Returns:
        ReferenceResolution with the reference set and any issues.
    """
    config = config or EngineConfig()
    result = ReferenceResolution()

    _check_catalogs(snapshot, config, result)
    _check_indexes(snapshot, config, result)
    _check_pack_ids(snapshot, result)
    _check_orphans(snapshot, result)

    logger.debug(
        f"Resolved {len(result.references)} reference(s), "
        f"{len(result.unresolved)} unresolved"
    )
    return result


def _check_catalogs(snapshot: ContentSnapshot, config: EngineConfig, result: ReferenceResolution) -> None:
    seen_workspaces: Dict[str, str] = {}

    for path, catalog in snapshot.catalogs():
        workspace = catalog.get("workspace")
        if isinstance(workspace, str):
            if workspace in seen_workspaces:
                result.issues.append(_error(
                    path, "workspace",
                    f"Duplicate workspace id '{workspace}' (already declared by {seen_workspaces[workspace]})",
                    expected="unique workspace id",
                    actual=workspace,
                ))
            else:
                seen_workspaces[workspace] = path

        sections = catalog.get("sections")
        if not isinstance(sections, list):
            continue
        for idx, section in enumerate(sections):
            if not isinstance(section, dict):
                continue
            url = section.get("itemsUrl")
            if not isinstance(url, str):
                continue
            field_path = f"sections[{idx}].itemsUrl"
            problem = check_content_path(url, config.version_prefix)
            resolved = url in snapshot
            result.references.append(Reference(path, field_path, REF_ITEMS_URL, url, resolved))

            if problem:
                result.issues.append(_error(path, field_path, problem, expected=f"{config.version_prefix}...", actual=url))
                continue
            if not url.endswith("/index.json"):
                result.issues.append(_error(
                    path, field_path,
                    f"itemsUrl '{url}' must point to the first index page ({{section}}/index.json)",
                    expected="{section}/index.json",
                    actual=url,
                ))
            if not resolved:
                result.issues.append(_error(
                    path, field_path,
                    f"itemsUrl points to a missing document: {url}",
                    actual=url,
                ))
            elif detect_document_kind(url) != KIND_INDEX:
                result.issues.append(_error(
                    path, field_path,
                    f"itemsUrl '{url}' does not point to an index document",
                    actual=url,
                ))


def _check_indexes(snapshot: ContentSnapshot, config: EngineConfig, result: ReferenceResolution) -> None:
    for path, page in snapshot.documents_of_kind(KIND_INDEX):
        if not isinstance(page, dict):
            continue

        next_page = page.get("nextPage")
        if isinstance(next_page, str):
            result.references.append(
                Reference(path, "nextPage", REF_NEXT_PAGE, next_page, next_page in snapshot)
            )

        items = page.get("items")
        if not isinstance(items, list):
            continue
        for idx, item in enumerate(items):
            if isinstance(item, dict):
                _check_pack_ref(snapshot, config, result, path, idx, item)


def _check_pack_ref(
    snapshot: ContentSnapshot,
    config: EngineConfig,
    result: ReferenceResolution,
    index_path: str,
    idx: int,
    item: Dict[str, Any],
) -> None:
    url = item.get("packUrl")
    if not isinstance(url, str):
        return
    field_path = f"items[{idx}].packUrl"
    resolved = url in snapshot
    result.references.append(Reference(index_path, field_path, REF_PACK_URL, url, resolved))

    problem = check_content_path(url, config.version_prefix)
    if problem:
        result.issues.append(_error(index_path, field_path, problem, expected=f"{config.version_prefix}...", actual=url))
        return
    if not resolved:
        result.issues.append(_error(
            index_path, field_path,
            f"packUrl points to a missing pack: {url}",
            actual=url,
            suggestion="Add the pack document or remove the entry from the index.",
        ))
        return

    result.referenced_packs.add(url)
    pack = snapshot.get(url)
    if detect_document_kind(url) != KIND_PACK or not isinstance(pack, dict):
        result.issues.append(_error(
            index_path, field_path,
            f"packUrl '{url}' does not point to a pack document",
            actual=url,
        ))
        return

    ref_id = item.get("id")
    pack_id = pack.get("id")
    if ref_id != pack_id:
        result.issues.append(_error(
            index_path, f"items[{idx}].id",
            f"PackRef id {render_value(ref_id)} does not match pack id {render_value(pack_id)} at {url}",
            expected=render_value(pack_id),
            actual=render_value(ref_id),
        ))

    for attr in ("type", "level"):
        if attr in item and attr in pack and item[attr] != pack[attr]:
            result.issues.append(ValidationIssue(
                level="warning",
                category=CATEGORY_REFERENCE,
                document=index_path,
                field=f"items[{idx}].{attr}",
                message=f"PackRef {attr} {render_value(item[attr])} differs from pack {attr} {render_value(pack[attr])}",
                expected=render_value(pack[attr]),
                actual=render_value(item[attr]),
            ))


def _check_pack_ids(snapshot: ContentSnapshot, result: ReferenceResolution) -> None:
    for path, pack in snapshot.documents_of_kind(KIND_PACK):
        if not isinstance(pack, dict) or "id" not in pack:
            continue
        expected_id = pack_id_from_path(path)
        if pack["id"] != expected_id:
            result.issues.append(_error(
                path, "id",
                f"Pack id {render_value(pack['id'])} does not match the id implied by its path ('{expected_id}')",
                expected=expected_id,
                actual=render_value(pack["id"]),
                suggestion="Rename the file or fix the id so they agree.",
            ))


def _check_orphans(snapshot: ContentSnapshot, result: ReferenceResolution) -> None:
    for path, _ in snapshot.documents_of_kind(KIND_PACK):
        if path not in result.referenced_packs:
            result.issues.append(ValidationIssue(
                level="warning",
                category=CATEGORY_REFERENCE,
                document=path,
                field="root",
                message="Orphan pack: no index references this pack",
                suggestion="Reference it from a section index or remove it.",
            ))
