"""
Corpus flattening.

Turns one workspace's catalog -> sections -> page chain -> PackRef tree into
a de-duplicated list of CorpusItem records carrying the attributes bundle
filters and orderings look at. The PackRef is the listing; the Pack it
points to fills in taxonomy fields the PackRef leaves out.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from catalog.snapshot import ContentSnapshot
from catalog.validation.schemas.common import TYPE_TO_KIND
from catalog.validation.schemas.index_v1 import PackRefEntry
from catalog.validation.schemas.pack_v1 import PACK_VARIANTS, PackBase


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusItem:
    """A content item as seen by bundle filters and orderers."""
    kind: str
    id: str
    title: str
    level: Optional[str]
    duration_mins: int
    url: str
    workspace: str
    section: str
    scenario: Optional[str] = None
    register: Optional[str] = None
    primary_structure: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def uid(self) -> str:
        """Stable corpus-relative identifier, the final ordering tiebreaker."""
        return f"{self.workspace}/{self.kind}/{self.id}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "id": self.id,
            "title": self.title,
            "level": self.level,
            "durationMins": self.duration_mins,
            "url": self.url,
            "section": self.section,
            "scenario": self.scenario,
            "register": self.register,
            "primaryStructure": self.primary_structure,
            "tags": list(self.tags),
        }


def _pick(listed: Any, fallback: Any) -> Any:
    return listed if listed is not None else fallback


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _walk_pages(snapshot: ContentSnapshot, first_page: str) -> List[Dict[str, Any]]:
    """Pages of a chain in order; stops at missing pages and loops."""
    pages: List[Dict[str, Any]] = []
    visited = set()
    current: Optional[str] = first_page
    while isinstance(current, str) and current not in visited:
        visited.add(current)
        page = snapshot.get(current)
        if not isinstance(page, dict):
            break
        pages.append(page)
        current = page.get("nextPage")
    return pages


def flatten_workspace(snapshot: ContentSnapshot, workspace: str) -> List[CorpusItem]:
    """Collect every item listed in a workspace's section indexes.

    Items are keyed by (kind, id); the first occurrence wins. PackRefs whose
    pack is missing are skipped with a warning: the reference validator
    reports them as errors.

    Args:
        snapshot: Loaded content tree.
        workspace: Workspace id as declared in its catalog.

    Returns:
        List of CorpusItem in corpus walk order.
    """
    found = snapshot.catalog_for_workspace(workspace)
    if found is None:
        return []
    _, catalog = found

    items: List[CorpusItem] = []
    seen = set()
    for section in catalog.get("sections") or []:
        if not isinstance(section, dict):
            continue
        section_id = str(section.get("id", ""))
        for page in _walk_pages(snapshot, section.get("itemsUrl")):
            for ref in page.get("items") or []:
                if not isinstance(ref, dict):
                    continue
                item = _to_corpus_item(snapshot, workspace, section_id, ref)
                if item is None:
                    continue
                key = (item.kind, item.id)
                if key in seen:
                    logger.debug(f"Skipping duplicate {item.kind}:{item.id} in {workspace}/{section_id}")
                    continue
                seen.add(key)
                items.append(item)

    logger.debug(f"Flattened workspace '{workspace}': {len(items)} item(s)")
    return items


def _to_corpus_item(
    snapshot: ContentSnapshot,
    workspace: str,
    section_id: str,
    ref: Dict[str, Any],
) -> Optional[CorpusItem]:
    url = ref.get("packUrl")
    pack = snapshot.get(url) if isinstance(url, str) else None
    if not isinstance(pack, dict):
        logger.warning(f"Skipping PackRef {ref.get('id')!r} in {workspace}/{section_id}: pack not found at {url}")
        return None

    # Only schema-valid documents reach filters and orderers; the schema
    # validator reports the rest.
    pack_type = pack.get("type")
    pack_model = PACK_VARIANTS.get(pack_type, PackBase) if isinstance(pack_type, str) else PackBase
    try:
        entry = PackRefEntry.model_validate(ref)
        source = pack_model.model_validate(pack)
    except ValidationError as e:
        logger.debug(
            f"Skipping PackRef {ref.get('id')!r} in {workspace}/{section_id}: "
            f"{e.error_count()} schema error(s)"
        )
        return None

    listed_tags = ref.get("tags")
    return CorpusItem(
        kind=TYPE_TO_KIND[entry.type],
        id=entry.id,
        title=entry.title,
        level=entry.level,
        duration_mins=entry.durationMins,
        url=entry.packUrl,
        workspace=workspace,
        section=section_id,
        scenario=_pick(entry.scenario, source.scenario),
        register=_pick(entry.register_, source.register_),
        primary_structure=_pick(entry.primaryStructure, source.primaryStructure),
        tags=tuple(listed_tags if _is_string_list(listed_tags) else source.tags),
    )
