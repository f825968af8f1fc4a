"""
Pagination Chain Validator

Follows each section index from its first page along `nextPage` links and
checks the chain as a whole:
- page numbers run 1, 2, 3, ... with no gaps
- each nextPage points at `{section}/pages/{n+1}.json` and that file exists
- the last page has `nextPage: null`
- no page is visited twice (loops are reported, not followed)
- no page holds more items than its pageSize
- pageSize and total agree on every page, item ids are unique in the chain
- a declared total equals the item count across a complete chain

Each chain is validated independently; a broken chain never stops the
validation of the others.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from catalog.config.schema import EngineConfig
from catalog.snapshot import (
    KIND_INDEX,
    ContentSnapshot,
    detect_document_kind,
    expected_page_path,
    is_external_url,
    section_base_from_index,
)
from catalog.validation.report import CATEGORY_PAGINATION, ValidationIssue, render_value


logger = logging.getLogger(__name__)


@dataclass
class ChainResult:
    """Outcome of walking one page chain.

    Attributes:
        first_page: Path of page 1
        scope: Human-readable owner of the chain (section or index path)
        pages: Page paths in visit order
        total_items: Item count across visited pages
        complete: True when the walk ended on a page with nextPage null
        issues: Pagination issues found on this chain
    """
    first_page: str
    scope: str
    pages: List[str] = field(default_factory=list)
    total_items: int = 0
    complete: bool = False
    issues: List[ValidationIssue] = field(default_factory=list)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_content_path(url: str, prefix: str) -> bool:
    return not is_external_url(url) and url.startswith(prefix)


class PaginationChainValidator:
    """Validates every paginated index chain of a snapshot."""

    def __init__(self, snapshot: ContentSnapshot, config: Optional[EngineConfig] = None):
        self.snapshot = snapshot
        self.config = config or EngineConfig()

    def validate(self) -> List[ValidationIssue]:
        """Validate all chains and flag pages no chain reaches.

        Returns:
            List of ValidationIssue across all chains.
        """
        issues: List[ValidationIssue] = []
        reached: Set[str] = set()

        for first_page, scope in self._chain_roots():
            chain = self.validate_chain(first_page, scope)
            reached.update(chain.pages)
            issues.extend(chain.issues)

        prefix = self.config.version_prefix
        for path, page in self.snapshot.documents_of_kind(KIND_INDEX):
            if path in reached:
                continue
            issues.append(ValidationIssue(
                level="warning",
                category=CATEGORY_PAGINATION,
                document=path,
                field="root",
                message="Index page is not reachable from any first page",
            ))
            # Chain walks check this on reached pages only.
            next_page = page.get("nextPage") if isinstance(page, dict) else None
            if isinstance(next_page, str) and not _is_content_path(next_page, prefix):
                issues.append(ValidationIssue(
                    level="error",
                    category=CATEGORY_PAGINATION,
                    document=path,
                    field="nextPage",
                    message=f"nextPage '{next_page}' must be an absolute path starting with {prefix}",
                    actual=next_page,
                ))
        return issues

    def _chain_roots(self) -> List[tuple]:
        """First pages to walk: every section itemsUrl plus every stray index.json."""
        roots: Dict[str, str] = {}
        for catalog_path, catalog in self.snapshot.catalogs():
            sections = catalog.get("sections")
            if not isinstance(sections, list):
                continue
            for section in sections:
                if not isinstance(section, dict):
                    continue
                url = section.get("itemsUrl")
                if isinstance(url, str) and url.endswith("/index.json") and url in self.snapshot:
                    roots.setdefault(
                        url,
                        f"section '{section.get('id')}' of workspace '{catalog.get('workspace')}'",
                    )
        for path, _ in self.snapshot.documents_of_kind(KIND_INDEX):
            if path.endswith("/index.json"):
                roots.setdefault(path, f"index {path}")
        return sorted(roots.items())

    def validate_chain(self, first_page: str, scope: Optional[str] = None) -> ChainResult:
        """Walk one chain starting at `first_page`.

        Args:
            first_page: Path of page 1 (`{section}/index.json`).
            scope: Owner label used in messages.

        Returns:
            ChainResult for the chain.
        """
        result = ChainResult(first_page=first_page, scope=scope or f"index {first_page}")
        section_base = section_base_from_index(first_page)
        prefix = self.config.version_prefix

        def error(document: str, field_path: str, message: str, **kwargs) -> None:
            result.issues.append(ValidationIssue(
                level="error",
                category=CATEGORY_PAGINATION,
                document=document,
                field=field_path,
                message=f"{result.scope}: {message}",
                **kwargs,
            ))

        if first_page not in self.snapshot:
            error(first_page, "root", f"first index page not found at {first_page}")
            return result

        seen_ids: Dict[str, str] = {}
        first_page_size = None
        first_total = None
        current = first_page
        number = 1

        while True:
            result.pages.append(current)
            page = self.snapshot.get(current)
            if not isinstance(page, dict):
                error(current, "root", "index page is not a JSON object")
                break

            declared = page.get("page")
            if declared != number:
                error(current, "page", f"expected page number {number}, found {render_value(declared)}",
                      expected=str(number), actual=render_value(declared))

            page_size = page.get("pageSize")
            total = page.get("total")
            if number == 1:
                first_page_size, first_total = page_size, total
            else:
                if page_size != first_page_size:
                    error(current, "pageSize",
                          f"pageSize {render_value(page_size)} differs from first page {render_value(first_page_size)}",
                          expected=render_value(first_page_size), actual=render_value(page_size))
                if "total" in page and total != first_total:
                    error(current, "total",
                          f"total {render_value(total)} differs from first page {render_value(first_total)}",
                          expected=render_value(first_total), actual=render_value(total))

            items = page.get("items")
            if isinstance(items, list):
                if _is_int(page_size) and len(items) > page_size:
                    error(current, "items",
                          f"{len(items)} items exceed pageSize {page_size}",
                          expected=f"<= {page_size}", actual=str(len(items)))
                result.total_items += len(items)
                for idx, item in enumerate(items):
                    item_id = item.get("id") if isinstance(item, dict) else None
                    if not isinstance(item_id, str):
                        continue
                    if item_id in seen_ids:
                        error(current, f"items[{idx}].id",
                              f"duplicate item id '{item_id}' (first seen on {seen_ids[item_id]})",
                              actual=item_id)
                    else:
                        seen_ids[item_id] = current

            next_page = page.get("nextPage")
            if next_page is None:
                result.complete = True
                break
            if not isinstance(next_page, str):
                # Wrong type is a schema error; the chain just ends here.
                logger.debug(f"{current}: non-string nextPage, chain stops")
                break

            if not _is_content_path(next_page, prefix):
                error(current, "nextPage",
                      f"nextPage '{next_page}' must be an absolute path starting with {prefix}",
                      actual=next_page)
                break

            if next_page in result.pages:
                error(current, "nextPage",
                      f"cycle detected: nextPage '{next_page}' was already visited",
                      actual=next_page)
                break

            expected_next = expected_page_path(section_base, number + 1)
            if next_page != expected_next:
                error(current, "nextPage",
                      f"nextPage '{next_page}' does not follow the page convention (expected {expected_next})",
                      expected=expected_next, actual=next_page)

            if next_page not in self.snapshot:
                error(current, "nextPage",
                      f"nextPage chain broken: file not found at {next_page}",
                      actual=next_page,
                      suggestion="Add the missing page or set nextPage to null on the last page.")
                break
            if detect_document_kind(next_page) != KIND_INDEX:
                error(current, "nextPage", f"nextPage '{next_page}' is not an index page", actual=next_page)
                break

            current = next_page
            number += 1

        if result.complete and _is_int(first_total) and result.total_items != first_total:
            error(first_page, "total",
                  f"declared total is {first_total} but {len(result.pages)} page(s) hold {result.total_items} item(s)",
                  expected=str(first_total), actual=str(result.total_items))

        logger.debug(
            f"Chain {first_page}: {len(result.pages)} page(s), {result.total_items} item(s), "
            f"complete={result.complete}"
        )
        return result


def validate_pagination(
    snapshot: ContentSnapshot,
    config: Optional[EngineConfig] = None,
) -> List[ValidationIssue]:
    """Validate every index chain in the snapshot."""
    return PaginationChainValidator(snapshot, config).validate()
