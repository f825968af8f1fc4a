"""
Content Snapshot

The immutable, path-keyed view of the content tree that every validator
and the bundle resolver read from, plus the loader that builds it from a
directory and the path conventions shared by all components.

Path conventions (all relative to the version prefix, e.g. /v1/):
- workspaces/{ws}/catalog.json            catalog
- workspaces/{ws}/{section}/index.json     index page 1
- workspaces/{ws}/{section}/pages/{n}.json index page n >= 2
- packs/{id}.json or .../packs/{id}/pack.json (also drills/, exams/)  pack
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from catalog.errors import DocumentParseError


logger = logging.getLogger(__name__)


# Document kinds
KIND_CATALOG = "catalog"
KIND_INDEX = "index"
KIND_PACK = "pack"
KIND_BUNDLE = "bundle"

DOCUMENT_KINDS = [KIND_CATALOG, KIND_INDEX, KIND_PACK, KIND_BUNDLE]

PACK_DIRECTORIES = ("packs", "drills", "exams")
ENTRY_FILENAMES = ("pack", "drill", "exam")

_EXTERNAL_URL = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_PAGE_FILE = re.compile(r"^(\d+)\.json$")


def is_external_url(url: str) -> bool:
    """True for fully-qualified or protocol-relative URLs."""
    return bool(_EXTERNAL_URL.match(url)) or url.startswith("//")


def detect_document_kind(path: str) -> Optional[str]:
    """Classify a snapshot path by the naming conventions of the content tree.

    Args:
        path: Snapshot path (e.g. /v1/workspaces/de/context/index.json).

    Returns:
        One of 'catalog', 'index', 'pack', or None for unrelated files.
    """
    p = PurePosixPath(path)
    if p.name == "catalog.json":
        return KIND_CATALOG
    if p.name == "index.json" or (p.parent.name == "pages" and _PAGE_FILE.match(p.name)):
        return KIND_INDEX
    if p.parent.name in PACK_DIRECTORIES:
        return KIND_PACK
    if p.stem in ENTRY_FILENAMES and p.parent.parent.name in PACK_DIRECTORIES:
        return KIND_PACK
    return None


def pack_id_from_path(path: str) -> str:
    """Derive the storage id of a pack from where it is stored.

    `.../packs/pack-001.json` -> `pack-001`;
    `.../packs/pack-001/pack.json` -> `pack-001`.
    """
    p = PurePosixPath(path)
    if p.stem in ENTRY_FILENAMES:
        return p.parent.name
    return p.stem


def page_number_from_path(path: str) -> Optional[int]:
    """Page number implied by an index path: index.json is 1, pages/{n}.json is n."""
    p = PurePosixPath(path)
    if p.name == "index.json":
        return 1
    match = _PAGE_FILE.match(p.name)
    if p.parent.name == "pages" and match:
        return int(match.group(1))
    return None


def section_base_from_index(first_page_path: str) -> str:
    """Directory of a section, given the path of its first index page."""
    return str(PurePosixPath(first_page_path).parent)


def expected_page_path(section_base: str, page: int) -> str:
    """Conventional path of page `page` of the index rooted at `section_base`."""
    if page == 1:
        return f"{section_base}/index.json"
    return f"{section_base}/pages/{page}.json"


@dataclass(frozen=True)
class ParseFailure:
    """A file that could not be parsed into a document."""
    path: str
    message: str


@dataclass(frozen=True)
class ContentSnapshot:
    """Read-only view of every loaded document, keyed by its absolute content path.

    The snapshot is built once per run; nothing downstream mutates it, so
    validators and bundle resolutions may run against it in any order.
    """
    documents: Mapping[str, Any]
    parse_failures: Tuple[ParseFailure, ...] = ()
    version_prefix: str = "/v1/"

    @classmethod
    def from_documents(
        cls,
        documents: Mapping[str, Any],
        parse_failures: Tuple[ParseFailure, ...] = (),
        version_prefix: str = "/v1/",
    ) -> "ContentSnapshot":
        return cls(
            documents=MappingProxyType(dict(documents)),
            parse_failures=tuple(parse_failures),
            version_prefix=version_prefix,
        )

    def __contains__(self, path: str) -> bool:
        return path in self.documents

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, path: str) -> Any:
        return self.documents.get(path)

    def paths(self) -> List[str]:
        return sorted(self.documents)

    def documents_of_kind(self, kind: str) -> Iterator[Tuple[str, Any]]:
        """Yield (path, document) pairs of one kind in path order."""
        for path in self.paths():
            if detect_document_kind(path) == kind:
                yield path, self.documents[path]

    def catalogs(self) -> List[Tuple[str, Dict[str, Any]]]:
        """All catalog documents that are JSON objects, in path order."""
        return [(p, d) for p, d in self.documents_of_kind(KIND_CATALOG) if isinstance(d, dict)]

    def catalog_for_workspace(self, workspace: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        """First catalog declaring `workspace`, or None."""
        for path, doc in self.catalogs():
            if doc.get("workspace") == workspace:
                return path, doc
        return None


@dataclass
class ContentTreeLoader:
    """Reads a content-version directory into a ContentSnapshot.

    Attributes:
        root_dir: Directory holding the version's files (e.g. content/v1)
        version_prefix: Prefix prepended to every relative path
        fail_fast: Raise DocumentParseError on the first unparseable file
            instead of recording it
    """
    root_dir: str
    version_prefix: str = "/v1/"
    fail_fast: bool = False
    _failures: List[ParseFailure] = field(default_factory=list, init=False, repr=False)

    def load(self) -> ContentSnapshot:
        """Load every *.json file under root_dir.

        Raises:
            FileNotFoundError: If root_dir does not exist.
            DocumentParseError: On unparseable JSON when fail_fast is set.
        """
        root = Path(self.root_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"Content directory not found: {root}")

        documents: Dict[str, Any] = {}
        self._failures = []

        for file_path in sorted(root.rglob("*.json")):
            if not file_path.is_file():
                continue
            key = self.version_prefix + file_path.relative_to(root).as_posix()
            data = self._read(file_path, key)
            if data is not None:
                documents[key] = data

        logger.info(
            f"Loaded {len(documents)} document(s) from {root} "
            f"({len(self._failures)} unparseable)"
        )
        return ContentSnapshot.from_documents(
            documents, tuple(self._failures), self.version_prefix
        )

    def _read(self, file_path: Path, key: str) -> Any:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if self.fail_fast:
                raise DocumentParseError(key, e)
            logger.error(f"Invalid JSON in {key}: {e}")
            self._failures.append(ParseFailure(key, f"Invalid JSON: {e}"))
        except OSError as e:
            if self.fail_fast:
                raise DocumentParseError(key, e)
            logger.error(f"Cannot read {key}: {e}")
            self._failures.append(ParseFailure(key, f"Cannot read file: {e}"))
        return None
