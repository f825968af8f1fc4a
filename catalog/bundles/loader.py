"""
Bundle definition loader.

Loads bundle definition documents from a directory (`*.json`, plus
`*.yaml`/`*.yml` for hand-written definitions). Documents are kept raw;
schema checking happens in the validation engine and the resolver.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from catalog.errors import BundleNotFoundError
from catalog.validation.report import CATEGORY_BUNDLE, CATEGORY_PARSE, ValidationIssue


logger = logging.getLogger(__name__)


BUNDLE_FILE_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass(frozen=True)
class BundleSource:
    """A raw bundle definition and the file it came from."""
    path: str
    data: Any

    @property
    def bundle_id(self) -> Optional[str]:
        if isinstance(self.data, dict) and isinstance(self.data.get("id"), str):
            return self.data["id"]
        return None


class BundleLoader:
    """Loads bundle definitions from a directory.

    Unparseable files and duplicate bundle ids are collected in `issues`
    rather than raised, so one broken definition does not hide the others.
    """

    def __init__(self, bundles_dir: Optional[str] = None):
        """Initialize the bundle loader.

        Args:
            bundles_dir: Directory holding bundle definition files
        """
        self._bundles_dir = Path(bundles_dir) if bundles_dir else None
        self._sources: List[BundleSource] = []
        self._by_id: Dict[str, BundleSource] = {}
        self.issues: List[ValidationIssue] = []
        self._load_all_bundles()

    def _load_all_bundles(self) -> None:
        if self._bundles_dir is None:
            return
        if not self._bundles_dir.is_dir():
            logger.warning(f"Bundles directory not found: {self._bundles_dir}")
            return

        for path in sorted(self._bundles_dir.iterdir()):
            if path.is_file() and path.suffix in BUNDLE_FILE_SUFFIXES:
                self._load_bundle_file(path)

        logger.info(f"Loaded {len(self._sources)} bundle definition(s) from {self._bundles_dir}")

    def _load_bundle_file(self, path: Path) -> None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            self.issues.append(ValidationIssue(
                level="error",
                category=CATEGORY_PARSE,
                document=str(path),
                field="root",
                message=f"Failed to parse bundle definition: {e}",
            ))
            return

        source = BundleSource(path=str(path), data=data)
        self._sources.append(source)

        bundle_id = source.bundle_id
        if bundle_id is None:
            return
        if bundle_id in self._by_id:
            self.issues.append(ValidationIssue(
                level="error",
                category=CATEGORY_BUNDLE,
                document=str(path),
                field="id",
                message=f"Duplicate bundle id '{bundle_id}' (already defined in {self._by_id[bundle_id].path})",
                expected="unique bundle id",
                actual=bundle_id,
            ))
            return
        self._by_id[bundle_id] = source

    def sources(self) -> List[BundleSource]:
        """Every parsed definition file, in file name order."""
        return list(self._sources)

    def load_bundle(self, bundle_id: str) -> Dict[str, Any]:
        """Load a raw bundle definition by id.

        Raises:
            BundleNotFoundError: If bundle id doesn't exist
        """
        if bundle_id not in self._by_id:
            raise BundleNotFoundError(bundle_id, list(self._by_id.keys()))
        return self._by_id[bundle_id].data

    def list_bundles(self) -> List[BundleSource]:
        """Definitions with an id, sorted by id."""
        return [self._by_id[name] for name in sorted(self._by_id)]

    def get_bundle_names(self) -> List[str]:
        return sorted(self._by_id.keys())

    def has_bundle(self, bundle_id: str) -> bool:
        return bundle_id in self._by_id

    def format_bundle_list(self) -> str:
        """Format bundle list for CLI display."""
        lines = ["Available bundles:", ""]

        for source in self.list_bundles():
            data = source.data
            lines.append(f"  {source.bundle_id}")
            if data.get("title"):
                lines.append(f"    {data['title']}")
            lines.append(f"    Workspace: {data.get('workspace', '?')}")
            kinds = data.get("includeKinds")
            if isinstance(kinds, list):
                lines.append(f"    Kinds: {', '.join(str(k) for k in kinds)}")
            lines.append("")

        return "\n".join(lines)
