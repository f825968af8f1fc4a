"""
Tests for catalog.snapshot

Covers path conventions, the read-only snapshot view and loading a
content directory from disk.
"""

import pytest

from catalog.errors import DocumentParseError
from catalog.snapshot import (
    KIND_CATALOG,
    KIND_INDEX,
    KIND_PACK,
    ContentSnapshot,
    ContentTreeLoader,
    detect_document_kind,
    expected_page_path,
    is_external_url,
    pack_id_from_path,
    page_number_from_path,
)


class TestPathConventions:
    @pytest.mark.parametrize("path,kind", [
        ("/v1/workspaces/de/catalog.json", KIND_CATALOG),
        ("/v1/workspaces/de/context/index.json", KIND_INDEX),
        ("/v1/workspaces/de/context/pages/3.json", KIND_INDEX),
        ("/v1/packs/pack-001.json", KIND_PACK),
        ("/v1/packs/pack-001/pack.json", KIND_PACK),
        ("/v1/drills/verbs/drill.json", KIND_PACK),
        ("/v1/exams/final.json", KIND_PACK),
        ("/v1/audio/manifest.json", None),
        ("/v1/workspaces/de/context/pages/notes.json", None),
        ("/v1/workspaces/de/packs/greetings/pack.json", KIND_PACK),
        ("/v1/workspaces/de/exams/meta/notes.json", None),
        ("/v1/packs/a/b/c.json", None),
        ("/v1/drills/verbs/prompts.json", None),
        ("/v1/packs/a/b/pack.json", None),
    ])
    def test_detect_document_kind(self, path, kind):
        assert detect_document_kind(path) == kind

    def test_pack_id_from_flat_file(self):
        assert pack_id_from_path("/v1/packs/pack-001.json") == "pack-001"

    def test_pack_id_from_entry_file(self):
        assert pack_id_from_path("/v1/packs/pack-001/pack.json") == "pack-001"
        assert pack_id_from_path("/v1/exams/final/exam.json") == "final"

    def test_page_numbers(self):
        assert page_number_from_path("/v1/workspaces/de/context/index.json") == 1
        assert page_number_from_path("/v1/workspaces/de/context/pages/2.json") == 2
        assert page_number_from_path("/v1/packs/pack-001.json") is None

    def test_expected_page_path(self):
        base = "/v1/workspaces/de/context"
        assert expected_page_path(base, 1) == f"{base}/index.json"
        assert expected_page_path(base, 4) == f"{base}/pages/4.json"

    @pytest.mark.parametrize("url,external", [
        ("https://cdn.example.com/v1/packs/a.json", True),
        ("//cdn.example.com/v1/packs/a.json", True),
        ("/v1/packs/a.json", False),
        ("v1/packs/a.json", False),
    ])
    def test_is_external_url(self, url, external):
        assert is_external_url(url) is external


class TestContentSnapshot:
    def test_read_only(self, minimal_snapshot):
        with pytest.raises(TypeError):
            minimal_snapshot.documents["/v1/new.json"] = {}

    def test_contains_and_len(self, minimal_snapshot):
        assert "/v1/packs/pack-001.json" in minimal_snapshot
        assert "/v1/packs/missing.json" not in minimal_snapshot
        assert len(minimal_snapshot) == 3

    def test_paths_sorted(self, minimal_snapshot):
        paths = minimal_snapshot.paths()
        assert paths == sorted(paths)

    def test_documents_of_kind(self, minimal_snapshot):
        packs = list(minimal_snapshot.documents_of_kind(KIND_PACK))
        assert [p for p, _ in packs] == ["/v1/packs/pack-001.json"]

    def test_catalog_for_workspace(self, minimal_snapshot):
        path, catalog = minimal_snapshot.catalog_for_workspace("de")
        assert path == "/v1/workspaces/de/catalog.json"
        assert catalog["workspace"] == "de"
        assert minimal_snapshot.catalog_for_workspace("fr") is None

    def test_from_documents_copies_input(self, minimal_documents):
        snapshot = ContentSnapshot.from_documents(minimal_documents)
        minimal_documents["/v1/extra.json"] = {}
        assert "/v1/extra.json" not in snapshot


class TestContentTreeLoader:
    def test_load_tree(self, minimal_documents, write_tree):
        root = write_tree(minimal_documents)
        snapshot = ContentTreeLoader(root).load()
        assert set(snapshot.paths()) == set(minimal_documents)
        assert snapshot.get("/v1/packs/pack-001.json")["id"] == "pack-001"
        assert snapshot.parse_failures == ()

    def test_custom_prefix(self, minimal_documents, write_tree):
        root = write_tree(minimal_documents)
        snapshot = ContentTreeLoader(root, version_prefix="/v2/").load()
        assert "/v2/packs/pack-001.json" in snapshot
        assert snapshot.version_prefix == "/v2/"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ContentTreeLoader(str(tmp_path / "nope")).load()

    def test_invalid_json_recorded(self, minimal_documents, write_tree):
        minimal_documents["/v1/packs/broken.json"] = "{not json"
        root = write_tree(minimal_documents)
        snapshot = ContentTreeLoader(root).load()
        assert "/v1/packs/broken.json" not in snapshot
        assert len(snapshot.parse_failures) == 1
        failure = snapshot.parse_failures[0]
        assert failure.path == "/v1/packs/broken.json"
        assert "Invalid JSON" in failure.message

    def test_invalid_json_fail_fast(self, minimal_documents, write_tree):
        minimal_documents["/v1/packs/broken.json"] = "{not json"
        root = write_tree(minimal_documents)
        with pytest.raises(DocumentParseError) as exc_info:
            ContentTreeLoader(root, fail_fast=True).load()
        assert exc_info.value.path == "/v1/packs/broken.json"
