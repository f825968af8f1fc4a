"""
Pytest configuration and fixtures shared by the catalog test suite.

Corpus fixtures return fresh dicts keyed by snapshot path, so a test may
mutate its copy to introduce the fault it is checking for.
"""
import json
import os
from pathlib import Path

import pytest

from catalog.snapshot import ContentSnapshot


WORKSPACE = "de"
PREFIX = "/v1/"


def make_pack(pack_id, pack_type="context", level="A1", title=None, scenario=None, **extra):
    """Pack document with one item of the shape its type requires."""
    if pack_type == "context":
        items = [{"id": "s1", "text": "Guten Tag", "translation": "Good day", "audioUrl": "/v1/audio/s1.mp3"}]
    elif pack_type == "exam":
        items = [{
            "id": "q1",
            "question": "Wie geht's?",
            "answerType": "single",
            "options": ["Gut", "Schlecht"],
            "correctAnswer": 0,
        }]
    else:
        items = [{"id": "d1", "prompt": {"text": "Ich ___ müde.", "answer": "bin"}}]
    doc = {
        "id": pack_id,
        "type": pack_type,
        "title": title or pack_id,
        "language": "German",
        "level": level,
        "durationMins": 10,
        "tags": [],
        "items": items,
    }
    if scenario is not None:
        doc["scenario"] = scenario
    doc.update(extra)
    return doc


def make_pack_ref(pack, pack_url, **extra):
    """Index entry projecting `pack`."""
    ref = {
        "id": pack["id"],
        "title": pack["title"],
        "type": pack["type"],
        "level": pack["level"],
        "durationMins": pack["durationMins"],
        "packUrl": pack_url,
    }
    for key in ("scenario", "register", "primaryStructure"):
        if key in pack:
            ref[key] = pack[key]
    ref.update(extra)
    return ref


def make_catalog(sections, workspace=WORKSPACE):
    return {
        "workspace": workspace,
        "language": "German",
        "sections": [
            {
                "id": section_id,
                "kind": kind,
                "title": section_id.title(),
                "itemsUrl": f"/v1/workspaces/{workspace}/{section_id}/index.json",
            }
            for section_id, kind in sections
        ],
    }


def make_page(page, items, next_page=None, page_size=50, total=None):
    doc = {"page": page, "pageSize": page_size, "items": items, "nextPage": next_page}
    if total is not None:
        doc["total"] = total
    return doc


@pytest.fixture
def minimal_documents():
    """One workspace, one section, one index page, one pack."""
    pack = make_pack("pack-001")
    return {
        "/v1/workspaces/de/catalog.json": make_catalog([("context", "context")]),
        "/v1/workspaces/de/context/index.json": make_page(
            1, [make_pack_ref(pack, "/v1/packs/pack-001.json")]
        ),
        "/v1/packs/pack-001.json": pack,
    }


@pytest.fixture
def minimal_snapshot(minimal_documents):
    return ContentSnapshot.from_documents(minimal_documents)


@pytest.fixture
def doctor_documents():
    """Doctor scenario corpus: three A1 packs, one A2 pack, one A1 drill, one A1 exam."""
    packs = [
        make_pack("doctor-symptoms", level="A1", title="Symptoms", scenario="doctor"),
        make_pack("doctor-appointment", level="A1", title="Appointment", scenario="doctor"),
        make_pack("doctor-pharmacy", level="A1", title="Pharmacy", scenario="doctor"),
        make_pack("doctor-referral", level="A2", title="Referral", scenario="doctor"),
    ]
    drill = make_pack("doctor-verbs", pack_type="mechanics", level="A1",
                      title="Doctor verbs", scenario="doctor")
    exam = make_pack("doctor-check", pack_type="exam", level="A1",
                     title="Doctor check", scenario="doctor")

    docs = {
        "/v1/workspaces/de/catalog.json": make_catalog([
            ("context", "context"),
            ("mechanics", "mechanics"),
            ("exams", "exams"),
        ]),
        "/v1/workspaces/de/context/index.json": make_page(
            1,
            [make_pack_ref(p, f"/v1/packs/{p['id']}.json") for p in packs],
            total=4,
        ),
        "/v1/workspaces/de/mechanics/index.json": make_page(
            1, [make_pack_ref(drill, "/v1/drills/doctor-verbs/drill.json")]
        ),
        "/v1/workspaces/de/exams/index.json": make_page(
            1, [make_pack_ref(exam, "/v1/exams/doctor-check.json")]
        ),
        "/v1/drills/doctor-verbs/drill.json": drill,
        "/v1/exams/doctor-check.json": exam,
    }
    for p in packs:
        docs[f"/v1/packs/{p['id']}.json"] = p
    return docs


@pytest.fixture
def doctor_snapshot(doctor_documents):
    return ContentSnapshot.from_documents(doctor_documents)


@pytest.fixture
def bundle_definition():
    """Valid doctor/A1 bundle definition."""
    return {
        "version": 1,
        "id": "doctor-a1",
        "workspace": "de",
        "title": "Doctor A1",
        "description": "Beginner conversations at the doctor's office.",
        "filters": {"scenario": "doctor", "levels": ["A1"]},
        "includeKinds": ["pack"],
        "ordering": {"by": ["level", "title"], "stable": True},
    }


@pytest.fixture
def write_tree(tmp_path):
    """Write snapshot-keyed documents under tmp_path/content/v1 and return that dir."""
    def _write(documents, root=None):
        base = Path(root) if root else tmp_path / "content" / "v1"
        for key, doc in documents.items():
            target = base / key[len(PREFIX):]
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(doc, str):
                target.write_text(doc, encoding="utf-8")
            else:
                target.write_text(json.dumps(doc, ensure_ascii=False), encoding="utf-8")
        return str(base)
    return _write


@pytest.fixture
def write_bundles(tmp_path):
    """Write bundle definitions to tmp_path/bundles and return that dir."""
    def _write(*definitions):
        base = tmp_path / "bundles"
        base.mkdir(parents=True, exist_ok=True)
        for idx, definition in enumerate(definitions):
            name = definition.get("id", f"bundle-{idx}") if isinstance(definition, dict) else f"bundle-{idx}"
            (base / f"{name}.json").write_text(json.dumps(definition), encoding="utf-8")
        return str(base)
    return _write


@pytest.fixture(autouse=True, scope="function")
def reset_environment(monkeypatch):
    """Reset environment variables between tests."""
    for name in list(os.environ):
        if name.startswith("CONTENT_CATALOG_"):
            monkeypatch.delenv(name, raising=False)
    original_env = os.environ.copy()
    yield
    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def pack_factory():
    return make_pack


@pytest.fixture
def pack_ref_factory():
    return make_pack_ref


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture(autouse=True)
def quiet_cli_logging(monkeypatch):
    """Keep CLI runs from installing stderr handlers bound to CliRunner streams."""
    from catalog.utils.logging_config import logging_config
    monkeypatch.setattr(logging_config, "_configured", True)
