# tests/test_api.py

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

import api
from contextualizer.application.vocabulary_service import VocabularyService
from contextualizer.domain.interfaces import AnnotationError
from contextualizer.domain.models import Annotation
from contextualizer.infrastructure.document_store import InMemoryDocumentStore
from contextualizer.infrastructure.history_store import JsonSearchHistoryStore


ESSAY = (
    b"The policy aims to mitigate risk. It is effective. Critics disagree. "
    b"The mitigate strategy works."
)


@pytest.fixture
def annotator():
    annotator = MagicMock()
    annotator.annotate.return_value = [
        Annotation(1, "translation one", "meaning one"),
        Annotation(2, "translation two", "meaning two"),
    ]
    return annotator


@pytest.fixture
def client(tmp_path, monkeypatch, annotator):
    history = JsonSearchHistoryStore(str(tmp_path / "history.json"))
    monkeypatch.setattr(api, "document_store", InMemoryDocumentStore())
    monkeypatch.setattr(api, "history_store", history)
    monkeypatch.setattr(api, "vocabulary_service", VocabularyService(annotator, history_store=history))
    return TestClient(api.app)


def _upload(client, *files):
    return client.post("/upload", files=[("files", f) for f in files])


def test_upload_lists_and_skips_unsupported(client):
    response = _upload(
        client,
        ("essay.md", ESSAY, "text/markdown"),
        ("scan.pdf", b"%PDF", "application/pdf"),
    )

    assert response.status_code == 200
    body = response.json()
    assert [f["name"] for f in body["files"]] == ["essay.md"]
    assert body["skipped"] == ["scan.pdf"]

    documents = client.get("/documents").json()["documents"]
    assert documents[0]["type"] == "markdown"


def test_delete_document(client):
    doc_id = _upload(client, ("essay.md", ESSAY, "text/markdown")).json()["files"][0]["id"]

    assert client.delete(f"/documents/{doc_id}").status_code == 200
    assert client.delete(f"/documents/{doc_id}").status_code == 404
    assert client.get("/documents").json()["documents"] == []


def test_search_returns_merged_results(client, annotator):
    _upload(client, ("essay.md", ESSAY, "text/markdown"))

    response = client.post("/search", json={"keyword": "mitigate"})

    assert response.status_code == 200
    body = response.json()
    assert len(body["examples"]) == 2
    assert body["results"][1]["translation"] == "translation two"
    assert body["results"][1]["original_sentence"] == body["examples"][1]["text"]
    assert client.get("/history").json()["history"] == ["mitigate"]


def test_search_no_examples_is_404(client, annotator):
    _upload(client, ("essay.md", ESSAY, "text/markdown"))

    response = client.post("/search", json={"keyword": "ambitious"})

    assert response.status_code == 404
    assert "No examples found" in response.json()["detail"]
    annotator.annotate.assert_not_called()


def test_search_validation_errors(client):
    assert client.post("/search", json={"keyword": "mitigate"}).status_code == 400

    _upload(client, ("essay.md", ESSAY, "text/markdown"))
    assert client.post("/search", json={"keyword": "  "}).status_code == 400
    assert client.post("/search", json={"keyword": "mitigate", "model": "gpt-4"}).status_code == 400


def test_search_annotation_failure_is_502(client, annotator):
    annotator.annotate.side_effect = AnnotationError("Failed to analyze vocabulary.")
    _upload(client, ("essay.md", ESSAY, "text/markdown"))

    response = client.post("/search", json={"keyword": "mitigate"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to analyze vocabulary."


def test_search_without_api_key_is_503(client, monkeypatch):
    monkeypatch.setattr(api, "vocabulary_service", None)

    response = client.post("/search", json={"keyword": "mitigate"})

    assert response.status_code == 503


def test_export_csv(client):
    payload = {
        "keyword": "mitigate",
        "results": [{
            "original_sentence": "The policy aims to mitigate risk.",
            "translation": "t",
            "meaning_in_context": "m",
            "source_doc_id": "d1",
            "source_doc_name": "essay.md",
        }],
    }

    response = client.post("/export/csv", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "ielts_vocabulary_mitigate.csv" in response.headers["content-disposition"]
    assert response.text.splitlines()[1].startswith('"essay.md"')


def test_models_and_history_clear(client):
    models = client.get("/models").json()
    assert "gemini-2.5-flash" in [m["id"] for m in models["models"]]

    assert client.delete("/history").status_code == 200
    assert client.get("/history").json()["history"] == []


def test_export_text_uses_copy_all_layout(client):
    payload = {
        "keyword": "mitigate",
        "results": [{
            "original_sentence": "The policy aims to mitigate risk.",
            "translation": "t",
            "meaning_in_context": "m",
            "source_doc_id": "d1",
            "source_doc_name": "essay.md",
        }],
    }

    response = client.post("/export/text", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "ielts_vocabulary_mitigate.txt" in response.headers["content-disposition"]
    assert response.text.startswith('IELTS Vocabulary Analysis for "mitigate"\n\n[1] Source: essay.md\n')
    assert client.post("/export/text", json={"keyword": "x", "results": []}).status_code == 400
