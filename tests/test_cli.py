# tests/test_cli.py

import io
import pytest
from rich.console import Console
from contextualizer.domain.models import AnalysisResult, Document, VocabularyAnalysis
from contextualizer.interface import cli
import main


@pytest.fixture
def output(monkeypatch):
    buffer = io.StringIO()
    monkeypatch.setattr(cli, "console", Console(file=buffer, width=200, color_system=None))
    return buffer


def _make_result(keyword: str) -> AnalysisResult:
    return AnalysisResult(
        keyword=keyword,
        model="gemini-2.5-flash",
        analyses=[VocabularyAnalysis(
            original_sentence="A [bold] sentence with [/i] brackets.",
            translation="翻译",
            meaning_in_context="meaning",
            source_doc_id="d1",
            source_doc_name="[notes].md",
        )],
    )


def test_error_with_bracketed_keyword_is_printed_verbatim(output):
    message = AnalysisResult(keyword="[/i]", model="m").no_examples_message

    cli.display_error(message)

    assert 'No examples found for "[/i]"' in output.getvalue()


def test_history_with_bracketed_terms_is_printed_verbatim(output):
    cli.display_history(["mitigate", "[/b]", "[red]word"])

    assert "mitigate, [/b], [red]word" in output.getvalue()


def test_results_and_documents_with_brackets(output):
    cli.display_results(_make_result("[/b]"))
    cli.display_documents([Document("d1", "[draft].md", "Text.")])
    cli.display_info("Exported [/i] file")

    text = output.getvalue()
    assert '"[/b]"' in text
    assert "[/i] brackets." in text
    assert "[draft].md" in text
    assert "Exported [/i] file" in text


def test_ask_export_returns_choice(monkeypatch):
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: "TEXT")

    assert cli.ask_export() == "text"


def test_export_results_as_text(tmp_path):
    target = main._export_results(_make_result("mitigate"), "text", str(tmp_path))

    assert target.name == "ielts_vocabulary_mitigate.txt"
    content = target.read_text(encoding="utf-8")
    assert content.startswith('IELTS Vocabulary Analysis for "mitigate"\n\n[1] Source: [notes].md\n')


def test_export_results_as_csv(tmp_path):
    target = main._export_results(_make_result("mitigate"), "csv", str(tmp_path))

    assert target.name == "ielts_vocabulary_mitigate.csv"
    assert target.read_text(encoding="utf-8").splitlines()[1].startswith('"[notes].md"')


def test_export_results_unknown_format(tmp_path):
    with pytest.raises(ValueError, match="Unknown export format"):
        main._export_results(_make_result("mitigate"), "pdf", str(tmp_path))
