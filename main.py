# main.py

import os
import sys
from pathlib import Path

from contextualizer.application.vocabulary_service import VocabularyService
from contextualizer.domain.interfaces import AnnotationError
from contextualizer.domain.models import AnalysisResult
from contextualizer.infrastructure.document_loader import DocumentLoader
from contextualizer.infrastructure.document_store import InMemoryDocumentStore
from contextualizer.infrastructure.exporter import (
    export_filename,
    text_export_filename,
    to_clipboard_text,
    to_csv,
)
from contextualizer.infrastructure.gemini_annotator import DEFAULT_MODEL_NAME, GeminiAnnotator
from contextualizer.infrastructure.history_store import JsonSearchHistoryStore
from contextualizer.interface.cli import (
    display_welcome_banner,
    display_documents,
    prompt_for_keyword,
    display_results,
    display_history,
    display_info,
    display_error,
    ask_export,
)


DATA_DIRECTORY = "data"
HISTORY_FILE = "./data/search_history.json"
EXPORT_DIRECTORY = "exports"


def main() -> None:
    display_welcome_banner()

    # ── 1. Configuration ─────────────────────────────────────────────────────
    api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
    if not api_key:
        display_error("GEMINI_API_KEY is not set.")
        sys.exit(1)
    model_name = os.environ.get("GEMINI_MODEL", DEFAULT_MODEL_NAME)

    # ── 2. Initialize infrastructure ─────────────────────────────────────────
    document_store = InMemoryDocumentStore()
    try:
        document_store.add(DocumentLoader().load_directory(DATA_DIRECTORY))
    except FileNotFoundError as error:
        display_error(str(error))
        sys.exit(1)

    if not len(document_store):
        display_error(f"No .md or .txt documents found in '{DATA_DIRECTORY}/'.")
        sys.exit(1)

    try:
        annotator = GeminiAnnotator.from_api_key(api_key, model_name=model_name)
    except ValueError as error:
        display_error(str(error))
        sys.exit(1)

    history_store = JsonSearchHistoryStore(HISTORY_FILE)
    service = VocabularyService(
        annotator=annotator,
        history_store=history_store,
        default_model=annotator.model_name,
    )
    print(f"[Main] Using model {annotator.model_name}")

    display_documents(document_store.list_documents())

    # ── 3. Interactive search loop ────────────────────────────────────────────
    while True:
        command = prompt_for_keyword().strip()

        if command == ":quit":
            break
        if command == ":history":
            display_history(history_store.list_terms())
            continue
        if command == ":clear":
            history_store.clear()
            display_info("Search history cleared.")
            continue

        try:
            result = service.analyze(document_store.list_documents(), command)
        except (ValueError, AnnotationError) as error:
            display_error(str(error))
            continue

        if not result.has_examples:
            display_error(result.no_examples_message)
            continue

        display_results(result)
        if not result.analyses:
            continue
        export_format = ask_export()
        if export_format != "n":
            _export_results(result, export_format)


def _export_results(
    result: AnalysisResult,
    export_format: str,
    export_directory: str = EXPORT_DIRECTORY,
) -> Path:
    """Write the analyses of one search as CSV or as the copy-all text layout."""
    export_dir = Path(export_directory)
    export_dir.mkdir(parents=True, exist_ok=True)

    if export_format == "csv":
        target = export_dir / export_filename(result.keyword)
        content = to_csv(result.analyses)
    elif export_format == "text":
        target = export_dir / text_export_filename(result.keyword)
        content = to_clipboard_text(result.keyword, result.analyses)
    else:
        raise ValueError(f"Unknown export format: {export_format}")

    target.write_text(content, encoding="utf-8")
    print(f"[Main] Exported {len(result.analyses)} result(s) to {target}")
    return target


if __name__ == "__main__":
    main()
