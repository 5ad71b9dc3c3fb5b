# contextualizer/infrastructure/exporter.py

import csv
import io
from typing import List

from contextualizer.domain.models import VocabularyAnalysis


CSV_HEADERS = ["Source Document Name", "Original Sentence", "Translation", "Contextual Meaning"]
CLIPBOARD_SEPARATOR = "\n----------------------------------------\n\n"


def to_csv(results: List[VocabularyAnalysis]) -> str:
    """Every field is quoted; embedded quotes are doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(CSV_HEADERS) + "\n")
    for result in results:
        writer.writerow([
            result.source_doc_name or "",
            result.original_sentence or "",
            result.translation or "",
            result.meaning_in_context or "",
        ])
    return buffer.getvalue().rstrip("\n")


def to_clipboard_text(keyword: str, results: List[VocabularyAnalysis]) -> str:
    header = f'IELTS Vocabulary Analysis for "{keyword}"\n\n'
    blocks = [
        f"[{rank}] Source: {result.source_doc_name}\n"
        f"Context: {result.original_sentence}\n"
        f"Translation: {result.translation}\n"
        f"Meaning: {result.meaning_in_context}\n"
        for rank, result in enumerate(results, start=1)
    ]
    return header + CLIPBOARD_SEPARATOR.join(blocks)


def export_filename(keyword: str) -> str:
    return f"ielts_vocabulary_{keyword}.csv"


def text_export_filename(keyword: str) -> str:
    return f"ielts_vocabulary_{keyword}.txt"
