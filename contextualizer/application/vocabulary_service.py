# contextualizer/application/vocabulary_service.py

from typing import List, Optional, Sequence

from contextualizer.application.sentence_extractor import extract_relevant_sentences
from contextualizer.domain.interfaces import AnnotationPort, SearchHistoryPort
from contextualizer.domain.models import (
    AnalysisResult,
    Annotation,
    Document,
    Snippet,
    VocabularyAnalysis,
)


DEFAULT_MODEL = "gemini-2.5-flash"


def merge_annotations(
    snippets: Sequence[Snippet],
    annotations: Sequence[Annotation],
) -> List[VocabularyAnalysis]:
    """
    Re-link model annotations to the snippets they describe by 1-based index.

    Indices the model left out are simply missing from the result.
    Indices that point outside the snippet list are dropped.
    """
    merged: List[VocabularyAnalysis] = []

    for annotation in annotations:
        position = annotation.example_index - 1
        if not 0 <= position < len(snippets):
            print(
                f"[VocabularyService] ⚠ Ignoring annotation for unknown "
                f"example index {annotation.example_index}"
            )
            continue

        original = snippets[position]
        merged.append(VocabularyAnalysis(
            original_sentence=original.text,
            translation=annotation.translation,
            meaning_in_context=annotation.meaning_in_context,
            source_doc_id=original.source_doc_id,
            source_doc_name=original.source_doc_name,
        ))

    return merged


class VocabularyService:
    """
    Core use case: find a word in the learner's documents and explain each
    occurrence in context.

    Extraction is local and pure; only the annotation step talks to the
    remote model, through the injected AnnotationPort.
    """

    def __init__(
        self,
        annotator: AnnotationPort,
        history_store: Optional[SearchHistoryPort] = None,
        default_model: str = DEFAULT_MODEL,
    ):
        self._annotator = annotator
        self._history_store = history_store
        self._default_model = default_model

    @property
    def default_model(self) -> str:
        return self._default_model

    def analyze(
        self,
        documents: Sequence[Document],
        keyword: str,
        model: Optional[str] = None,
    ) -> AnalysisResult:
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValueError("Keyword cannot be empty.")

        if not documents:
            raise ValueError("No documents uploaded. Add a document before searching.")

        if self._history_store is not None:
            self._history_store.record(keyword)

        model = model or self._default_model
        snippets = tuple(extract_relevant_sentences(documents, keyword))
        result = AnalysisResult(keyword=keyword, model=model, snippets=snippets)

        if not snippets:
            print(f"[VocabularyService] No examples found for '{keyword}'.")
            return result

        print(
            f"[VocabularyService] Found {len(snippets)} example(s) for '{keyword}' "
            f"— requesting annotations from {model}..."
        )
        annotations = self._annotator.annotate(keyword, snippets, model)
        result.analyses = merge_annotations(snippets, annotations)
        print(f"[VocabularyService] Merged {len(result.analyses)} annotation(s).")
        return result
