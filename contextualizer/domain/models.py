# contextualizer/domain/models.py

import uuid
from dataclasses import dataclass, field
from typing import List, Literal, Tuple


DocumentType = Literal["markdown", "plain"]


@dataclass(frozen=True)
class Document:
    """
    An uploaded reading material. Never edited in place once created.
    """
    doc_id: str
    name: str
    content: str
    doc_type: DocumentType = "plain"
    upload_date: int = 0


@dataclass(frozen=True)
class Snippet:
    """
    A window of sentences surrounding a keyword match, tagged with its source.
    """
    text: str
    source_doc_id: str
    source_doc_name: str
    snippet_id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    def __repr__(self) -> str:
        preview = self.text[:80].replace("\n", " ")
        return (
            f"Snippet(source='{self.source_doc_name}', "
            f"preview='{preview}...')"
        )


@dataclass(frozen=True)
class Annotation:
    """One item of the model's response, keyed by the 1-based example index."""
    example_index: int
    translation: str
    meaning_in_context: str


@dataclass
class VocabularyAnalysis:
    original_sentence: str
    translation: str
    meaning_in_context: str
    source_doc_id: str
    source_doc_name: str


@dataclass
class AnalysisResult:
    keyword: str
    model: str
    snippets: Tuple[Snippet, ...] = ()
    analyses: List[VocabularyAnalysis] = field(default_factory=list)

    @property
    def has_examples(self) -> bool:
        return bool(self.snippets)

    @property
    def no_examples_message(self) -> str:
        return f'No examples found for "{self.keyword}" in your documents. Try another word.'
