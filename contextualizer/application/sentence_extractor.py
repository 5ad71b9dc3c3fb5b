# contextualizer/application/sentence_extractor.py

import re
from typing import Dict, Iterable, List

from contextualizer.domain.models import Document, Snippet


# Sentences per side included around a match
CONTEXT_WINDOW = 2

# Keeps the prompt (and the result list) short
MAX_EXAMPLES = 8

# Naive split on . ! ? followed by whitespace or end of text.
# Abbreviations and decimals split wrongly; windows depend on this exact rule.
_SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+(?=\s|\Z)")


def split_sentences(content: str) -> List[str]:
    """Split text into sentences. Non-text content yields no sentences."""
    if not isinstance(content, str):
        return []
    return _SENTENCE_PATTERN.findall(content)


def extract_relevant_sentences(
    documents: Iterable[Document],
    keyword: str,
) -> List[Snippet]:
    """
    Find every sentence containing keyword (case-insensitive substring) and
    return it with up to CONTEXT_WINDOW sentences on each side.

    Results keep document order, then sentence order; snippets with
    identical text are kept once, and at most MAX_EXAMPLES are returned.
    The caller is responsible for rejecting blank keywords.
    """
    lower_keyword = keyword.lower()
    matches: List[Snippet] = []

    for document in documents:
        sentences = split_sentences(document.content)
        if not sentences:
            continue

        for index, sentence in enumerate(sentences):
            if lower_keyword not in sentence.lower():
                continue

            start = max(0, index - CONTEXT_WINDOW)
            end = min(len(sentences), index + CONTEXT_WINDOW + 1)
            context_block = " ".join(s.strip() for s in sentences[start:end])

            matches.append(Snippet(
                text=context_block,
                source_doc_id=document.doc_id,
                source_doc_name=document.name,
            ))

    unique: Dict[str, Snippet] = {}
    for snippet in matches:
        unique.setdefault(snippet.text, snippet)

    return list(unique.values())[:MAX_EXAMPLES]
