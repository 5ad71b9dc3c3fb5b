# contextualizer/infrastructure/document_store.py

from typing import Dict, Iterable, List, Optional

from contextualizer.domain.models import Document


class InMemoryDocumentStore:
    """
    The learner's document collection for this session, in upload order.
    Documents are added and removed whole; content is never edited.
    """

    def __init__(self):
        self._documents: Dict[str, Document] = {}

    def add(self, documents: Iterable[Document]) -> List[Document]:
        added = []
        for document in documents:
            if document.doc_id in self._documents:
                raise ValueError(f"Duplicate document id: {document.doc_id}")
            self._documents[document.doc_id] = document
            added.append(document)
        return added

    def remove(self, doc_id: str) -> bool:
        return self._documents.pop(doc_id, None) is not None

    def get(self, doc_id: str) -> Optional[Document]:
        return self._documents.get(doc_id)

    def list_documents(self) -> List[Document]:
        """Snapshot of the collection; safe to hand to an extraction."""
        return list(self._documents.values())

    def get_document_stats(self) -> List[dict]:
        return [
            {
                "id": doc.doc_id,
                "name": doc.name,
                "type": doc.doc_type,
                "upload_date": doc.upload_date,
                "characters": len(doc.content),
            }
            for doc in self._documents.values()
        ]

    def __len__(self) -> int:
        return len(self._documents)
