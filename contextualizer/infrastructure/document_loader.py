# contextualizer/infrastructure/document_loader.py

import time
import uuid
from pathlib import Path
from typing import List, Optional

from contextualizer.domain.models import Document, DocumentType


MARKDOWN_EXTENSIONS = {".md", ".markdown"}
SUPPORTED_EXTENSIONS = MARKDOWN_EXTENSIONS | {".txt"}


def is_supported(filename: str) -> bool:
    return Path(filename).suffix.lower() in SUPPORTED_EXTENSIONS


def detect_document_type(filename: str) -> DocumentType:
    """Type is informational only; extraction treats every document the same."""
    if Path(filename).suffix.lower() in MARKDOWN_EXTENSIONS:
        return "markdown"
    return "plain"


class DocumentLoader:
    """
    Loads reading materials (Markdown and plain text) as whole Documents.

    Content is kept verbatim: no cleaning or chunking, since sentence
    windows are cut from the original text.
    """

    def load_directory(self, directory_path: str) -> List[Document]:
        data_dir = Path(directory_path)
        if not data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {directory_path}")

        documents: List[Document] = []

        for file_path in sorted(data_dir.rglob("*")):
            if not file_path.is_file():
                continue
            document = self.load_file(file_path)
            if document is not None:
                documents.append(document)
                print(f"[DocumentLoader] Loaded {file_path.name} ({len(document.content)} chars)")

        print(f"[DocumentLoader] Total documents loaded: {len(documents)}")
        return documents

    def load_file(self, file_path: Path) -> Optional[Document]:
        """
        Load a single .md/.markdown/.txt file.
        Returns None if the file type is unsupported.
        """
        if not is_supported(file_path.name):
            return None
        text = file_path.read_text(encoding="utf-8", errors="ignore")
        return self._build_document(file_path.name, text)

    def from_upload(self, filename: str, raw: bytes) -> Optional[Document]:
        """Build a Document from uploaded bytes. Returns None for unsupported files."""
        if not is_supported(filename):
            return None
        text = raw.decode("utf-8", errors="ignore")
        return self._build_document(filename, text)

    @staticmethod
    def _build_document(name: str, text: str) -> Document:
        return Document(
            doc_id=str(uuid.uuid4()),
            name=name,
            content=text,
            doc_type=detect_document_type(name),
            upload_date=int(time.time() * 1000),
        )
