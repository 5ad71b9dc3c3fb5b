from fastapi import FastAPI, HTTPException, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel
from typing import List, Optional
import uvicorn
import os

from contextualizer.application.vocabulary_service import VocabularyService
from contextualizer.domain.interfaces import AnnotationError
from contextualizer.domain.models import VocabularyAnalysis
from contextualizer.infrastructure.document_loader import DocumentLoader, SUPPORTED_EXTENSIONS
from contextualizer.infrastructure.document_store import InMemoryDocumentStore
from contextualizer.infrastructure.exporter import (
    export_filename,
    text_export_filename,
    to_clipboard_text,
    to_csv,
)
from contextualizer.infrastructure.gemini_annotator import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL_NAME,
    GeminiAnnotator,
)
from contextualizer.infrastructure.history_store import JsonSearchHistoryStore

# ── Configuration ────────────────────────────────────────────────────────────
HISTORY_FILE = "./data/search_history.json"
API_KEY = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
DEFAULT_MODEL = os.environ.get("GEMINI_MODEL", DEFAULT_MODEL_NAME)

# ── API Models ───────────────────────────────────────────────────────────────
class SearchRequest(BaseModel):
    keyword: str
    model: Optional[str] = None

class AnalysisSchema(BaseModel):
    original_sentence: str
    translation: str
    meaning_in_context: str
    source_doc_id: str
    source_doc_name: str

class SnippetSchema(BaseModel):
    id: str
    text: str
    source_doc_id: str
    source_doc_name: str

class SearchResponse(BaseModel):
    keyword: str
    model: str
    examples: List[SnippetSchema]
    results: List[AnalysisSchema]

class ExportRequest(BaseModel):
    keyword: str
    results: List[AnalysisSchema]

# ── App Initialization ───────────────────────────────────────────────────────
app = FastAPI(
    title="IELTS Contextualizer API",
    description="Find vocabulary in your own reading materials and explain it in context.",
    version="1.0.0"
)

# ── CORS Middleware ──────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:8080", "http://127.0.0.1:8080"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize infrastructure (global scope for singleton behavior)
document_loader = DocumentLoader()
document_store = InMemoryDocumentStore()
history_store = JsonSearchHistoryStore(HISTORY_FILE)
vocabulary_service: Optional[VocabularyService] = None

if API_KEY:
    # Raises ValueError for an unknown GEMINI_MODEL so the API refuses to start
    annotator = GeminiAnnotator.from_api_key(API_KEY, model_name=DEFAULT_MODEL)
    vocabulary_service = VocabularyService(
        annotator=annotator,
        history_store=history_store,
        default_model=annotator.model_name,
    )
    print(f"[API] Gemini client configured. Default model: {annotator.model_name}")
else:
    print("[API] WARNING: GEMINI_API_KEY is not set. Searches will be rejected.")

# ── Endpoints ────────────────────────────────────────────────────────────────
@app.get("/")
def read_root():
    return {
        "message": "IELTS Contextualizer API is running.",
        "status": "ready" if vocabulary_service is not None else "api_key_required",
        "documents": len(document_store),
    }

@app.get("/status")
def get_status():
    """Returns whether searching is possible and what is loaded."""
    return {
        "api_key_configured": vocabulary_service is not None,
        "documents": len(document_store),
        "default_model": DEFAULT_MODEL,
    }

@app.get("/models")
def get_models():
    return {
        "default": DEFAULT_MODEL,
        "models": [{"id": model_id, "label": label} for model_id, label in AVAILABLE_MODELS.items()],
    }

@app.get("/documents")
def get_documents():
    """Returns the uploaded documents in upload order."""
    return {"documents": document_store.get_document_stats()}

@app.delete("/documents/{doc_id}")
def delete_document(doc_id: str):
    if not document_store.remove(doc_id):
        raise HTTPException(status_code=404, detail="Document not found")
    print(f"[API] Removed document {doc_id}")
    return {"message": f"Successfully deleted document '{doc_id}'"}

@app.post("/upload")
async def upload_files(files: List[UploadFile] = File(...)):
    """Upload .md/.markdown/.txt files into the library."""
    new_documents = []
    skipped = []
    for file in files:
        raw = await file.read()
        document = document_loader.from_upload(file.filename, raw)
        if document is None:
            skipped.append(file.filename)
            continue
        new_documents.append(document)

    document_store.add(new_documents)
    for document in new_documents:
        print(f"[API] Uploaded '{document.name}' ({len(document.content)} chars)")

    return {
        "message": f"Successfully uploaded {len(new_documents)} files.",
        "files": [
            {"id": document.doc_id, "name": document.name, "type": document.doc_type}
            for document in new_documents
        ],
        "skipped": skipped,
        "supported_extensions": sorted(SUPPORTED_EXTENSIONS),
    }

@app.post("/search", response_model=SearchResponse)
def search(request: SearchRequest):
    if vocabulary_service is None:
        raise HTTPException(
            status_code=503,
            detail="Search service is not ready. Set GEMINI_API_KEY and restart the API."
        )

    if request.model is not None and request.model not in AVAILABLE_MODELS:
        raise HTTPException(status_code=400, detail=f"Unknown model: {request.model}")

    try:
        result = vocabulary_service.analyze(
            document_store.list_documents(),
            request.keyword,
            model=request.model,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnnotationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if not result.has_examples:
        raise HTTPException(status_code=404, detail=result.no_examples_message)

    return SearchResponse(
        keyword=result.keyword,
        model=result.model,
        examples=[
            SnippetSchema(
                id=snippet.snippet_id,
                text=snippet.text,
                source_doc_id=snippet.source_doc_id,
                source_doc_name=snippet.source_doc_name,
            )
            for snippet in result.snippets
        ],
        results=[AnalysisSchema(**vars(analysis)) for analysis in result.analyses],
    )

@app.get("/history")
def get_history():
    return {"history": history_store.list_terms()}

@app.delete("/history")
def clear_history():
    history_store.clear()
    return {"message": "Search history cleared."}

@app.post("/export/csv")
def export_csv(request: ExportRequest):
    if not request.results:
        raise HTTPException(status_code=400, detail="Nothing to export.")

    analyses = [VocabularyAnalysis(**item.model_dump()) for item in request.results]
    return Response(
        content=to_csv(analyses),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(request.keyword)}"'},
    )

@app.post("/export/text")
def export_text(request: ExportRequest):
    """Same layout as the copy-all text: numbered blocks per result."""
    if not request.results:
        raise HTTPException(status_code=400, detail="Nothing to export.")

    analyses = [VocabularyAnalysis(**item.model_dump()) for item in request.results]
    return Response(
        content=to_clipboard_text(request.keyword, analyses),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{text_export_filename(request.keyword)}"'},
    )

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
