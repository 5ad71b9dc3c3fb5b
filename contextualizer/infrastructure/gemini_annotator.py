# contextualizer/infrastructure/gemini_annotator.py
# The genai client is injected, never created at import time

from typing import List, Optional, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from contextualizer.domain.interfaces import AnnotationError, AnnotationPort
from contextualizer.domain.models import Annotation, Snippet


DEFAULT_MODEL_NAME = "gemini-2.5-flash"

AVAILABLE_MODELS = {
    "gemini-2.5-flash": "Gemini 2.5 Flash (Fast)",
    "gemini-2.5-flash-lite-latest": "Gemini 2.5 Flash Lite",
    "gemini-3-pro-preview": "Gemini 3 Pro (High IQ)",
}

FAILURE_MESSAGE = "Failed to analyze vocabulary. Please check your API key and try again."


class _AnnotationItem(BaseModel):
    example_index: int = Field(alias="exampleIndex")
    chinese_translation: str = Field(alias="chineseTranslation")
    word_meaning_in_context: str = Field(alias="wordMeaningInContext")


_RESPONSE_ADAPTER = TypeAdapter(List[_AnnotationItem])

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "exampleIndex": types.Schema(
                type=types.Type.INTEGER,
                description="The index of the example provided (1-based)",
            ),
            "chineseTranslation": types.Schema(
                type=types.Type.STRING,
                description="Natural Chinese translation of the text snippet.",
            ),
            "wordMeaningInContext": types.Schema(
                type=types.Type.STRING,
                description="Explanation of the keyword's meaning and usage in this specific context.",
            ),
        },
        required=["exampleIndex", "chineseTranslation", "wordMeaningInContext"],
    ),
)


def build_prompt(keyword: str, snippets: Sequence[Snippet]) -> str:
    examples_text = "\n\n".join(
        f"Example {index}: {snippet.text}"
        for index, snippet in enumerate(snippets, start=1)
    )
    return (
        f'I am an IELTS student. I have found the word "{keyword}" in my reading materials.\n\n'
        f"Here are the text excerpts where I found it:\n"
        f"{examples_text}\n\n"
        f"For each example, please provide:\n"
        f"1. The Chinese translation of the text excerpt "
        f"(focusing on the sentence containing the keyword).\n"
        f'2. The specific meaning of "{keyword}" as it is used in *this specific context* '
        f"(e.g., is it a verb, noun? what shade of meaning?).\n\n"
        f"Return the result as a strict JSON array matching the requested schema."
    )


def parse_response(json_text: Optional[str]) -> List[Annotation]:
    """
    Parse the model's JSON array. Anything that is not an array of complete
    annotation objects fails the whole batch.
    """
    if not json_text:
        raise AnnotationError("No data returned from Gemini")

    try:
        items = _RESPONSE_ADAPTER.validate_json(json_text)
    except ValidationError as error:
        raise AnnotationError(f"Malformed annotation response: {error}") from error

    return [
        Annotation(
            example_index=item.example_index,
            translation=item.chinese_translation,
            meaning_in_context=item.word_meaning_in_context,
        )
        for item in items
    ]


class GeminiAnnotator(AnnotationPort):

    def __init__(self, client: genai.Client, model_name: str = DEFAULT_MODEL_NAME):
        if model_name not in AVAILABLE_MODELS:
            raise ValueError(
                f"Unknown Gemini model: {model_name!r}. "
                f"Choose one of: {', '.join(AVAILABLE_MODELS)}"
            )
        self._client = client
        self._model_name = model_name

    @classmethod
    def from_api_key(cls, api_key: str, model_name: str = DEFAULT_MODEL_NAME) -> "GeminiAnnotator":
        return cls(genai.Client(api_key=api_key), model_name=model_name)

    @property
    def model_name(self) -> str:
        return self._model_name

    def annotate(
        self,
        keyword: str,
        snippets: Sequence[Snippet],
        model: Optional[str] = None,
    ) -> List[Annotation]:
        if not snippets:
            return []

        model = model or self._model_name
        try:
            response = self._client.models.generate_content(
                model=model,
                contents=build_prompt(keyword, snippets),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                ),
            )
            return parse_response(response.text)
        except Exception as error:
            print(f"[GeminiAnnotator] Gemini API error: {error}")
            raise AnnotationError(FAILURE_MESSAGE) from error
