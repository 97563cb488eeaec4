"""Gemini client utilities"""

from typing import List, Optional

import httpx
from google.genai import errors as genai_errors
from google.genai import types

from chartgen.errors import EmptyResponseError, ProviderError
from chartgen.models.request import GenerationMode, GenerationRequest
from chartgen.prompts import build_user_message

DEFAULT_MODEL = "gemini-2.5-flash"

# Errors translated into ProviderError at the adapter boundary
TRANSPORT_ERRORS = (genai_errors.APIError, httpx.HTTPError)

MODE_KINDS = {
    GenerationMode.AUTO: ["line", "bar", "area", "pie", "composed", "diagram", "markup"],
    GenerationMode.STANDARD: ["line", "bar", "area", "pie", "composed", "diagram"],
    GenerationMode.MARKUP: ["markup"],
}

DATA_POINT_TEXT_KEYS = ("name", "quarter", "month", "year", "label")
DATA_POINT_NUMBER_KEYS = ("value", "sales", "profit", "count")


def build_response_schema(mode: GenerationMode = GenerationMode.AUTO) -> types.Schema:
    """Response schema enforced server-side. Mirrors the per-kind rules of the system instruction."""
    data_point_properties = {key: types.Schema(type=types.Type.STRING) for key in DATA_POINT_TEXT_KEYS}
    data_point_properties.update({key: types.Schema(type=types.Type.NUMBER) for key in DATA_POINT_NUMBER_KEYS})

    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING, description="A short, descriptive title for the chart"),
            "description": types.Schema(type=types.Type.STRING, description="A brief explanation of the data context"),
            "chartKind": types.Schema(
                type=types.Type.STRING,
                enum=MODE_KINDS[mode],
                description=(
                    "The best kind of visualization. Use 'diagram' for flowcharts, sequence diagrams, "
                    "architectures or process maps, 'markup' for rich HTML components, and the others "
                    "for statistical data."
                ),
            ),
            "diagramSource": types.Schema(
                type=types.Type.STRING,
                nullable=True,
                description=(
                    "The Mermaid.js code string. ONLY required if chartKind is 'diagram'. Do NOT use "
                    "markdown code blocks, just the raw string. Use 'graph TD' or 'graph LR' for flowcharts."
                ),
            ),
            "markupSource": types.Schema(
                type=types.Type.STRING,
                nullable=True,
                description="Self-contained HTML fragment with inline CSS. ONLY required if chartKind is 'markup'.",
            ),
            "xAxisKey": types.Schema(
                type=types.Type.STRING,
                nullable=True,
                description="The key for X-axis labels (required for line/bar/area/composed, omitted otherwise)",
            ),
            "dataPoints": types.Schema(
                type=types.Type.ARRAY,
                nullable=True,
                description="Data points (required for statistical charts; pie entries need name and value)",
                items=types.Schema(type=types.Type.OBJECT, properties=data_point_properties),
            ),
            "series": types.Schema(
                type=types.Type.ARRAY,
                nullable=True,
                description="Series config (required for statistical charts)",
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "dataKey": types.Schema(type=types.Type.STRING),
                        "name": types.Schema(type=types.Type.STRING),
                        "color": types.Schema(type=types.Type.STRING, description="Hex color such as #3b82f6"),
                        "interpolation": types.Schema(type=types.Type.STRING, enum=["monotone", "linear", "step"]),
                    },
                    required=["dataKey", "color"],
                ),
            ),
        },
        required=["title", "chartKind"],
    )


def build_gemini_config(
    system_instruction: str,
    temperature: float,
    mode: GenerationMode = GenerationMode.AUTO,
) -> types.GenerateContentConfig:
    """Build GenerateContentConfig for schema-constrained JSON generation"""
    return types.GenerateContentConfig(
        system_instruction=system_instruction,
        response_mime_type="application/json",
        response_schema=build_response_schema(mode),
        temperature=temperature,
    )


def build_http_options(endpoint: Optional[str]) -> Optional[types.HttpOptions]:
    """Custom base URL, when the caller points at a proxy or gateway"""
    if not endpoint or not endpoint.strip():
        return None
    return types.HttpOptions(base_url=endpoint.strip())


def request_to_contents(request: GenerationRequest) -> List[types.Content]:
    """Convert a request to Gemini Content: optional image part first, then the text"""
    parts = []
    if request.image is not None:
        parts.append(types.Part.from_bytes(data=request.image.data, mime_type=request.image.mime_type))
    parts.append(types.Part.from_text(text=build_user_message(request)))
    return [types.Content(role="user", parts=parts)]


def translate_error(provider: str, error: Exception) -> ProviderError:
    if isinstance(error, genai_errors.APIError):
        return ProviderError(provider, error.code, error.message or str(error))
    return ProviderError(provider, None, str(error))


def extract_text(response, provider: str) -> str:
    """Return the reply text verbatim, or raise if there is none"""
    text = response.text if response is not None else None
    if not text or not text.strip():
        raise EmptyResponseError(provider)
    return text
