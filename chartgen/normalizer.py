"""Response normalization: raw provider text -> ChartConfig.

Every adapter hands its reply text to `normalize`, which is protocol-agnostic:
strip a markdown fence, parse JSON, check the per-kind requirements and build
the canonical config. Structural violations are reported, never repaired. The
markup formatter is the single best-effort step and never raises.
"""

import logging
import re
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup
from jiter import from_json
from pydantic import ValidationError

from chartgen.errors import MalformedResponseError, SchemaViolationError
from chartgen.models.chart import ChartConfig, ChartKind

OPENING_FENCE = re.compile(r"^```[\w+.-]*[ \t]*\n?")
CLOSING_FENCE = re.compile(r"\n?```\s*$")

KIND_FIELDS = ("chartKind", "chartType")

# canonical key -> accepted input keys, canonical first
FIELD_ALIASES = {
    "description": ("description",),
    "xAxisKey": ("xAxisKey",),
    "dataPoints": ("dataPoints", "data"),
    "series": ("series",),
    "diagramSource": ("diagramSource", "mermaidCode"),
    "markupSource": ("markupSource", "htmlCode"),
}


def strip_code_fences(text: str) -> str:
    """Trim and remove one leading and one trailing markdown fence, whatever the language tag."""
    cleaned = text.strip()
    if not cleaned.startswith("```"):
        return cleaned
    cleaned = OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json(text: str) -> Any:
    try:
        return from_json(text.encode(), allow_inf_nan=False)
    except ValueError as e:
        raise MalformedResponseError(text, str(e)) from e


def format_markup(text: str) -> str:
    """Pretty-print markup. Returns the input unchanged if formatting fails."""
    try:
        soup = BeautifulSoup(text, "html.parser")
        formatted = soup.prettify().strip()
    except Exception as e:
        logging.warning(f"Markup formatting failed, keeping original text: {e}")
        return text
    return formatted or text


def find_kind_field(payload: Dict[str, Any]) -> Optional[str]:
    """Return the declared kind value, if the payload carries one."""
    for key in KIND_FIELDS:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def validate_payload(payload: Any, pretty_markup: bool = False) -> ChartConfig:
    """Check a parsed payload against its declared kind and build the canonical config.

    Only the fields relevant to the resolved kind are carried over; anything else
    (e.g. the empty `data` arrays models emit next to a diagram) is left unset.

    Raises:
        SchemaViolationError: Missing title or kind, unknown kind, or any per-kind requirement unmet
    """
    if not isinstance(payload, dict):
        raise SchemaViolationError(f"Expected a JSON object, got {type(payload).__name__}")

    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        raise SchemaViolationError("Configuration is missing required field 'title'")

    declared = find_kind_field(payload)
    if not isinstance(declared, str) or not declared.strip():
        raise SchemaViolationError("Configuration is missing required field 'chartKind'")
    try:
        kind = ChartKind.resolve(declared)
    except ValueError:
        raise SchemaViolationError(f"Unknown chartKind '{declared}'") from None

    fields = {key: _pick(payload, key) for key in FIELD_ALIASES}
    canonical: Dict[str, Any] = {"title": title, "chartKind": kind}
    if fields["description"] is not None:
        canonical["description"] = fields["description"]

    if kind.is_numeric:
        _require_non_empty(fields, "dataPoints", kind)
        if kind is ChartKind.PIE:
            canonical["series"] = fields["series"] or [{"dataKey": "value"}]
        else:
            _require_non_empty(fields, "series", kind)
            x_axis_key = fields["xAxisKey"]
            if not isinstance(x_axis_key, str) or not x_axis_key:
                raise SchemaViolationError(f"'{kind.value}' chart requires a non-empty 'xAxisKey'")
            canonical["xAxisKey"] = x_axis_key
            canonical["series"] = fields["series"]
        canonical["dataPoints"] = fields["dataPoints"]

    elif kind is ChartKind.DIAGRAM:
        _require_non_empty(fields, "diagramSource", kind)
        canonical["diagramSource"] = fields["diagramSource"]

    else:
        _require_non_empty(fields, "markupSource", kind)
        source = fields["markupSource"]
        if pretty_markup and isinstance(source, str):
            source = format_markup(source)
        canonical["markupSource"] = source

    try:
        return ChartConfig.model_validate(canonical)
    except ValidationError as e:
        raise SchemaViolationError(_describe(e)) from e


def normalize(raw: str, pretty_markup: bool = False) -> ChartConfig:
    """Turn raw reply text from any provider into a validated ChartConfig.

    Raises:
        MalformedResponseError: Text is not JSON
        SchemaViolationError: JSON does not describe a valid config
    """
    text = strip_code_fences(raw)
    payload = parse_json(text)
    return validate_payload(payload, pretty_markup=pretty_markup)


def serialize_config(config: ChartConfig) -> str:
    return config.to_json()


def _pick(payload: Dict[str, Any], key: str) -> Any:
    for alias in FIELD_ALIASES[key]:
        value = payload.get(alias)
        if value is not None:
            return value
    return None


def _require_non_empty(fields: Dict[str, Any], key: str, kind: ChartKind) -> None:
    value = fields[key]
    if isinstance(value, str):
        value = value.strip()
    if value is None or (isinstance(value, (str, list)) and not value):
        raise SchemaViolationError(f"'{kind.value}' configuration requires non-empty '{key}'")


def _describe(error: ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
