"""Content-type detection for hand-edited source text.

Classifies free text into a ChartConfig without a network round trip. The
first matching rule wins: a JSON config, diagram markup, then HTML-like
markup. Running `detect` on the serialized form of its own output reproduces
the same config.
"""

import re

from jiter import from_json

from chartgen.errors import DetectionFailure
from chartgen.models.chart import ChartConfig, ChartKind
from chartgen.normalizer import find_kind_field, validate_payload

DIAGRAM_TITLE = "Custom Diagram"
MARKUP_TITLE = "Custom Component"

DIAGRAM_KEYWORDS = frozenset({
    "graph",
    "flowchart",
    "sequencediagram",
    "classdiagram",
    "statediagram",
    "statediagram-v2",
    "erdiagram",
    "journey",
    "gantt",
    "pie",
    "gitgraph",
    "mindmap",
    "timeline",
    "quadrantchart",
    "requirementdiagram",
    "c4context",
    "sankey-beta",
    "xychart-beta",
    "block-beta",
})

ATTRIBUTE = re.compile(r"""\b[\w:-]+\s*=\s*["'][^"']*["']""")


def leading_token(text: str) -> str:
    """First word of the text, lowercased, skipping `%%` comment and directive lines."""
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("%%"):
            continue
        return stripped.split()[0].rstrip(":;").lower()
    return ""


def looks_like_diagram(text: str) -> bool:
    return leading_token(text) in DIAGRAM_KEYWORDS


def looks_like_markup(text: str) -> bool:
    if text.startswith("<"):
        return True
    return ">" in text and ("class=" in text or ATTRIBUTE.search(text) is not None)


def detect(text: str) -> ChartConfig:
    """Classify free text as a chart config, diagram or markup.

    Raises:
        SchemaViolationError: Text is a JSON config whose declared kind requirements are unmet
        DetectionFailure: Text matched no known content type
    """
    trimmed = text.strip()
    if not trimmed:
        raise DetectionFailure("Nothing to interpret: the source is empty")

    try:
        parsed = from_json(trimmed.encode(), allow_inf_nan=False)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict) and find_kind_field(parsed) is not None:
        return validate_payload(parsed)

    if looks_like_diagram(trimmed):
        return ChartConfig(title=DIAGRAM_TITLE, chart_kind=ChartKind.DIAGRAM, diagram_source=trimmed)

    if looks_like_markup(trimmed):
        return ChartConfig(title=MARKUP_TITLE, chart_kind=ChartKind.MARKUP, markup_source=trimmed)

    raise DetectionFailure("Could not interpret the source as a chart config, diagram or markup")
