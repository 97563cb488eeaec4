"""System instructions sent to every backend.

The instruction is the contract enforced on the far side of the network call:
it lists the exact field set, the per-kind requirements, and the output
language. Backends without server-side schema enforcement rely on it entirely.
"""

from chartgen.models.request import GenerationMode, GenerationRequest, Language

LANGUAGE_RULES = {
    Language.EN: "YOU MUST USE ENGLISH for all text fields.",
    Language.ZH: "YOU MUST USE CHINESE (Simplified) for all text fields unless explicitly requested otherwise.",
}

STATISTICAL_RULES = """\
[IF STATISTICAL CHART]:
- Set 'chartKind' to one of: "line", "bar", "area", "pie", or "composed".
- Construct a non-empty 'dataPoints' array. Each data point is an object whose values are strings or numbers, with keys like: name, value, sales, profit, count, quarter, month, year, label.
  - For PIE charts: every data point MUST have a 'name' field for labels and a 'value' field for values.
- Construct a non-empty 'series' array. Each series has: dataKey (string, required, unique, present in EVERY data point), name (string), color (hex string such as "#3b82f6"), interpolation (optional: "monotone", "linear", "step").
- Set 'xAxisKey':
  - For PIE charts: omit it (pie charts don't use an x axis).
  - For other charts: set it to the key used for X-axis labels (e.g., "name", "month"). Every data point MUST contain that key.
- Omit 'diagramSource' and 'markupSource'."""

DIAGRAM_RULES = """\
[IF DIAGRAM/FLOWCHART]:
- Set 'chartKind' to "diagram".
- Generate valid Mermaid.js syntax in 'diagramSource'. Do NOT wrap it in markdown code blocks.
- Use 'graph TD' (top-down) or 'graph LR' (left-right) as appropriate.
- Use subgraphs for clusters if needed.
- Use professional node labels (e.g., [SFT Model] instead of A).
- Keep styling simple, the app handles colors.
- Omit 'xAxisKey', 'dataPoints', 'series' and 'markupSource'."""

MARKUP_RULES = """\
[IF HTML COMPONENT]:
- Set 'chartKind' to "markup".
- Put a self-contained HTML fragment with inline CSS in 'markupSource' (no <html> or <body> wrapper, no scripts).
- Omit 'xAxisKey', 'dataPoints', 'series' and 'diagramSource'."""

MODE_GUIDANCE = {
    GenerationMode.AUTO: (
        "1. Determine if the user wants a Statistical Chart (numbers, trends), a Diagram "
        "(processes, architectures, relationships) or a rich HTML Component (cards, tables, infographics).",
        (STATISTICAL_RULES, DIAGRAM_RULES, MARKUP_RULES),
        '"line" | "bar" | "area" | "pie" | "composed" | "diagram" | "markup"',
    ),
    GenerationMode.STANDARD: (
        "1. Determine if the user wants a Statistical Chart (numbers, trends) or a Diagram "
        "(processes, architectures, relationships). Never produce HTML.",
        (STATISTICAL_RULES, DIAGRAM_RULES),
        '"line" | "bar" | "area" | "pie" | "composed" | "diagram"',
    ),
    GenerationMode.MARKUP: (
        "1. Always answer with an HTML Component, whatever the request looks like.",
        (MARKUP_RULES,),
        '"markup"',
    ),
}

RESPONSE_FORMAT = """\
Response Format:
{{
  "title": "A short, descriptive title",
  "description": "A brief explanation of the data context (optional)",
  "chartKind": {kinds},
  "xAxisKey": "string (for line/bar/area/composed only)",
  "dataPoints": [array of data points (for statistical charts only)],
  "series": [array of series config (for statistical charts only)],
  "diagramSource": "string (for diagram only)",
  "markupSource": "string (for markup only)"
}}"""


def build_system_instruction(language: Language, mode: GenerationMode) -> str:
    """Build the system instruction for a language and generation mode."""
    intro, rules, kinds = MODE_GUIDANCE[mode]
    sections = [
        "You are a chart configuration generator. Generate a valid JSON configuration based on user requests.",
        "Guidelines:\n" + intro,
        *rules,
        RESPONSE_FORMAT.format(kinds=kinds),
        f"Language Rule: {LANGUAGE_RULES[language]}",
        "IMPORTANT: Return ONLY valid JSON. Do not include any markdown code blocks, explanations, or other text.",
    ]
    return "\n\n".join(sections)


def build_user_message(request: GenerationRequest) -> str:
    return f'Generate a chart configuration for: "{request.effective_prompt}"'
