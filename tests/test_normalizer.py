"""Unit tests for the response normalizer

These tests validate:
- Markdown fence stripping (any language tag, no-op without fences)
- JSON parse failures surface as MalformedResponseError
- Per-kind structural checks (numeric, pie, diagram, markup)
- Irrelevant fields are dropped, never defaulted
- Legacy field aliases from older replies
- Best-effort markup formatting
- Serialize -> parse -> validate round trip
"""

import json

import pytest

from chartgen import normalizer
from chartgen.errors import MalformedResponseError, SchemaViolationError
from chartgen.models.chart import ChartConfig, ChartKind, ChartSeries, Interpolation
from chartgen.normalizer import format_markup, normalize, serialize_config, strip_code_fences, validate_payload


BAR_PAYLOAD = {
    "title": "Quarterly Sales",
    "description": "Sales by quarter",
    "chartKind": "bar",
    "xAxisKey": "quarter",
    "dataPoints": [
        {"quarter": "Q1", "sales": 120, "profit": 30.5},
        {"quarter": "Q2", "sales": 150, "profit": 42.0},
        {"quarter": "Q3", "sales": 90, "profit": 12.25},
    ],
    "series": [
        {"dataKey": "sales", "name": "Sales", "color": "#3b82f6"},
        {"dataKey": "profit", "name": "Profit", "color": "#10b981"},
    ],
}

PIE_PAYLOAD = {
    "chartKind": "pie",
    "title": "T",
    "dataPoints": [{"name": "A", "value": 1}, {"name": "B", "value": 2}],
}


class TestFenceStripping:
    """Test removal of markdown code fences around replies"""

    def test_no_fence_is_noop(self):
        text = '{"title": "T", "chartKind": "pie"}'
        assert strip_code_fences(text) == text

    def test_json_tagged_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_untagged_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_other_language_tag(self):
        assert strip_code_fences('```JSON5\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_whitespace(self):
        assert strip_code_fences('  \n```json\n{"a": 1}\n```\n  ') == '{"a": 1}'

    def test_removes_exactly_one_pair(self):
        text = '```json\n{"code": "```inner```"}\n```'
        assert strip_code_fences(text) == '{"code": "```inner```"}'

    def test_single_line_fence(self):
        assert strip_code_fences('```json{"a": 1}```') == '{"a": 1}'

    def test_fenced_reply_normalizes(self):
        raw = "```json\n" + json.dumps(BAR_PAYLOAD) + "\n```"
        assert normalize(raw).chart_kind is ChartKind.BAR


class TestMalformedResponses:
    """Test JSON parse failures"""

    def test_unquoted_keys(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            normalize("{title: 'T'}")
        assert exc_info.value.snippet == "{title: 'T'}"
        assert exc_info.value.parser_message

    def test_snippet_is_truncated(self):
        text = "not json " * 200
        with pytest.raises(MalformedResponseError) as exc_info:
            normalize(text)
        assert len(exc_info.value.snippet) == 500

    def test_prose_reply(self):
        with pytest.raises(MalformedResponseError):
            normalize("Here is your chart: a bar chart of sales.")

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literals(self, literal):
        text = '{"title": "T", "chartKind": "pie", "dataPoints": [{"name": "A", "value": ' + literal + '}]}'
        with pytest.raises(MalformedResponseError):
            normalize(text)

    def test_non_object_json(self):
        with pytest.raises(SchemaViolationError):
            normalize("[1, 2, 3]")


class TestRequiredFields:
    """Test title and kind requirements"""

    def test_missing_title(self):
        payload = dict(BAR_PAYLOAD)
        del payload["title"]
        with pytest.raises(SchemaViolationError, match="title"):
            validate_payload(payload)

    def test_empty_title(self):
        with pytest.raises(SchemaViolationError, match="title"):
            validate_payload({**BAR_PAYLOAD, "title": "  "})

    def test_missing_kind(self):
        payload = dict(BAR_PAYLOAD)
        del payload["chartKind"]
        with pytest.raises(SchemaViolationError, match="chartKind"):
            validate_payload(payload)

    def test_unknown_kind(self):
        with pytest.raises(SchemaViolationError, match="radar"):
            validate_payload({**BAR_PAYLOAD, "chartKind": "radar"})


class TestNumericKinds:
    """Test line/bar/area/composed/pie validation"""

    def test_bar_chart(self):
        config = validate_payload(BAR_PAYLOAD)
        assert config.chart_kind is ChartKind.BAR
        assert config.x_axis_key == "quarter"
        assert [s.data_key for s in config.series] == ["sales", "profit"]
        assert config.diagram_source is None
        assert config.markup_source is None

    def test_data_point_order_preserved(self):
        config = validate_payload(BAR_PAYLOAD)
        assert [p["quarter"] for p in config.data_points] == ["Q1", "Q2", "Q3"]

    def test_number_types_preserved(self):
        config = validate_payload(BAR_PAYLOAD)
        assert config.data_points[0]["sales"] == 120
        assert isinstance(config.data_points[0]["sales"], int)
        assert isinstance(config.data_points[0]["profit"], float)

    def test_pie_without_x_axis_key(self):
        config = validate_payload(PIE_PAYLOAD)
        assert config.chart_kind is ChartKind.PIE
        assert config.x_axis_key is None
        assert config.series == (ChartSeries(data_key="value"),)

    def test_pie_drops_x_axis_key(self):
        config = validate_payload({**PIE_PAYLOAD, "xAxisKey": "name"})
        assert config.x_axis_key is None

    def test_pie_requires_name_and_value(self):
        payload = {**PIE_PAYLOAD, "dataPoints": [{"name": "A", "value": 1}, {"label": "B", "value": 2}]}
        with pytest.raises(SchemaViolationError, match="name"):
            validate_payload(payload)

    def test_bar_without_x_axis_key(self):
        with pytest.raises(SchemaViolationError):
            validate_payload({**PIE_PAYLOAD, "chartKind": "bar"})

    def test_bar_with_series_but_no_x_axis_key(self):
        payload = {**PIE_PAYLOAD, "chartKind": "bar", "series": [{"dataKey": "value"}]}
        with pytest.raises(SchemaViolationError, match="xAxisKey"):
            validate_payload(payload)

    def test_x_axis_key_missing_from_a_point(self):
        payload = {**BAR_PAYLOAD, "dataPoints": BAR_PAYLOAD["dataPoints"] + [{"sales": 1, "profit": 2}]}
        with pytest.raises(SchemaViolationError, match="quarter"):
            validate_payload(payload)

    def test_empty_data_points(self):
        with pytest.raises(SchemaViolationError, match="dataPoints"):
            validate_payload({**BAR_PAYLOAD, "dataPoints": []})

    def test_empty_series(self):
        with pytest.raises(SchemaViolationError, match="series"):
            validate_payload({**BAR_PAYLOAD, "series": []})

    def test_series_key_missing_from_points(self):
        payload = {**BAR_PAYLOAD, "series": [{"dataKey": "revenue"}]}
        with pytest.raises(SchemaViolationError, match="revenue"):
            validate_payload(payload)

    def test_duplicate_series_keys(self):
        payload = {**BAR_PAYLOAD, "series": [{"dataKey": "sales"}, {"dataKey": "sales", "name": "Again"}]}
        with pytest.raises(SchemaViolationError, match="duplicate"):
            validate_payload(payload)

    def test_non_hex_color(self):
        payload = {**BAR_PAYLOAD, "series": [{"dataKey": "sales", "color": "blue"}]}
        with pytest.raises(SchemaViolationError, match="color"):
            validate_payload(payload)

    def test_null_data_value(self):
        payload = {**BAR_PAYLOAD, "dataPoints": [{"quarter": "Q1", "sales": None, "profit": 1}]}
        with pytest.raises(SchemaViolationError):
            validate_payload(payload)

    def test_interpolation(self):
        payload = {
            "title": "Trend",
            "chartKind": "line",
            "xAxisKey": "month",
            "dataPoints": [{"month": "Jan", "count": 3}],
            "series": [{"dataKey": "count", "interpolation": "step"}],
        }
        assert validate_payload(payload).series[0].interpolation is Interpolation.STEP


class TestDiagramAndMarkup:
    """Test diagram and markup kinds"""

    def test_diagram(self):
        config = validate_payload({"title": "Flow", "chartKind": "diagram", "diagramSource": "graph TD\nA-->B"})
        assert config.chart_kind is ChartKind.DIAGRAM
        assert config.diagram_source == "graph TD\nA-->B"

    def test_diagram_drops_empty_numeric_fields(self):
        payload = {
            "title": "Flow",
            "chartKind": "diagram",
            "diagramSource": "graph LR\nA-->B",
            "xAxisKey": "",
            "dataPoints": [],
            "series": None,
        }
        config = validate_payload(payload)
        assert config.data_points is None
        assert config.series is None
        assert config.x_axis_key is None

    def test_diagram_requires_source(self):
        with pytest.raises(SchemaViolationError, match="diagramSource"):
            validate_payload({"title": "Flow", "chartKind": "diagram", "diagramSource": "   "})

    def test_diagram_grammar_not_checked(self):
        config = validate_payload({"title": "Flow", "chartKind": "diagram", "diagramSource": "not mermaid at all"})
        assert config.diagram_source == "not mermaid at all"

    def test_markup(self):
        config = validate_payload({"title": "Card", "chartKind": "markup", "markupSource": "<div>Hi</div>"})
        assert config.chart_kind is ChartKind.MARKUP
        assert config.markup_source == "<div>Hi</div>"

    def test_markup_requires_source(self):
        with pytest.raises(SchemaViolationError, match="markupSource"):
            validate_payload({"title": "Card", "chartKind": "markup"})


class TestLegacyAliases:
    """Test field names used by older replies"""

    def test_chart_type_and_mermaid_code(self):
        payload = {"title": "Flow", "chartType": "mermaid", "mermaidCode": "graph TD\nA-->B", "data": []}
        config = validate_payload(payload)
        assert config.chart_kind is ChartKind.DIAGRAM
        assert config.diagram_source == "graph TD\nA-->B"

    def test_data_alias_and_series_type(self):
        payload = {
            "title": "Sales",
            "chartType": "Line",
            "xAxisKey": "month",
            "data": [{"month": "Jan", "sales": 1}, {"month": "Feb", "sales": 2}],
            "series": [{"dataKey": "sales", "color": "#ff0000", "type": "monotone"}],
        }
        config = validate_payload(payload)
        assert config.chart_kind is ChartKind.LINE
        assert len(config.data_points) == 2
        assert config.series[0].interpolation is Interpolation.MONOTONE

    def test_html_code(self):
        config = validate_payload({"title": "Card", "chartType": "html", "htmlCode": "<p>x</p>"})
        assert config.chart_kind is ChartKind.MARKUP

    def test_serialization_uses_canonical_names(self):
        payload = {"title": "Flow", "chartType": "mermaid", "mermaidCode": "graph TD\nA-->B"}
        data = json.loads(serialize_config(validate_payload(payload)))
        assert data == {"title": "Flow", "chartKind": "diagram", "diagramSource": "graph TD\nA-->B"}


class TestMarkupFormatting:
    """Test the best-effort markup formatter"""

    def test_pretty_markup(self):
        raw = json.dumps({"title": "Card", "chartKind": "markup", "markupSource": "<div><p>Hi</p></div>"})
        config = normalize(raw, pretty_markup=True)
        assert config.markup_source.startswith("<div>")
        assert "\n" in config.markup_source
        assert "Hi" in config.markup_source

    def test_formatting_off_by_default(self):
        raw = json.dumps({"title": "Card", "chartKind": "markup", "markupSource": "<div><p>Hi</p></div>"})
        assert normalize(raw).markup_source == "<div><p>Hi</p></div>"

    def test_formatter_failure_returns_original(self, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(normalizer, "BeautifulSoup", broken)
        assert format_markup("<div><p>Hi</p></div>") == "<div><p>Hi</p></div>"

    def test_formatter_failure_does_not_fail_normalize(self, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(normalizer, "BeautifulSoup", broken)
        raw = json.dumps({"title": "Card", "chartKind": "markup", "markupSource": "<b>x</b>"})
        assert normalize(raw, pretty_markup=True).markup_source == "<b>x</b>"


class TestRoundTrip:
    """Serialize -> parse -> validate yields an equal config"""

    @pytest.mark.parametrize("config", [
        validate_payload(BAR_PAYLOAD),
        validate_payload(PIE_PAYLOAD),
        ChartConfig(title="Flow", chart_kind=ChartKind.DIAGRAM, diagram_source="graph TD\n  A[开始] --> B"),
        ChartConfig(title="卡片", description="说明", chart_kind=ChartKind.MARKUP, markup_source="<div class=\"c\">x</div>"),
    ])
    def test_round_trip(self, config):
        assert normalize(serialize_config(config)) == config

    def test_key_order_is_stable(self):
        text = serialize_config(validate_payload(BAR_PAYLOAD))
        keys = list(json.loads(text).keys())
        assert keys == ["title", "description", "chartKind", "xAxisKey", "dataPoints", "series"]
