"""Canonical chart configuration model.

A ChartConfig is the single validated representation every collaborator
consumes, whether it came from an LLM reply or from hand-edited source text.
Construction enforces every structural invariant, so an invalid instance
cannot exist.
"""

import json
import re
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Dict, Mapping, Optional, Tuple, Union

from pydantic import (
    AliasChoices, AllowInfNan, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr,
    field_serializer, field_validator, model_validator
)


class ChartKind(str, Enum):
    LINE = "line"
    BAR = "bar"
    AREA = "area"
    PIE = "pie"
    COMPOSED = "composed"
    DIAGRAM = "diagram"
    MARKUP = "markup"

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_KINDS

    @property
    def uses_x_axis(self) -> bool:
        return self in AXIS_KINDS

    @classmethod
    def resolve(cls, value: str) -> "ChartKind":
        """Resolve a kind name, accepting legacy aliases and any casing."""
        key = value.strip().lower()
        key = KIND_ALIASES.get(key, key)
        return cls(key)


class Interpolation(str, Enum):
    MONOTONE = "monotone"
    LINEAR = "linear"
    STEP = "step"


AXIS_KINDS = frozenset({ChartKind.LINE, ChartKind.BAR, ChartKind.AREA, ChartKind.COMPOSED})
NUMERIC_KINDS = AXIS_KINDS | {ChartKind.PIE}
KIND_ALIASES = {"mermaid": "diagram", "html": "markup"}

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

DataValue = Union[StrictInt, Annotated[StrictFloat, AllowInfNan(False)], StrictStr]
DataPoint = Dict[str, DataValue]


class ChartSeries(BaseModel):
    """A single plotted series, bound to one key of the data points."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    data_key: StrictStr = Field(alias="dataKey", min_length=1, description="Key of the data points to plot")
    name: Optional[StrictStr] = Field(None, description="Legend label")
    color: Optional[StrictStr] = Field(None, description="Hex color")
    interpolation: Optional[Interpolation] = Field(
        None,
        validation_alias=AliasChoices("interpolation", "type"),
        serialization_alias="interpolation",
        description="Curve interpolation for line/area series",
    )

    @field_validator("color")
    @classmethod
    def check_color(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not HEX_COLOR.match(value):
            raise ValueError(f"color must be a hex color, got {value!r}")
        return value


class ChartConfig(BaseModel):
    """Renderable chart, diagram or markup configuration."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: StrictStr = Field(min_length=1, description="Short descriptive title")
    description: Optional[StrictStr] = Field(None, description="Context for the visualization")
    chart_kind: ChartKind = Field(alias="chartKind", description="Discriminant for the remaining fields")
    x_axis_key: Optional[StrictStr] = Field(None, alias="xAxisKey", description="Category key for axis charts")
    data_points: Optional[Tuple[DataPoint, ...]] = Field(None, alias="dataPoints", description="Ordered data points")
    series: Optional[Tuple[ChartSeries, ...]] = Field(None, description="Plotted series")
    diagram_source: Optional[StrictStr] = Field(None, alias="diagramSource", description="Diagram markup text")
    markup_source: Optional[StrictStr] = Field(None, alias="markupSource", description="Structured markup text")

    @field_validator("chart_kind", mode="before")
    @classmethod
    def resolve_kind(cls, value):
        if isinstance(value, str) and not isinstance(value, ChartKind):
            return ChartKind.resolve(value)
        return value

    @field_validator("data_points")
    @classmethod
    def freeze_points(cls, value):
        if value is None:
            return None
        return tuple(MappingProxyType(dict(point)) for point in value)

    @field_serializer("data_points")
    def dump_points(self, value: Optional[Tuple[Mapping[str, DataValue], ...]]):
        if value is None:
            return None
        return [dict(point) for point in value]

    @model_validator(mode="after")
    def check_kind_fields(self) -> "ChartConfig":
        kind = self.chart_kind
        numeric_set = self.data_points is not None or self.series is not None

        if kind.is_numeric:
            if self.diagram_source is not None or self.markup_source is not None:
                raise ValueError(f"'{kind.value}' chart cannot carry diagram or markup source")
            self._check_numeric()
        elif kind is ChartKind.DIAGRAM:
            if numeric_set or self.x_axis_key is not None or self.markup_source is not None:
                raise ValueError("diagram config must only carry diagramSource")
            if not self.diagram_source or not self.diagram_source.strip():
                raise ValueError("diagram config requires a non-empty diagramSource")
        else:
            if numeric_set or self.x_axis_key is not None or self.diagram_source is not None:
                raise ValueError("markup config must only carry markupSource")
            if not self.markup_source or not self.markup_source.strip():
                raise ValueError("markup config requires a non-empty markupSource")
        return self

    def _check_numeric(self) -> None:
        kind = self.chart_kind
        if not self.data_points:
            raise ValueError(f"'{kind.value}' chart requires non-empty dataPoints")
        if not self.series:
            raise ValueError(f"'{kind.value}' chart requires non-empty series")

        if kind is ChartKind.PIE:
            if self.x_axis_key is not None:
                raise ValueError("pie chart does not use xAxisKey")
            for index, point in enumerate(self.data_points):
                missing = [key for key in ("name", "value") if key not in point]
                if missing:
                    raise ValueError(f"pie dataPoints[{index}] is missing {', '.join(missing)}")
        else:
            if not self.x_axis_key:
                raise ValueError(f"'{kind.value}' chart requires a non-empty xAxisKey")
            for index, point in enumerate(self.data_points):
                if self.x_axis_key not in point:
                    raise ValueError(f"dataPoints[{index}] is missing xAxisKey '{self.x_axis_key}'")

        seen = set()
        for series in self.series:
            if series.data_key in seen:
                raise ValueError(f"duplicate series dataKey '{series.data_key}'")
            seen.add(series.data_key)
            for index, point in enumerate(self.data_points):
                if series.data_key not in point:
                    raise ValueError(f"dataPoints[{index}] is missing series dataKey '{series.data_key}'")

    def to_dict(self) -> Dict:
        """Convert to a JSON-ready dict keyed by the canonical field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize with stable key order for editing in a text editor."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
