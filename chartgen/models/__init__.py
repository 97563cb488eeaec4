"""Data models for chartgen"""

from chartgen.models.chart import ChartConfig, ChartKind, ChartSeries, Interpolation
from chartgen.models.history import HistoryEntry
from chartgen.models.request import GenerationMode, GenerationRequest, ImageInput, Language

__all__ = [
    # Chart types
    'ChartConfig',
    'ChartKind',
    'ChartSeries',
    'Interpolation',
    # History
    'HistoryEntry',
    # Request types
    'GenerationMode',
    'GenerationRequest',
    'ImageInput',
    'Language',
]
