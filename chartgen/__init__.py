"""
chartgen - Natural-language charts, diagrams and markup from interchangeable LLM backends

Sends a visualization request to one of several providers and reduces the
model's reply (or hand-edited source text) to one strict, renderable config.
"""

from chartgen.__version__ import __version__
from chartgen.clients import Provider, create_client
from chartgen.config import GenerationOptions, PLATFORMS, ProviderCredentials
from chartgen.detector import detect
from chartgen.errors import (
    ChartGenError,
    ConfigurationError,
    DetectionFailure,
    EmptyResponseError,
    GenerationInProgress,
    MalformedResponseError,
    ProviderError,
    SchemaViolationError,
)
from chartgen.events import ConfigApplied, DetectionFailed, GenerationDiscarded, GenerationFailed, SessionEvent
from chartgen.history import HistoryStore
from chartgen.models import (
    ChartConfig, ChartKind, ChartSeries, Interpolation,
    HistoryEntry,
    GenerationMode, GenerationRequest, ImageInput, Language,
)
from chartgen.normalizer import format_markup, normalize, serialize_config, strip_code_fences, validate_payload
from chartgen.scheduling import Debouncer
from chartgen.session import ChartSession

__all__ = [
    "__version__",
    # Models
    "ChartConfig",
    "ChartKind",
    "ChartSeries",
    "Interpolation",
    "HistoryEntry",
    "GenerationMode",
    "GenerationRequest",
    "ImageInput",
    "Language",
    # Configuration
    "ProviderCredentials",
    "GenerationOptions",
    "PLATFORMS",
    # Providers
    "Provider",
    "create_client",
    # Normalization & detection
    "normalize",
    "validate_payload",
    "strip_code_fences",
    "format_markup",
    "serialize_config",
    "detect",
    # Session
    "ChartSession",
    "HistoryStore",
    "Debouncer",
    # Events
    "SessionEvent",
    "ConfigApplied",
    "GenerationDiscarded",
    "GenerationFailed",
    "DetectionFailed",
    # Errors
    "ChartGenError",
    "ConfigurationError",
    "ProviderError",
    "EmptyResponseError",
    "MalformedResponseError",
    "SchemaViolationError",
    "DetectionFailure",
    "GenerationInProgress",
]
