"""Session event types delivered to the view layer"""

from dataclasses import dataclass
from typing import Literal, Optional, Union

from chartgen.errors import ChartGenError
from chartgen.models.chart import ChartConfig


@dataclass
class ConfigApplied:
    """A new config replaced the current one"""
    config: ChartConfig
    source: Literal["generation", "edit", "history"]
    sequence: Optional[int] = None  # Generation sequence number (generation source only)


@dataclass
class GenerationDiscarded:
    """A generation finished after a newer one had started; its result was dropped"""
    sequence: int
    latest: int


@dataclass
class GenerationFailed:
    """A generation raised; the current config is unchanged"""
    sequence: int
    error: ChartGenError


@dataclass
class DetectionFailed:
    """Edited text could not be interpreted; the current config is unchanged"""
    text: str
    error: ChartGenError


SessionEvent = Union[
    ConfigApplied,
    GenerationDiscarded,
    GenerationFailed,
    DetectionFailed,
]
