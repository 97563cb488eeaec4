"""Shared utilities"""

from chartgen.utils.verbose_logger import VerboseLogger, color_text

__all__ = ["VerboseLogger", "color_text"]
