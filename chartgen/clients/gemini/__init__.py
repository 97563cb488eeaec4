"""Gemini (Google) client module"""

from chartgen.clients.gemini.sync import GeminiClient
from chartgen.clients.gemini.async_ import AsyncGeminiClient

__all__ = ["GeminiClient", "AsyncGeminiClient"]
