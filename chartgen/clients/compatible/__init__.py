"""OpenAI-compatible platform client module"""

from chartgen.clients.compatible.sync import OpenAICompatibleClient
from chartgen.clients.compatible.async_ import AsyncOpenAICompatibleClient

__all__ = ["OpenAICompatibleClient", "AsyncOpenAICompatibleClient"]
