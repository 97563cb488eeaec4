"""OpenAI ChatCompletions client module"""

from chartgen.clients.openai_chat.sync import OpenAIChatClient
from chartgen.clients.openai_chat.async_ import AsyncOpenAIChatClient

__all__ = ["OpenAIChatClient", "AsyncOpenAIChatClient"]
