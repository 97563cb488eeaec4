"""Provider adapters.

Three interchangeable backends share one contract: `generate(request,
credentials)` returns raw reply text, which `chartgen.normalizer.normalize`
turns into a ChartConfig regardless of which adapter produced it.
"""

from enum import Enum
from typing import Optional, Union

from chartgen.clients.base import AsyncBaseClient, BaseClient
from chartgen.clients.compatible import AsyncOpenAICompatibleClient, OpenAICompatibleClient
from chartgen.clients.gemini import AsyncGeminiClient, GeminiClient
from chartgen.clients.openai_chat import AsyncOpenAIChatClient, OpenAIChatClient
from chartgen.config import DEFAULT_PLATFORM


class Provider(str, Enum):
    GEMINI = "gemini"
    OPENAI_CHAT = "openai_chat"
    OPENAI_COMPATIBLE = "openai_compatible"


def create_client(
    provider: Union[Provider, str],
    platform: Optional[str] = None,
    use_async: bool = True,
) -> Union[BaseClient, AsyncBaseClient]:
    """Build the adapter for a provider.

    Args:
        provider: Which backend protocol to speak
        platform: Platform preset for OPENAI_COMPATIBLE (ignored otherwise)
        use_async: Return the async variant
    """
    provider = Provider(provider)
    if provider is Provider.GEMINI:
        return AsyncGeminiClient() if use_async else GeminiClient()
    if provider is Provider.OPENAI_CHAT:
        return AsyncOpenAIChatClient() if use_async else OpenAIChatClient()
    platform = platform or DEFAULT_PLATFORM
    return AsyncOpenAICompatibleClient(platform) if use_async else OpenAICompatibleClient(platform)


__all__ = [
    "Provider",
    "create_client",
    "BaseClient",
    "AsyncBaseClient",
    "GeminiClient",
    "AsyncGeminiClient",
    "OpenAIChatClient",
    "AsyncOpenAIChatClient",
    "OpenAICompatibleClient",
    "AsyncOpenAICompatibleClient",
]
