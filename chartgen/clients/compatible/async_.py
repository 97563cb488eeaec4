"""Async OpenAI-compatible client - wrapper around AsyncOpenAIChatClient with platform defaults"""

from chartgen.clients.openai_chat.async_ import AsyncOpenAIChatClient
from chartgen.config import DEFAULT_PLATFORM, get_platform


class AsyncOpenAICompatibleClient(AsyncOpenAIChatClient):
    """
    Async client for OpenAI-compatible platforms.

    Wraps AsyncOpenAIChatClient with the platform's default endpoint and model.
    """

    def __init__(self, platform: str = DEFAULT_PLATFORM):
        """
        Initialize async compatible client.

        Args:
            platform: Key into chartgen.config.PLATFORMS (default: zhipu)
        """
        preset = get_platform(platform)
        self.platform = platform
        self.provider = preset.name_en
        self.default_model = preset.default_model
        self.default_base_url = preset.default_base_url
