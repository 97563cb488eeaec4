"""Sync OpenAI-compatible client - wrapper around OpenAIChatClient with platform defaults"""

from chartgen.clients.openai_chat.sync import OpenAIChatClient
from chartgen.config import DEFAULT_PLATFORM, get_platform


class OpenAICompatibleClient(OpenAIChatClient):
    """
    Client for platforms speaking the OpenAI ChatCompletions wire format
    (Zhipu, Xiaomi, DeepSeek, Moonshot, or a custom deployment).

    Simply wraps OpenAIChatClient with the platform's default endpoint and
    model, used whenever the credentials leave them unset.
    """

    def __init__(self, platform: str = DEFAULT_PLATFORM):
        """
        Initialize compatible client.

        Args:
            platform: Key into chartgen.config.PLATFORMS (default: zhipu)
        """
        preset = get_platform(platform)
        self.platform = platform
        self.provider = preset.name_en
        self.default_model = preset.default_model
        self.default_base_url = preset.default_base_url
