"""Async OpenAI ChatCompletions client (JSON mode)"""

import openai

from chartgen.clients.base import AsyncBaseClient
from chartgen.clients.openai_chat.utils import (
    DEFAULT_MODEL, TRANSPORT_ERRORS,
    build_chat_params, extract_content, resolve_target, translate_error
)
from chartgen.config import ProviderCredentials
from chartgen.models.request import GenerationRequest
from chartgen.utils.verbose_logger import VerboseLogger


class AsyncOpenAIChatClient(AsyncBaseClient):
    """Async chat-completions adapter (JSON mode)"""

    provider: str = "OpenAI"
    default_model: str = DEFAULT_MODEL
    default_base_url: str = None
    timeout: float = 300.0

    def _create_client(self, api_key: str, base_url: str) -> openai.AsyncOpenAI:
        return openai.AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=self.timeout, max_retries=0)

    async def generate(
        self,
        request: GenerationRequest,
        credentials: ProviderCredentials,
        logger: VerboseLogger = None,
    ) -> str:
        api_key, base_url, model = resolve_target(
            self.provider, credentials, self.default_model, self.default_base_url
        )
        params = build_chat_params(model, credentials.temperature, request)
        if logger:
            logger.log_request(self.provider, model)

        async with self._create_client(api_key, base_url) as client:
            try:
                response = await client.chat.completions.create(**params)
            except TRANSPORT_ERRORS as e:
                raise translate_error(self.provider, e) from e

        content = extract_content(response, self.provider)
        if logger:
            logger.log_content(content)
        return content
