"""Sync Gemini client using native Google GenAI SDK with a response schema"""

from typing import Optional

from google import genai

from chartgen.clients.base import BaseClient
from chartgen.clients.gemini.utils import (
    DEFAULT_MODEL, TRANSPORT_ERRORS,
    build_gemini_config, build_http_options, extract_text, request_to_contents, translate_error
)
from chartgen.config import ProviderCredentials
from chartgen.models.request import GenerationRequest
from chartgen.prompts import build_system_instruction
from chartgen.utils.verbose_logger import VerboseLogger


class GeminiClient(BaseClient):
    """Schema-constrained Gemini adapter.

    The backend enforces the response schema server-side, so replies are
    normally bare JSON; they still go through the same normalizer as every
    other provider.
    """

    provider: str = "Gemini"
    default_model: str = DEFAULT_MODEL

    def _create_client(self, api_key: str, endpoint: Optional[str]) -> genai.Client:
        return genai.Client(api_key=api_key, http_options=build_http_options(endpoint))

    def generate(
        self,
        request: GenerationRequest,
        credentials: ProviderCredentials,
        logger: VerboseLogger = None,
    ) -> str:
        api_key = credentials.require_api_key(self.provider)
        model = credentials.model_name or self.default_model

        config = build_gemini_config(
            build_system_instruction(request.language, request.mode),
            credentials.temperature,
            request.mode,
        )
        contents = request_to_contents(request)
        client = self._create_client(api_key, credentials.endpoint)

        if logger:
            logger.log_request(self.provider, model)

        try:
            response = client.models.generate_content(model=model, contents=contents, config=config)
        except TRANSPORT_ERRORS as e:
            raise translate_error(self.provider, e) from e
        finally:
            client.close()

        text = extract_text(response, self.provider)
        if logger:
            logger.log_content(text)
        return text
