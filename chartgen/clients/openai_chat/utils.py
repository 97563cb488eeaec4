"""OpenAI ChatCompletions client utilities, shared by the chat and compatible adapters"""

from typing import Any, Dict, List, Optional, Tuple, Union

import openai

from chartgen.config import ProviderCredentials
from chartgen.errors import ConfigurationError, EmptyResponseError, ProviderError
from chartgen.models.request import GenerationRequest
from chartgen.prompts import build_system_instruction, build_user_message

DEFAULT_MODEL = "gpt-4o-mini"
CHAT_COMPLETIONS_SUFFIX = "/chat/completions"

TRANSPORT_ERRORS = (openai.APIStatusError, openai.APIConnectionError)


def normalize_base_url(endpoint: str) -> str:
    """Accept either a base URL or a full chat-completions URL"""
    url = endpoint.strip().rstrip("/")
    if url.endswith(CHAT_COMPLETIONS_SUFFIX):
        url = url[: -len(CHAT_COMPLETIONS_SUFFIX)]
    return url


def resolve_target(
    provider: str,
    credentials: ProviderCredentials,
    default_model: str,
    default_base_url: Optional[str] = None,
) -> Tuple[str, str, str]:
    """Return (api_key, base_url, model), failing fast on missing credentials"""
    api_key = credentials.require_api_key(provider)
    endpoint = credentials.endpoint if credentials.endpoint and credentials.endpoint.strip() else default_base_url
    if not endpoint:
        raise ConfigurationError(f"{provider} API URL is missing. Please check your environment configuration.")
    return api_key, normalize_base_url(endpoint), credentials.model_name or default_model


def build_user_content(request: GenerationRequest) -> Union[str, List[Dict[str, Any]]]:
    """Plain text, or typed multimodal blocks when an image is attached"""
    text = build_user_message(request)
    if request.image is None:
        return text
    return [
        {"type": "text", "text": text},
        {"type": "image_url", "image_url": {"url": request.image.to_data_url()}},
    ]


def build_chat_params(model: str, temperature: float, request: GenerationRequest) -> Dict[str, Any]:
    """Build parameters for a JSON-mode ChatCompletions call"""
    return {
        "model": model,
        "temperature": temperature,
        "messages": [
            {"role": "system", "content": build_system_instruction(request.language, request.mode)},
            {"role": "user", "content": build_user_content(request)},
        ],
        "response_format": {"type": "json_object"},
    }


def translate_error(provider: str, error: Exception) -> ProviderError:
    if isinstance(error, openai.APIStatusError):
        return ProviderError(provider, error.status_code, error.response.text)
    return ProviderError(provider, None, str(error))


def extract_content(response, provider: str) -> str:
    """Return `choices[0].message.content` verbatim, or raise if it is empty"""
    choices = getattr(response, "choices", None)
    if not choices:
        raise EmptyResponseError(provider)
    content = choices[0].message.content
    if not content or not content.strip():
        raise EmptyResponseError(provider)
    return content
