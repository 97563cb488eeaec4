"""Provider credentials, platform presets and pipeline options.

Credentials are always passed explicitly into each generation call. The
environment helpers here are a convenience for callers; adapters never read
the environment themselves.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from chartgen.errors import ConfigurationError
from chartgen.models.request import Language


class ProviderCredentials(BaseModel):
    """Endpoint, key and model for one backend."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    endpoint: Optional[str] = Field(None, description="Base URL or full chat-completions URL")
    api_key: Optional[str] = Field(None, alias="apiKey", description="Backend API key")
    model_name: Optional[str] = Field(None, alias="modelName", description="Model identifier")
    temperature: float = Field(0.3, alias="samplingTemperature", description="Sampling temperature")

    def require_api_key(self, provider: str) -> str:
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(f"{provider} API key is missing. Please check your environment configuration.")
        return self.api_key.strip()

    def require_endpoint(self, provider: str) -> str:
        if not self.endpoint or not self.endpoint.strip():
            raise ConfigurationError(f"{provider} API URL is missing. Please check your environment configuration.")
        return self.endpoint.strip()

    @classmethod
    def from_env(cls, provider: str, platform: Optional[str] = None, dotenv: bool = True) -> "ProviderCredentials":
        """Read credentials for a provider from environment variables.

        Args:
            provider: "gemini", "openai_chat" or "openai_compatible"
            platform: Platform key for the compatible provider (see PLATFORMS)
            dotenv: Load a .env file first
        """
        if dotenv:
            load_dotenv()

        if provider == "gemini":
            return cls(
                endpoint=os.environ.get("GEMINI_BASE_URL"),
                api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY") or os.environ.get("API_KEY"),
                model_name=os.environ.get("GEMINI_MODEL"),
            )

        if provider == "openai_chat":
            return cls(
                endpoint=os.environ.get("OPENAI_BASE_URL"),
                api_key=os.environ.get("OPENAI_API_KEY"),
                model_name=os.environ.get("OPENAI_MODEL"),
            )

        if provider == "openai_compatible":
            preset = get_platform(platform or DEFAULT_PLATFORM)
            prefix = preset.env_prefix
            return cls(
                endpoint=os.environ.get(f"{prefix}_API_URL"),
                api_key=os.environ.get(f"{prefix}_API_KEY"),
                model_name=os.environ.get(f"{prefix}_MODEL"),
            )

        raise ConfigurationError(f"Unknown provider '{provider}'")


@dataclass(frozen=True)
class PlatformPreset:
    """Default endpoint/model pair for an OpenAI-compatible platform."""
    name: str
    name_en: str
    default_base_url: str
    default_model: str
    env_prefix: str


PLATFORMS = {
    "zhipu": PlatformPreset(
        name="智谱 AI",
        name_en="Zhipu AI",
        default_base_url="https://open.bigmodel.cn/api/paas/v4",
        default_model="glm-4-flash",
        env_prefix="ZP",
    ),
    "xiaomi": PlatformPreset(
        name="小米 AI",
        name_en="Xiaomi AI",
        default_base_url="https://api.xiaomimimo.com/v1",
        default_model="mimo-v2-flash",
        env_prefix="XM",
    ),
    "deepseek": PlatformPreset(
        name="DeepSeek",
        name_en="DeepSeek",
        default_base_url="https://api.deepseek.com/v1",
        default_model="deepseek-chat",
        env_prefix="DS",
    ),
    "moonshot": PlatformPreset(
        name="月之暗面",
        name_en="Moonshot",
        default_base_url="https://api.moonshot.cn/v1",
        default_model="moonshot-v1-8k",
        env_prefix="MS",
    ),
    "custom": PlatformPreset(
        name="自定义 OpenAI",
        name_en="Custom OpenAI",
        default_base_url="https://api.openai.com/v1",
        default_model="gpt-4o-mini",
        env_prefix="CUSTOM",
    ),
}

DEFAULT_PLATFORM = "zhipu"


def get_platform(key: str) -> PlatformPreset:
    try:
        return PLATFORMS[key]
    except KeyError:
        raise ConfigurationError(f"Unknown platform '{key}'. Available: {sorted(PLATFORMS)}") from None


@dataclass
class GenerationOptions:
    """Pipeline switches owned by the caller.

    Attributes:
        pretty_markup: Run the best-effort formatter over markup sources
        debounce_delay: Quiet period (seconds) before re-classifying edited text
        language: Default output language
        reject_concurrent: Raise GenerationInProgress instead of superseding an outstanding request
    """
    pretty_markup: bool = True
    debounce_delay: float = 0.5
    language: Language = Language.ZH
    reject_concurrent: bool = False
