"""Base client interface for LLM providers"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from chartgen.config import ProviderCredentials
    from chartgen.models.request import GenerationRequest
    from chartgen.utils.verbose_logger import VerboseLogger


class BaseClient(ABC):
    """Base class for sync provider adapters"""

    provider: str
    default_model: str

    @abstractmethod
    def generate(
        self,
        request: 'GenerationRequest',
        credentials: 'ProviderCredentials',
        logger: Optional['VerboseLogger'] = None,
    ) -> str:
        """Single request/response against the backend. Returns the raw reply text verbatim.

        Args:
            request: Prompt, language, generation mode and optional image
            credentials: Endpoint, key, model and temperature supplied by the caller
            logger: VerboseLogger instance for consistent logging (optional)

        Raises:
            ConfigurationError: Credentials are missing, before any network call
            ProviderError: Non-success status or transport failure
            EmptyResponseError: The reply carried no text
        """
        raise NotImplementedError


class AsyncBaseClient(ABC):
    """Base class for async provider adapters"""

    provider: str
    default_model: str

    @abstractmethod
    async def generate(
        self,
        request: 'GenerationRequest',
        credentials: 'ProviderCredentials',
        logger: Optional['VerboseLogger'] = None,
    ) -> str:
        """Single request/response against the backend (async). Returns the raw reply text verbatim.

        Raises:
            ConfigurationError: Credentials are missing, before any network call
            ProviderError: Non-success status or transport failure
            EmptyResponseError: The reply carried no text
        """
        raise NotImplementedError
