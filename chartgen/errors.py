"""Error taxonomy for generation, normalization and detection"""

from typing import Optional


class ChartGenError(Exception):
    """Base class for every error surfaced to the user as a notification"""


class ConfigurationError(ChartGenError):
    """Missing or invalid provider credentials. Raised before any network call."""


class ProviderError(ChartGenError):
    """Backend answered with a non-success status, or the transport failed."""

    def __init__(self, provider: str, status: Optional[int], body: str = ""):
        self.provider = provider
        self.status = status
        self.body = body
        detail = f"HTTP {status}" if status is not None else "transport error"
        super().__init__(f"{provider} request failed ({detail}): {body}")


class EmptyResponseError(ChartGenError):
    """Backend answered successfully but the reply carried no text."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} returned an empty response")


class MalformedResponseError(ChartGenError):
    """Reply text is not parseable JSON."""

    snippet_length: int = 500

    def __init__(self, text: str, parser_message: str):
        self.snippet = text[:self.snippet_length]
        self.parser_message = parser_message
        super().__init__(f"Could not parse response as JSON ({parser_message}): {self.snippet!r}")


class SchemaViolationError(ChartGenError):
    """Parsed payload is missing fields required by its declared chart kind."""


class DetectionFailure(ChartGenError):
    """Free text matched none of the known content types."""


class GenerationInProgress(ChartGenError):
    """A generation was requested while another one is still outstanding."""
