"""Chart session: the current config, its history, and how new configs arrive.

A config arrives either from a generation (network call + normalizer) or from
hand-edited source text (debounced detector). Either way the current config is
replaced wholesale, and only once the new one fully validates.
"""

from typing import Callable, List, Optional

from chartgen.clients.base import AsyncBaseClient
from chartgen.config import GenerationOptions, ProviderCredentials
from chartgen.detector import detect
from chartgen.errors import ChartGenError, GenerationInProgress
from chartgen.events import ConfigApplied, DetectionFailed, GenerationDiscarded, GenerationFailed, SessionEvent
from chartgen.history import HistoryStore
from chartgen.models.chart import ChartConfig
from chartgen.models.history import HistoryEntry
from chartgen.models.request import GenerationRequest
from chartgen.normalizer import normalize
from chartgen.scheduling import Debouncer
from chartgen.utils.verbose_logger import VerboseLogger


class ChartSession:
    """Single-threaded owner of the displayed configuration.

    Every generation is tagged with a monotonically increasing sequence number;
    a reply whose number is no longer the latest is dropped instead of
    overwriting fresher state.
    """

    def __init__(
        self,
        client: AsyncBaseClient,
        credentials: ProviderCredentials,
        history: Optional[HistoryStore] = None,
        options: Optional[GenerationOptions] = None,
        on_event: Optional[Callable[[SessionEvent], None]] = None,
        verbose: bool = False,
        logger: VerboseLogger = None,
    ):
        self.client = client
        self.credentials = credentials
        self.history = history if history is not None else HistoryStore()
        self.options = options or GenerationOptions()
        self.on_event = on_event
        self.logger = logger if logger is not None else VerboseLogger(verbose)

        self.current: Optional[ChartConfig] = None
        self.source_text: str = ""
        self.last_error: Optional[ChartGenError] = None
        self.events: List[SessionEvent] = []

        self._sequence = 0
        self._in_flight = 0
        self._debouncer: Debouncer[str] = Debouncer(self.options.debounce_delay, self._classify)

    @property
    def in_flight(self) -> bool:
        return self._in_flight > 0

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    async def generate(self, request: GenerationRequest) -> Optional[ChartConfig]:
        """Call the provider, normalize the reply and apply it.

        Returns the applied config, or None if a newer generation superseded this one.
        Errors propagate after a GenerationFailed event; the current config is left untouched.
        """
        if self.options.reject_concurrent and self.in_flight:
            raise GenerationInProgress("A generation is already in progress")

        self._sequence += 1
        sequence = self._sequence
        self._in_flight += 1
        try:
            raw = await self.client.generate(request, self.credentials, logger=self.logger)
            config = normalize(raw, pretty_markup=self.options.pretty_markup)
        except ChartGenError as e:
            self.last_error = e
            self.logger.log_error(f"Generation #{sequence} failed: {e}")
            self._emit(GenerationFailed(sequence=sequence, error=e))
            raise
        finally:
            self._in_flight -= 1

        if sequence != self._sequence:
            self.logger.log_warning(f"Discarding stale generation #{sequence} (latest is #{self._sequence})")
            self._emit(GenerationDiscarded(sequence=sequence, latest=self._sequence))
            return None

        # A pending edit classification would overwrite the fresh result
        self._debouncer.cancel()
        image = request.image.to_data_url() if request.image is not None else None
        self.history.add(request.effective_prompt, config, image=image)
        self._apply(config, "generation", sequence)
        self._save_history()
        return config

    def edit(self, text: str) -> None:
        """Record edited source text; it is classified once edits go quiet."""
        self.source_text = text
        if not text.strip():
            self._debouncer.cancel()
            return
        self._debouncer.submit(text)

    def select(self, entry_id: str) -> Optional[HistoryEntry]:
        """Restore a history entry as the current config."""
        entry = self.history.get(entry_id)
        if entry is None:
            return None
        self._debouncer.cancel()
        self._apply(entry.config, "history")
        return entry

    def close(self) -> None:
        self._debouncer.cancel()

    def _classify(self, text: str) -> None:
        try:
            config = detect(text)
        except ChartGenError as e:
            self.last_error = e
            self.logger.log_warning(f"Could not interpret edited source: {e}")
            self._emit(DetectionFailed(text=text, error=e))
            return
        # Keep the editor text as typed; only the config is replaced
        self.current = config
        self.last_error = None
        self._emit(ConfigApplied(config=config, source="edit"))

    def _save_history(self) -> None:
        try:
            self.history.save()
        except OSError as e:
            self.logger.log_warning(f"Could not persist history to {self.history.path}: {e}")

    def _apply(self, config: ChartConfig, source: str, sequence: Optional[int] = None) -> None:
        self.current = config
        self.source_text = config.to_json()
        self.last_error = None
        self._emit(ConfigApplied(config=config, source=source, sequence=sequence))

    def _emit(self, event: SessionEvent) -> None:
        self.events.append(event)
        if self.on_event:
            self.on_event(event)
