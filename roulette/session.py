"""Search workflow orchestration: resolve the channel, then sample one of its videos."""

import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from .config import RouletteConfig
from .exceptions import ApiError, AuthorizationError, ConfigurationError
from .messages import OutcomeStatus, message_for
from .resolver import Channel, ChannelResolver
from .retry import is_quota_exhausted, retry_on_quota
from .sampler import SampleResult, VideoSampler
from .search.providers.base import SearchProvider
from .search.providers.youtube import YouTubeSearchProvider
from .utils import embed_url, normalize_query

logger = logging.getLogger(__name__)


@dataclass
class PhaseOutcome:
    """Tagged result of one search phase."""

    status: OutcomeStatus
    message: str = ""
    http_status: Optional[int] = None
    channel: Optional[Channel] = None
    sample: Optional[SampleResult] = None

    @property
    def is_success(self) -> bool:
        return self.status in (OutcomeStatus.FOUND, OutcomeStatus.SAMPLED)


@dataclass
class SearchState:
    """Transient state of the most recent search."""

    query: str = ""
    channel_name: str = ""
    is_loading: bool = False
    video_ids: List[str] = field(default_factory=list)
    selected_video_id: Optional[str] = None
    channel_outcome: Optional[PhaseOutcome] = None
    video_outcome: Optional[PhaseOutcome] = None
    generation: int = 0

    @property
    def embed_url(self) -> Optional[str]:
        return embed_url(self.selected_video_id) if self.selected_video_id else None


class SearchSession:
    """Runs one search at a time against a provider and keeps the resulting state."""

    def __init__(
        self,
        config: RouletteConfig,
        provider: Optional[SearchProvider] = None,
        rng: Optional[random.Random] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.config = config
        self.provider = provider or YouTubeSearchProvider(config.api)
        self.resolver = ChannelResolver(self.provider, config.api.api_key)
        self.sampler = VideoSampler(
            self.provider,
            config.api.api_key,
            max_pages=config.sampling.max_pages,
            page_size=config.sampling.page_size,
            rng=rng,
            retry=config.retry if config.retry.retry_video_phase else None,
            sleep=sleep,
        )
        self.sleep = sleep
        self.state = SearchState()
        self._generation = 0

    async def submit(
        self, query: Optional[str], on_page: Optional[Callable[[int, int], None]] = None
    ) -> Optional[SearchState]:
        """Run a full search for ``query``.

        Returns ``None`` without touching state or the network for blank
        queries, and also when a newer search superseded this one.
        """
        query = normalize_query(query)
        if not query:
            return None

        self._generation += 1
        generation = self._generation
        self.state = SearchState(query=query, is_loading=True, generation=generation)
        logger.info(f"Search #{generation} started for '{query}'")

        try:
            channel_outcome = await self._resolve_phase(query)
            if self._is_stale(generation):
                return None
            self._apply_channel_outcome(channel_outcome)

            if channel_outcome.status is not OutcomeStatus.FOUND:
                return self.state

            video_outcome = await self._sample_phase(channel_outcome.channel, on_page)
            if self._is_stale(generation):
                return None
            self._apply_video_outcome(video_outcome)
            return self.state
        finally:
            if generation == self._generation:
                self.state.is_loading = False

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(f"Discarding result of search #{generation}, #{self._generation} is current")
            return True
        return False

    async def _resolve_phase(self, query: str) -> PhaseOutcome:
        retry = self.config.retry
        try:
            channel = await retry_on_quota(
                lambda: self.resolver.resolve(query),
                max_attempts=retry.max_attempts,
                base_delay=retry.base_delay,
                sleep=self.sleep,
            )
        except Exception as e:
            return self._error_outcome(e, "Failed to fetch channel info")

        if channel is None:
            return self._outcome(OutcomeStatus.NOT_FOUND)
        return PhaseOutcome(status=OutcomeStatus.FOUND, message=channel.display_name, channel=channel)

    async def _sample_phase(
        self, channel: Channel, on_page: Optional[Callable[[int, int], None]]
    ) -> PhaseOutcome:
        try:
            sample = await self.sampler.sample(channel.identifier, on_page=on_page)
        except Exception as e:
            return self._error_outcome(e, "Failed to fetch video IDs")

        if sample.selected is None:
            outcome = self._outcome(OutcomeStatus.NO_VIDEOS)
            outcome.sample = sample
            return outcome
        return PhaseOutcome(status=OutcomeStatus.SAMPLED, sample=sample)

    def _outcome(self, status: OutcomeStatus, http_status: Optional[int] = None) -> PhaseOutcome:
        return PhaseOutcome(
            status=status,
            message=message_for(status, self.config.ui.locale),
            http_status=http_status,
        )

    def _error_outcome(self, error: Exception, context: str) -> PhaseOutcome:
        """Convert a phase failure into its tagged outcome."""
        http_status = getattr(error, "status_code", None)

        if isinstance(error, ConfigurationError):
            return self._outcome(OutcomeStatus.MISCONFIGURED)
        if is_quota_exhausted(error):
            logger.warning(f"{context}: quota still exhausted after retries: {error}")
            return self._outcome(OutcomeStatus.QUOTA_EXCEEDED, http_status)
        if isinstance(error, AuthorizationError):
            logger.error(f"{context}: {error}")
            return self._outcome(OutcomeStatus.FORBIDDEN, http_status)
        if isinstance(error, ApiError):
            logger.error(f"{context}: {error}")
        else:
            logger.exception(f"{context}: {error}")
        return self._outcome(OutcomeStatus.FAILED, http_status)

    def _apply_channel_outcome(self, outcome: PhaseOutcome) -> None:
        self.state.channel_outcome = outcome
        self.state.channel_name = outcome.message

    def _apply_video_outcome(self, outcome: PhaseOutcome) -> None:
        self.state.video_outcome = outcome
        if outcome.sample is not None:
            self.state.video_ids = list(outcome.sample.video_ids)
            self.state.selected_video_id = outcome.sample.selected
        if outcome.status is not OutcomeStatus.SAMPLED:
            self.state.selected_video_id = None

    def reroll(self) -> Optional[str]:
        """Pick another video from the already collected ids without new requests."""
        if not self.state.video_ids:
            return None
        self.state.selected_video_id = self.sampler.pick(self.state.video_ids)
        return self.state.selected_video_id

    async def aclose(self) -> None:
        await self.provider.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
