"""Per-feed orchestration: availability gate → TTL cache → upstream → formatter.

One DisplayService is built at startup and shared by every request. When the
gate is closed, feeds return an empty string without touching the cache or
any upstream, which keeps rate-limited calls for when someone can see them.
"""

import logging
from datetime import datetime
from typing import Callable

import httpx
import pandas as pd

from config import Settings
from errors import ConfigurationMissingError, UnsupportedModeError
from services import quantize
from services.availability import AvailabilityGate, AvailabilityState, local_clock
from services.cache import TTLCache
from services.display_text import DisplayTextStore
from services.formatting import format_commit_summary, format_weather_summary
from services.github import CommitActivity, ContributionDay, GitHubClient
from services.weather import WeatherClient, WeatherReading

logger = logging.getLogger(__name__)

COMMITS_FEED = "commits"
WEATHER_FEED = "weather"
CONTRIBUTIONS_FEED = "contributions"

GRAPH_MODES = {"bitmap", "levels"}


def today_window(now: datetime) -> tuple[datetime, datetime]:
    """(local midnight, now), both timezone-aware.

    Midnight carries the UTC offset in force at midnight, not the one at
    ``now``; the two differ on clock-change days.
    """
    if isinstance(now, pd.Timestamp):
        if now.tzinfo is not None:
            return now.normalize().to_pydatetime(), now.to_pydatetime()
        now = now.to_pydatetime()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if now.tzinfo is None:
        return midnight.astimezone(), now.astimezone()
    return midnight, now


class DisplayService:
    def __init__(
        self,
        settings: Settings,
        gate: AvailabilityGate,
        cache: TTLCache,
        text_store: DisplayTextStore,
        github: GitHubClient | None = None,
        weather: WeatherClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.settings = settings
        self.gate = gate
        self.cache = cache
        self._text_store = text_store
        self._github = github
        self._weather = weather
        self._clock = clock or local_clock(settings.display_timezone)
        self._text = text_store.load()

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "DisplayService":
        """Wire up gate, cache, store and whichever upstream clients are configured."""
        clock = local_clock(settings.display_timezone)
        gate = AvailabilityGate(
            auto_mode=settings.auto_mode,
            start_hour=settings.active_start_hour,
            end_hour=settings.active_end_hour,
            clock=clock,
        )

        github = None
        if not settings.missing_github():
            github = GitHubClient(
                settings.github_token,
                settings.github_username,
                timeout=settings.upstream_timeout_seconds,
                transport=transport,
            )

        weather = None
        if not settings.missing_weather():
            weather = WeatherClient(
                settings.openweather_api_key,
                settings.weather_location,
                units=settings.weather_units,
                timeout=settings.upstream_timeout_seconds,
                transport=transport,
            )

        return cls(
            settings,
            gate,
            TTLCache(),
            DisplayTextStore(settings.display_text_path),
            github=github,
            weather=weather,
            clock=clock,
        )

    # -- display text / state -------------------------------------------------

    def get_display(self) -> str:
        return self._text if self.gate.enabled else ""

    def set_display(self, text: str) -> str:
        self._text = text
        self._text_store.save(text)
        return text

    def set_enabled(self, value: bool) -> AvailabilityState:
        return self.gate.set_enabled(value)

    def set_auto_mode(self, value: bool) -> AvailabilityState:
        return self.gate.set_auto_mode(value)

    # -- feeds -----------------------------------------------------------------

    def _require_github(self) -> GitHubClient:
        if self._github is None:
            raise ConfigurationMissingError("GitHub", self.settings.missing_github())
        return self._github

    def _require_weather(self) -> WeatherClient:
        if self._weather is None:
            raise ConfigurationMissingError("Weather", self.settings.missing_weather())
        return self._weather

    async def commits_summary(self) -> str:
        if not self.gate.enabled:
            return ""
        github = self._require_github()

        async def fetch() -> CommitActivity:
            start, end = today_window(self._clock())
            return await github.fetch_commit_activity(start, end)

        activity = await self.cache.get_or_fetch(COMMITS_FEED, self.settings.commits_ttl_seconds, fetch)
        return format_commit_summary(activity)

    async def weather_summary(self) -> str:
        if not self.gate.enabled:
            return ""
        weather = self._require_weather()

        reading: WeatherReading = await self.cache.get_or_fetch(
            WEATHER_FEED, self.settings.weather_ttl_seconds, weather.fetch_current
        )
        return format_weather_summary(reading)

    async def contribution_graph(self, mode: str = "bitmap") -> str:
        """Contribution calendar quantized as a 32×7 bitmap or per-day levels."""
        if mode not in GRAPH_MODES:
            raise UnsupportedModeError(mode, GRAPH_MODES)
        if not self.gate.enabled:
            return ""
        github = self._require_github()

        days: list[ContributionDay] = await self.cache.get_or_fetch(
            CONTRIBUTIONS_FEED,
            self.settings.contributions_ttl_seconds,
            github.fetch_contribution_calendar,
        )
        counts = [day.count for day in days]
        if mode == "levels":
            symbols = quantize.intensity_levels(counts)
        else:
            symbols = quantize.tiered_bitmap(counts)
        return quantize.encode_symbols(symbols)
