"""Shared fixtures: env-driven settings, a controllable clock and stub upstreams."""

from datetime import date, datetime, timedelta

import pytest

from config import Settings
from services.availability import AvailabilityGate
from services.cache import TTLCache
from services.display import DisplayService
from services.display_text import DisplayTextStore
from services.github import CommitActivity, ContributionDay, RepositoryCommits
from services.weather import WeatherReading

FEED_ENV = {
    "GITHUB_TOKEN": "ghp_test",
    "GITHUB_USERNAME": "octocat",
    "OPENWEATHER_API_KEY": "owm_test",
    "WEATHER_LOCATION": "Berlin",
}


class FakeClock:
    """Monotonic seconds the test can move forward by hand."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubGitHub:
    def __init__(self):
        self.activity = CommitActivity(total=1, repositories=[RepositoryCommits("demo", 3)])
        start = date(2026, 1, 1)
        self.days = [ContributionDay(start + timedelta(days=i), i % 5) for i in range(365)]
        self.error: Exception | None = None
        self.commit_calls = 0
        self.calendar_calls = 0

    async def fetch_commit_activity(self, start: datetime, end: datetime) -> CommitActivity:
        self.commit_calls += 1
        if self.error:
            raise self.error
        return self.activity

    async def fetch_contribution_calendar(self) -> list[ContributionDay]:
        self.calendar_calls += 1
        if self.error:
            raise self.error
        return self.days


class StubWeather:
    def __init__(self):
        self.reading = WeatherReading(city="Berlin", temperature=21.4, condition_code=800, units="metric")
        self.error: Exception | None = None
        self.calls = 0

    async def fetch_current(self) -> WeatherReading:
        self.calls += 1
        if self.error:
            raise self.error
        return self.reading


@pytest.fixture
def make_settings(monkeypatch, tmp_path):
    """Build Settings from a clean environment plus the given overrides."""

    def _make(**env: str) -> Settings:
        for var in list(FEED_ENV) + ["AUTO_MODE", "DISPLAY_TIMEZONE", "ENVIRONMENT"]:
            monkeypatch.delenv(var, raising=False)
        monkeypatch.setenv("DISPLAY_TEXT_PATH", str(tmp_path / "display_text.json"))
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return Settings()

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings(**FEED_ENV)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def github() -> StubGitHub:
    return StubGitHub()


@pytest.fixture
def weather() -> StubWeather:
    return StubWeather()


@pytest.fixture
def make_service(settings, clock, github, weather):
    def _make(**overrides) -> DisplayService:
        kwargs = {
            "settings": settings,
            "gate": AvailabilityGate(clock=lambda: datetime(2026, 10, 19, 12, 0)),
            "cache": TTLCache(clock=clock),
            "text_store": DisplayTextStore(settings.display_text_path),
            "github": github,
            "weather": weather,
            "clock": lambda: datetime(2026, 10, 19, 12, 0),
        }
        kwargs.update(overrides)
        return DisplayService(**kwargs)

    return _make


@pytest.fixture
def service(make_service) -> DisplayService:
    return make_service()
