"""Centralized configuration — all env vars in one place."""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = int(os.getenv("PORT", "8000"))

        # GitHub (commits + contribution graph feeds)
        self.github_token: str | None = os.getenv("GITHUB_TOKEN")
        self.github_username: str | None = os.getenv("GITHUB_USERNAME")

        # OpenWeatherMap
        self.openweather_api_key: str | None = os.getenv("OPENWEATHER_API_KEY")
        self.weather_location: str | None = os.getenv("WEATHER_LOCATION")
        self.weather_units: str = os.getenv("WEATHER_UNITS", "metric")

        # Display state
        self.display_text_path: str = os.getenv("DISPLAY_TEXT_PATH", "display_text.json")
        self.display_timezone: str | None = os.getenv("DISPLAY_TIMEZONE")
        self.active_start_hour: int = int(os.getenv("ACTIVE_START_HOUR", "8"))
        self.active_end_hour: int = int(os.getenv("ACTIVE_END_HOUR", "22"))
        self.auto_mode: bool = _env_bool("AUTO_MODE")
        self.state_tick_seconds: float = float(os.getenv("STATE_TICK_SECONDS", "60"))

        # Upstream caching
        self.commits_ttl_seconds: float = float(os.getenv("COMMITS_TTL_SECONDS", "300"))
        self.weather_ttl_seconds: float = float(os.getenv("WEATHER_TTL_SECONDS", "900"))
        self.contributions_ttl_seconds: float = float(os.getenv("CONTRIBUTIONS_TTL_SECONDS", "3600"))
        self.upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "10"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def missing_github(self) -> list[str]:
        required = ["GITHUB_TOKEN", "GITHUB_USERNAME"]
        return [var for var in required if not getattr(self, _attr_for(var))]

    def missing_weather(self) -> list[str]:
        required = ["OPENWEATHER_API_KEY", "WEATHER_LOCATION"]
        return [var for var in required if not getattr(self, _attr_for(var))]

    def validate(self) -> list[str]:
        """Return list of missing env vars required by the upstream feeds."""
        return self.missing_github() + self.missing_weather()


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "OPENWEATHER_API_KEY": "openweather_api_key",
    }
    return mapping.get(env_var, env_var.lower())
