"""Short display strings for the commits and weather feeds."""

import math

from services.github import CommitActivity
from services.weather import WeatherReading

# (low inclusive, high exclusive, label) over OpenWeatherMap condition ids
CONDITION_RANGES = [
    (200, 300, "Storm"),
    (300, 400, "Drizzle"),
    (500, 600, "Rain"),
    (600, 700, "Snow"),
    (700, 800, "Fog"),
    (800, 801, "Clear"),
]


def condition_for_code(code: int) -> str:
    for low, high, label in CONDITION_RANGES:
        if low <= code < high:
            return label
    if code > 800:
        return "Cloudy"
    return "N/A"


def format_commit_summary(activity: CommitActivity) -> str:
    """e.g. ``Today: 4 commits (blog: 3, dotfiles: 1)``."""
    noun = "commit" if activity.total == 1 else "commits"
    summary = f"Today: {activity.total} {noun}"

    active = [repo for repo in activity.repositories if repo.count > 0]
    if active:
        summary += " (" + ", ".join(f"{repo.name}: {repo.count}" for repo in active) + ")"
    return summary


def format_weather_summary(reading: WeatherReading) -> str:
    """e.g. ``Berlin: 21C Clear``."""
    unit = "F" if reading.units == "imperial" else "C"
    # half-up, so 21.5 shows as 22 and -2.5 as -2
    temperature = math.floor(reading.temperature + 0.5)
    return f"{reading.city}: {temperature}{unit} {condition_for_code(reading.condition_code)}"
