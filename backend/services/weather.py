"""OpenWeatherMap current-conditions client.

Needs an API key. Returns temperature, city name and the numeric condition
code for a single configured location.
"""

import logging
from dataclasses import dataclass

import httpx

from errors import UpstreamDataError, UpstreamFetchError

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


@dataclass(frozen=True)
class WeatherReading:
    city: str
    temperature: float
    condition_code: int
    units: str


class WeatherClient:
    def __init__(
        self,
        api_key: str,
        location: str,
        units: str = "metric",
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._location = location
        self._units = units
        self._timeout = timeout
        self._transport = transport

    async def fetch_current(self) -> WeatherReading:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(
                    OPENWEATHER_URL,
                    params={"q": self._location, "units": self._units, "appid": self._api_key},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("Weather fetch failed for %s: %s", self._location, e)
            raise UpstreamFetchError("OpenWeatherMap", str(e)) from e
        except ValueError as e:
            raise UpstreamFetchError("OpenWeatherMap", f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamDataError("OpenWeatherMap", "response is not a JSON object")

        # cod comes back as int on success and sometimes as a string on errors
        if str(data.get("cod")) != "200":
            message = data.get("message", "unknown error")
            logger.warning("Weather API returned cod=%s for %s: %s", data.get("cod"), self._location, message)
            raise UpstreamFetchError("OpenWeatherMap", f"cod {data.get('cod')}: {message}")

        try:
            return WeatherReading(
                city=data["name"],
                temperature=float(data["main"]["temp"]),
                condition_code=int(data["weather"][0]["id"]),
                units=self._units,
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamDataError("OpenWeatherMap", f"malformed weather payload: {e!r}") from e
