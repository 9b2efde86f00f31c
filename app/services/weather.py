from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Optional

import httpx
from pydantic import BaseModel

from app.core.config import settings

logger = logging.getLogger("uvicorn.error")

WEATHER_CODES: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,apparent_temperature,weather_code,wind_speed_10m"


class WeatherError(Exception):
    pass


class WeatherNotFoundError(WeatherError):
    pass


class WeatherLocation(BaseModel):
    name: str
    country: Optional[str] = None
    latitude: float
    longitude: float


class CurrentConditions(BaseModel):
    temperature: int
    feelsLike: int
    humidity: float
    windSpeed: int
    condition: str
    weatherCode: int
    timestamp: Optional[str] = None


class WeatherReport(BaseModel):
    location: WeatherLocation
    current: CurrentConditions
    source: str = "open-meteo"


def describe_code(code: int | None) -> str:
    if code is None:
        return "Unknown"
    return WEATHER_CODES.get(int(code), "Unknown")


async def fetch_current_weather(
    city: str,
    country: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WeatherReport:
    """Geocode ``city`` and return its current conditions.

    Raises :class:`WeatherNotFoundError` when geocoding has no match and
    :class:`WeatherError` for transport failures and malformed payloads.
    """
    if not city or not city.strip():
        raise WeatherNotFoundError("city is required")
    try:
        async with httpx.AsyncClient(timeout=settings.WEATHER_TIMEOUT_S, transport=transport) as client:
            geo = await client.get(
                settings.WEATHER_GEOCODE_URL,
                params={"name": city.strip(), "count": 1, "language": "en", "format": "json"},
            )
            geo.raise_for_status()
            results = (geo.json() or {}).get("results") or []
            if not results:
                raise WeatherNotFoundError(f"city not found: {city}")
            place = results[0]
            lat, lon = place["latitude"], place["longitude"]

            fc = await client.get(
                settings.WEATHER_FORECAST_URL,
                params={"latitude": lat, "longitude": lon, "current": CURRENT_FIELDS, "timezone": "auto"},
            )
            fc.raise_for_status()
            current = (fc.json() or {}).get("current") or {}
    except httpx.HTTPError as exc:
        logger.warning("weather:error city=%s err=%s", city, exc)
        raise WeatherError(str(exc)) from exc
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.warning("weather:error city=%s reason=bad_payload err=%s", city, exc)
        raise WeatherError(f"unexpected weather payload: {exc}") from exc

    try:
        code = current.get("weather_code")
        return WeatherReport(
            location=WeatherLocation(
                name=place.get("name") or city,
                country=place.get("country"),
                latitude=lat,
                longitude=lon,
            ),
            current=CurrentConditions(
                temperature=round(current["temperature_2m"]),
                feelsLike=round(current["apparent_temperature"]),
                humidity=current["relative_humidity_2m"],
                windSpeed=round(current["wind_speed_10m"]),
                condition=describe_code(code),
                weatherCode=int(code) if code is not None else -1,
                timestamp=current.get("time"),
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise WeatherError(f"unexpected forecast payload: {exc}") from exc


def random_weather(city: str | None = None, country: str | None = None) -> WeatherReport:
    code = random.choice([0, 1, 2, 3, 61, 80])
    temp = random.randint(5, 28)
    return WeatherReport(
        location=WeatherLocation(
            name=city or settings.DEFAULT_CITY,
            country=country or settings.DEFAULT_COUNTRY,
            latitude=0.0,
            longitude=0.0,
        ),
        current=CurrentConditions(
            temperature=temp,
            feelsLike=temp - random.randint(0, 3),
            humidity=random.randint(40, 90),
            windSpeed=random.randint(2, 25),
            condition=WEATHER_CODES[code],
            weatherCode=code,
            timestamp=datetime.now(timezone.utc).isoformat(timespec="minutes"),
        ),
        source="random",
    )


async def fetch_weather_or_random(
    city: str | None,
    country: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WeatherReport:
    city = city or settings.DEFAULT_CITY
    country = country or settings.DEFAULT_COUNTRY
    try:
        return await fetch_current_weather(city, country, transport=transport)
    except WeatherError as exc:
        logger.info("weather:fallback city=%s reason=%s", city, exc)
        return random_weather(city, country)
