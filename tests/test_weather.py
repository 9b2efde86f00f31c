import httpx
import pytest

from app.routers import weather as weather_router
from app.services import weather
from app.services.weather import WeatherError, WeatherNotFoundError

GEO = {"results": [{"name": "Lisbon", "country": "Portugal", "latitude": 38.72, "longitude": -9.14}]}
FORECAST = {
    "current": {
        "time": "2026-10-18T12:00",
        "temperature_2m": 22.6,
        "apparent_temperature": 21.4,
        "relative_humidity_2m": 55,
        "weather_code": 2,
        "wind_speed_10m": 11.5,
    }
}


def transport(geo=GEO, forecast=FORECAST, status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if status != 200:
            return httpx.Response(status)
        if "geocoding" in request.url.host:
            return httpx.Response(200, json=geo)
        return httpx.Response(200, json=forecast)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_current_weather_is_rounded_and_described():
    seen = []
    report = await weather.fetch_current_weather(" Lisbon ", "PT", transport=transport(seen=seen))
    assert report.location.name == "Lisbon"
    assert report.location.country == "Portugal"
    assert report.current.temperature == 23
    assert report.current.feelsLike == 21
    assert report.current.windSpeed == 12
    assert report.current.condition == "Partly cloudy"
    assert report.current.weatherCode == 2
    assert report.source == "open-meteo"

    geo_params = seen[0].url.params
    assert geo_params["name"] == "Lisbon"
    assert geo_params["count"] == "1"
    assert "temperature_2m" in seen[1].url.params["current"]


@pytest.mark.asyncio
async def test_unknown_city_is_not_found():
    with pytest.raises(WeatherNotFoundError):
        await weather.fetch_current_weather("Atlantis", transport=transport(geo={"results": []}))
    with pytest.raises(WeatherNotFoundError):
        await weather.fetch_current_weather("   ")


@pytest.mark.asyncio
async def test_http_failure_is_a_weather_error():
    with pytest.raises(WeatherError) as exc:
        await weather.fetch_current_weather("Lisbon", transport=transport(status=503))
    assert not isinstance(exc.value, WeatherNotFoundError)


@pytest.mark.asyncio
async def test_not_found_falls_back_to_a_random_report():
    report = await weather.fetch_weather_or_random("Atlantis", "XX", transport=transport(geo={}))
    assert report.source == "random"
    assert report.location.name == "Atlantis"
    assert 5 <= report.current.temperature <= 28
    assert report.current.condition in weather.WEATHER_CODES.values()
    assert report.current.weatherCode in weather.WEATHER_CODES


def test_unknown_code_description():
    assert weather.describe_code(None) == "Unknown"
    assert weather.describe_code(1234) == "Unknown"
    assert weather.describe_code(95) == "Thunderstorm"


@pytest.mark.asyncio
async def test_weather_endpoint_maps_errors(client, monkeypatch):
    async def not_found(city, country=None):
        raise WeatherNotFoundError(city)

    monkeypatch.setattr(weather_router, "fetch_current_weather", not_found)
    resp = await client.get("/v1/weather", params={"city": "Atlantis"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "city_not_found"

    async def down(city, country=None):
        raise WeatherError("timeout")

    monkeypatch.setattr(weather_router, "fetch_current_weather", down)
    resp = await client.get("/v1/weather", params={"city": "Lisbon"})
    assert resp.status_code == 502

    async def ok(city, country=None):
        return weather.random_weather(city, country)

    monkeypatch.setattr(weather_router, "fetch_current_weather", ok)
    resp = await client.get("/v1/weather", params={"city": "Lisbon", "country": "PT"})
    assert resp.status_code == 200
    assert resp.json()["location"]["name"] == "Lisbon"


def raw_transport(geo_response, forecast=FORECAST):
    def handler(request: httpx.Request) -> httpx.Response:
        if "geocoding" in request.url.host:
            return geo_response
        return httpx.Response(200, json=forecast)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "geo_response",
    [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json={"results": [{"name": "Paris"}]}),
        httpx.Response(200, json=["Paris"]),
    ],
)
async def test_malformed_geocode_payload_is_a_weather_error(geo_response):
    with pytest.raises(WeatherError) as exc:
        await weather.fetch_current_weather("Paris", "FR", transport=raw_transport(geo_response))
    assert not isinstance(exc.value, WeatherNotFoundError)


@pytest.mark.asyncio
async def test_malformed_forecast_payload_is_a_weather_error():
    with pytest.raises(WeatherError):
        await weather.fetch_current_weather("Lisbon", transport=transport(forecast={"current": "sunny"}))


@pytest.mark.asyncio
async def test_html_body_falls_back_to_a_random_report():
    html = httpx.Response(200, text="<html>maintenance</html>")
    report = await weather.fetch_weather_or_random("Paris", "FR", transport=raw_transport(html))
    assert report.source == "random"
    assert report.location.name == "Paris"
