from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.services.weather import WeatherError, WeatherNotFoundError, WeatherReport, fetch_current_weather

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("", response_model=WeatherReport)
async def current_weather(
    city: str = Query(..., min_length=1, max_length=100),
    country: Optional[str] = Query(None, max_length=100),
):
    try:
        return await fetch_current_weather(city, country)
    except WeatherNotFoundError:
        raise HTTPException(status_code=404, detail="city_not_found")
    except WeatherError:
        raise HTTPException(status_code=502, detail="weather_unavailable")
