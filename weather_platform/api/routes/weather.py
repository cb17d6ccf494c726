from fastapi import APIRouter, Request, Query

import structlog
from ...schemas.weather import CombinedWeather

router = APIRouter()
logger = structlog.get_logger()


@router.get(
    "/",
    response_model=CombinedWeather,
    summary="Earth and space weather",
    responses={
        200: {
            "description": "Current conditions, 7-day history and 7-day forecast for both feeds",
            "content": {
                "application/json": {
                    "example": {
                        "earth": {
                            "location": "49.6005, 25.3387, 12.5",
                            "temperature": 27,
                            "wind_speed": 4,
                            "humidity": 48,
                            "condition": "Sunny",
                            "category": "warm",
                            "forecast": [
                                {"day": "Tue", "temperature": 28, "condition": "Sunny", "category": "warm"}
                            ],
                            "historical_temp": [{"time": "Mon", "value": 26.9}],
                            "historical_wind": [{"time": "Mon", "value": None}],
                            "historical_humidity": [{"time": "Mon", "value": 47.8}],
                        },
                        "space": {
                            "solar_wind_speed": 561,
                            "kp_index": 3.0,
                            "cme_count": 1,
                            "forecast": [{"day": "Tue", "solar_wind_speed": 598, "kp_index": 4}],
                            "historical_solar_wind": [{"time": "Mon", "value": 547.2}],
                            "historical_kp_index": [{"time": "Mon", "value": 3.0}],
                            "historical_cme_count": [{"time": "Mon", "value": 1.0}],
                        },
                    }
                }
            },
        },
    },
)
async def weather(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
) -> CombinedWeather:
    weather_service = request.app.state.weather_service
    out = await weather_service.afetch(lat, lon)
    logger.info("weather_served", lat=lat, lon=lon, location=out.earth.location)
    return out
