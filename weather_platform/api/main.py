from typing import Optional

import time
from fastapi import FastAPI

from ..config import AppSettings
from ..logging import init_logging
from .routes import health, weather
from ..services.weather_service import WeatherService


def create_app(settings: Optional[AppSettings] = None, weather_service: Optional[WeatherService] = None) -> FastAPI:
    settings = settings or AppSettings()
    init_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service health and uptime"},
            {"name": "weather", "description": "Combined Earth and space weather"},
        ],
    )

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(weather.router, prefix="/v1/weather", tags=["weather"])

    app.state.settings = settings
    app.state.start_time = time.time()
    # No IO at startup; feeds are only contacted per request
    app.state.weather_service = weather_service or WeatherService(settings)

    return app


if __name__ == "__main__":
    import uvicorn

    s = AppSettings()
    uvicorn.run(create_app(s), host=s.host, port=s.port)
