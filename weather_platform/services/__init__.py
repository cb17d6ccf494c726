from .earth_service import EarthService
from .space_service import SpaceService
from .weather_service import WeatherService

__all__ = ["EarthService", "SpaceService", "WeatherService"]
