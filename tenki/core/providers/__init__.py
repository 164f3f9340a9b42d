from .base import WeatherProvider
from .kujira import KujiraWeatherProvider
from .weatherapi import WeatherApiProvider

__all__ = ["KujiraWeatherProvider", "WeatherApiProvider", "WeatherProvider"]
