"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from tenki.api.views import HistoryView, WeatherView

urlpatterns = [
    path("weather", WeatherView.as_view(), name="weather"),
    path("history", HistoryView.as_view(), name="history"),
]
