from __future__ import annotations

import pytest

from tenki.core.entities import celsius_to_fahrenheit, fahrenheit_to_celsius


def test_celsius_to_fahrenheit_reference_points():
    assert celsius_to_fahrenheit(20.0) == 68.0
    assert celsius_to_fahrenheit(0.0) == 32.0
    assert celsius_to_fahrenheit(-40.0) == -40.0
    assert celsius_to_fahrenheit(22.0) == pytest.approx(71.6)


@pytest.mark.parametrize("celsius", [-12.5, 0.0, 13.3, 36.6, 100.0])
def test_fahrenheit_round_trip(celsius):
    assert fahrenheit_to_celsius(celsius_to_fahrenheit(celsius)) == pytest.approx(celsius)
