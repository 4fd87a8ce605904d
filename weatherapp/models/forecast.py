"""Forecast domain records."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ForecastRecord:
    date: date
    temperature_c: int
    temperature_f: int
    summary: str | None = None

    @property
    def formatted_date(self) -> str:
        return f"{self.date.day}/{self.date.month}/{self.date.year}"

    @property
    def celsius_label(self) -> str:
        return f"{self.temperature_c}°C"

    @property
    def fahrenheit_label(self) -> str:
        return f"{self.temperature_f}°F"

    def to_json(self) -> dict:
        """Encode to the wire shape served by /WeatherForecast."""
        return {
            "date": self.date.isoformat(),
            "temperatureC": self.temperature_c,
            "temperatureF": self.temperature_f,
            "summary": self.summary,
        }


def celsius_to_fahrenheit(temperature_c: int) -> int:
    # Same truncating conversion the backend uses
    return 32 + int(temperature_c / 0.5556)
