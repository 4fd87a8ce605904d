"""Decode /WeatherForecast JSON into ForecastRecord lists.

Decoding is all-or-nothing: a single malformed element fails the batch.
"""

import logging
from datetime import date, datetime
from typing import Any

from weatherapp.models.errors import ErrorInfo, ErrorKind
from weatherapp.models.forecast import ForecastRecord, celsius_to_fahrenheit
from weatherapp.models.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class ForecastDecodeError(ValueError):
    """A forecast element is missing fields or has a bad value."""


def decode_forecast(payload: Any) -> Result[list[ForecastRecord]]:
    """Decode a JSON array of forecast objects."""
    if not isinstance(payload, list):
        return Failure(
            ErrorInfo(
                ErrorKind.PARSING,
                f"Expected a JSON array, got {type(payload).__name__}",
            )
        )

    records: list[ForecastRecord] = []
    for index, item in enumerate(payload):
        try:
            records.append(decode_record(item))
        except ForecastDecodeError as e:
            logger.warning("Rejecting forecast batch at element %d: %s", index, e)
            return Failure(ErrorInfo(ErrorKind.PARSING, f"Element {index}: {e}"))
    return Success(records)


def decode_record(obj: Any) -> ForecastRecord:
    """Decode one forecast object. Raises ForecastDecodeError."""
    if not isinstance(obj, dict):
        raise ForecastDecodeError(f"expected an object, got {type(obj).__name__}")

    if "date" not in obj:
        raise ForecastDecodeError("missing required field 'date'")
    if "temperatureC" not in obj:
        raise ForecastDecodeError("missing required field 'temperatureC'")

    day = _parse_date(obj["date"])
    temperature_c = _parse_int(obj["temperatureC"], "temperatureC")

    if obj.get("temperatureF") is None:
        temperature_f = celsius_to_fahrenheit(temperature_c)
    else:
        temperature_f = _parse_int(obj["temperatureF"], "temperatureF")

    summary = obj.get("summary")
    if summary is not None and not isinstance(summary, str):
        raise ForecastDecodeError(
            f"'summary' must be a string or null, got {type(summary).__name__}"
        )

    return ForecastRecord(
        date=day,
        temperature_c=temperature_c,
        temperature_f=temperature_f,
        summary=summary,
    )


def _parse_date(value: Any) -> date:
    """Parse an ISO-8601 date or date-time, keeping the calendar date."""
    if not isinstance(value, str):
        raise ForecastDecodeError(f"'date' must be a string, got {type(value).__name__}")
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise ForecastDecodeError(f"'date' is not ISO-8601: {value!r}") from None


def _parse_int(value: Any, name: str) -> int:
    # bool is an int subclass; JSON true/false is not a temperature
    if isinstance(value, bool) or not isinstance(value, int):
        raise ForecastDecodeError(f"'{name}' must be an integer, got {value!r}")
    return value
