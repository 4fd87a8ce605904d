"""Tests for decoding /WeatherForecast payloads."""

from datetime import date

import pytest

from weatherapp.ingest.forecast_mapper import (
    ForecastDecodeError,
    decode_forecast,
    decode_record,
)
from weatherapp.models.errors import ErrorKind
from weatherapp.models.forecast import ForecastRecord
from weatherapp.models.result import Failure, Success


class TestDecodeForecast:
    def test_fixture(self, forecast_payload: list[dict]):
        result = decode_forecast(forecast_payload)
        assert isinstance(result, Success)
        assert len(result.value) == len(forecast_payload)
        assert result.value[0] == ForecastRecord(date(2024, 1, 1), 20, 68, "Clear")

    def test_datetime_keeps_calendar_date(self, forecast_payload: list[dict]):
        records = decode_forecast(forecast_payload).value
        assert records[2].date == date(2024, 1, 3)
        assert records[2].summary is None

    def test_empty_array(self):
        assert decode_forecast([]) == Success([])

    def test_encode_then_decode_is_equal(self, forecast_payload: list[dict]):
        records = decode_forecast(forecast_payload).value
        again = decode_forecast([r.to_json() for r in records])
        assert again == Success(records)

    def test_not_an_array(self):
        result = decode_forecast({"date": "2024-01-01"})
        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.PARSING

    def test_none_payload(self):
        assert decode_forecast(None).error.kind == ErrorKind.PARSING

    def test_one_bad_element_fails_batch(self, forecast_payload: list[dict]):
        payload = forecast_payload + [{"date": "2024-01-06"}]
        result = decode_forecast(payload)
        assert isinstance(result, Failure)
        assert result.error.kind == ErrorKind.PARSING
        assert "Element 5" in result.error.raw_message

    def test_bad_date_fails_batch(self, forecast_payload: list[dict]):
        forecast_payload[1]["date"] = "yesterday"
        assert decode_forecast(forecast_payload).error.kind == ErrorKind.PARSING


class TestDecodeRecord:
    def test_missing_temperature_f_is_derived(self):
        record = decode_record({"date": "2024-01-01", "temperatureC": 10})
        assert record.temperature_f == 49
        assert record.summary is None

    @pytest.mark.parametrize(
        "obj",
        [
            {"temperatureC": 1},
            {"date": "2024-01-01"},
            {"date": "01/02/2024", "temperatureC": 1},
            {"date": 20240101, "temperatureC": 1},
            {"date": "2024-01-01", "temperatureC": "20"},
            {"date": "2024-01-01", "temperatureC": 20.5},
            {"date": "2024-01-01", "temperatureC": True},
            {"date": "2024-01-01", "temperatureC": 20, "temperatureF": "68"},
            {"date": "2024-01-01", "temperatureC": 20, "summary": 3},
            ["2024-01-01", 20],
        ],
    )
    def test_malformed(self, obj):
        with pytest.raises(ForecastDecodeError):
            decode_record(obj)

    def test_null_temperature_f_is_derived(self):
        record = decode_record({"date": "2024-01-01", "temperatureC": 0, "temperatureF": None})
        assert record.temperature_f == 32

    def test_timezone_datetime(self):
        record = decode_record({"date": "2024-03-09T23:00:00+01:00", "temperatureC": 4})
        assert record.date == date(2024, 3, 9)
