"""Forecast repository: the single seam the orchestrator depends on."""

import logging
from datetime import date, datetime
from typing import Protocol

from weatherapp.config.defaults import WEATHER_FORECAST_PATH
from weatherapp.ingest.forecast_mapper import decode_forecast
from weatherapp.ingest.retry import Fetcher
from weatherapp.models.errors import ErrorInfo, ErrorKind
from weatherapp.models.forecast import ForecastRecord
from weatherapp.models.result import Failure, Result, Success

logger = logging.getLogger(__name__)


class ForecastRepository(Protocol):
    async def get_forecast(self) -> Result[list[ForecastRecord]]: ...

    async def get_by_date(self, day: date) -> Result[ForecastRecord]: ...

    async def refresh(self) -> Result[list[ForecastRecord]]: ...


class HttpForecastRepository:
    """Fetches the full forecast over HTTP on every call. No caching."""

    def __init__(self, client: Fetcher, path: str = WEATHER_FORECAST_PATH):
        self.client = client
        self.path = path

    async def get_forecast(self) -> Result[list[ForecastRecord]]:
        match await self.client.fetch(self.path):
            case Success(value=payload):
                return decode_forecast(payload)
            case Failure() as failure:
                logger.info("Forecast fetch failed: %s", failure.error)
                return failure

    async def get_by_date(self, day: date) -> Result[ForecastRecord]:
        """Look up one day by fetching the whole forecast and filtering.

        The upstream dataset is small and unpaginated, so a full fetch per
        lookup is acceptable.
        """
        if isinstance(day, datetime):
            day = day.date()
        match await self.get_forecast():
            case Success(value=records):
                for record in records:
                    if record.date == day:
                        return Success(record)
                return Failure(
                    ErrorInfo(
                        ErrorKind.NOT_FOUND,
                        f"No forecast for {day.isoformat()} "
                        f"among {len(records)} records",
                    )
                )
            case Failure() as failure:
                return failure

    async def refresh(self) -> Result[list[ForecastRecord]]:
        return await self.get_forecast()
