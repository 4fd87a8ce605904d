"""Backend stub serving /api/WeatherForecast for local development."""

import logging
import random
from datetime import UTC, datetime, timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weatherapp.config.defaults import FORECAST_SUMMARIES
from weatherapp.config.schema import BackendConfig, Environment
from weatherapp.models.forecast import ForecastRecord, celsius_to_fahrenheit

logger = logging.getLogger(__name__)

# Any port on these hosts is allowed in development
LOCAL_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?"


def generate_forecast(
    days: int, rng: random.Random, today: datetime | None = None
) -> list[ForecastRecord]:
    """Random forecast for the ``days`` days following ``today``."""
    if today is None:
        today = datetime.now(UTC)
    records = []
    for offset in range(1, days + 1):
        temperature_c = rng.randrange(-20, 55)
        records.append(
            ForecastRecord(
                date=(today + timedelta(days=offset)).date(),
                temperature_c=temperature_c,
                temperature_f=celsius_to_fahrenheit(temperature_c),
                summary=rng.choice(FORECAST_SUMMARIES),
            )
        )
    return records


def create_app(config: BackendConfig | None = None) -> FastAPI:
    config = config or BackendConfig()
    app = FastAPI(title="Weather Forecast API", version="0.1.0")

    if config.environment == Environment.DEVELOPMENT:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=LOCAL_ORIGIN_REGEX,
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        )

    @app.get("/api/WeatherForecast")
    def get_weather_forecast():
        """Upcoming daily forecast."""
        rng = random.Random(config.seed)
        return [r.to_json() for r in generate_forecast(config.days, rng)]

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}

    logger.info(
        "Backend configured: environment=%s days=%d", config.environment, config.days
    )
    return app


app = create_app()
