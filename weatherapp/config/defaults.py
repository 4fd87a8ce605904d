"""Default endpoints and backend vocabulary."""

DEFAULT_API_BASE_URL = "http://localhost:5197/api"
WEATHER_FORECAST_PATH = "/WeatherForecast"

DEFAULT_CORS_ORIGINS: list[str] = ["https://weather.example.com"]

# Summary vocabulary served by the backend stub
FORECAST_SUMMARIES: tuple[str, ...] = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)
