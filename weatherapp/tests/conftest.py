"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weatherapp.config.schema import ApiConfig, AppConfig

TEST_BASE_URL = "https://test-weather.example.com/api"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forecast_payload(fixtures_dir: Path) -> list[dict]:
    with open(fixtures_dir / "weather_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(base_url=TEST_BASE_URL, timeout_ms=2000, retry_base_delay_s=0.0)


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"base_url": TEST_BASE_URL, "timeout_ms": 1500},
        "backend": {"days": 3, "seed": 7},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
