"""CLI entry point for the weather forecast client."""

import argparse
import asyncio
import logging
from datetime import date

from pydantic import ValidationError

from weatherapp.config.loader import get_config_value, load_config, with_overrides
from weatherapp.config.schema import AppConfig
from weatherapp.ingest.api_client import ApiClient
from weatherapp.ingest.retry import RetryingApiClient, RetryPolicy
from weatherapp.models.result import Failure, Success
from weatherapp.models.state import Error, Loaded
from weatherapp.pipeline.orchestrator import ForecastOrchestrator
from weatherapp.reporting.formatters import (
    format_record_line,
    format_state_json,
    format_state_text,
)
from weatherapp.repository.forecast_repository import HttpForecastRepository


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherapp",
        description="Weather forecast client",
    )
    parser.add_argument(
        "--config", help="Config YAML path, e.g. configs/default.yaml"
    )
    parser.add_argument("--base-url", help="Override api.base_url")

    sub = parser.add_subparsers(dest="command")

    # forecast
    forecast_p = sub.add_parser("forecast", help="Load and show the forecast")
    forecast_p.add_argument("--json", action="store_true", help="JSON output")

    # lookup
    lookup_p = sub.add_parser("lookup", help="Show the forecast for one date")
    lookup_p.add_argument("date", type=date.fromisoformat, help="YYYY-MM-DD")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. api.timeout_ms")

    # serve
    serve_p = sub.add_parser("serve", help="Run the backend stub")
    serve_p.add_argument("--host", help="Bind host")
    serve_p.add_argument("--port", type=int, help="Bind port")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = with_overrides(load_config(args.config), base_url=args.base_url)
    except ValidationError as e:
        print(f"Invalid config: {e}")
        return 1

    logging.basicConfig(
        level=logging.INFO if config.api.enable_logging else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "forecast":
        return asyncio.run(_cmd_forecast(config, args))
    elif args.command == "lookup":
        return asyncio.run(_cmd_lookup(config, args))
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _build_client(config: AppConfig) -> tuple[ApiClient, RetryingApiClient]:
    transport = ApiClient(config.api)
    return transport, RetryingApiClient(transport, RetryPolicy.from_config(config.api))


async def _cmd_forecast(config: AppConfig, args) -> int:
    transport, client = _build_client(config)
    async with transport:
        orchestrator = ForecastOrchestrator(HttpForecastRepository(client))
        state = await orchestrator.load()

    print(format_state_json(state) if args.json else format_state_text(state))
    match state:
        case Loaded():
            return 0
        case Error():
            return 1
        case _:
            return 1


async def _cmd_lookup(config: AppConfig, args) -> int:
    transport, client = _build_client(config)
    async with transport:
        result = await HttpForecastRepository(client).get_by_date(args.date)

    match result:
        case Success(value=record):
            print(format_record_line(record))
            return 0
        case Failure(error=err):
            print(f"Error: {err.user_message}")
            return 1


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weatherapp.backend.app import create_app

    backend = config.backend
    uvicorn.run(
        create_app(backend),
        host=args.host or backend.host,
        port=args.port or backend.port,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
