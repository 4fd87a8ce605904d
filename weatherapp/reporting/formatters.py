"""Output formatters for orchestrator view states."""

import json

from weatherapp.models.forecast import ForecastRecord
from weatherapp.models.state import Error, Initial, Loaded, Loading, ViewState


def format_state_text(state: ViewState) -> str:
    """Plain text rendering for the terminal."""
    match state:
        case Initial():
            return "No forecast loaded yet."
        case Loading(intent=intent):
            return f"Loading forecast ({intent})..."
        case Loaded(records=records, stats=stats):
            if not records:
                return "Forecast is empty."
            lines = [f"=== Forecast | {stats.count} days ==="]
            lines.extend(format_record_line(r) for r in records)
            lines.append(
                f"Min: {stats.minimum}°C | Max: {stats.maximum}°C | "
                f"Mean: {stats.mean:.1f}°C"
            )
            return "\n".join(lines)
        case Error(message=message):
            return f"Error: {message}\nRun the command again to retry."
        case _:
            raise TypeError(f"Unknown view state: {state!r}")


def format_record_line(record: ForecastRecord) -> str:
    return (
        f"{record.date.isoformat()}  {record.celsius_label:>6}  "
        f"{record.fahrenheit_label:>6}  {record.summary or '-'}"
    )


def format_state_json(state: ViewState) -> str:
    """JSON rendering for programmatic consumption."""
    match state:
        case Initial():
            data: dict = {"state": "initial"}
        case Loading(intent=intent):
            data = {"state": "loading", "intent": str(intent)}
        case Loaded(records=records, stats=stats):
            data = {
                "state": "loaded",
                "records": [r.to_json() for r in records],
                "stats": {
                    "min_c": stats.minimum,
                    "max_c": stats.maximum,
                    "mean_c": round(stats.mean, 2),
                    "count": stats.count,
                },
            }
        case Error(message=message, kind=kind):
            data = {"state": "error", "kind": str(kind), "message": message}
        case _:
            raise TypeError(f"Unknown view state: {state!r}")
    return json.dumps(data, indent=2, ensure_ascii=False)
