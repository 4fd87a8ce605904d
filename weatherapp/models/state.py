"""Intents and view states produced by the forecast orchestrator."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

from weatherapp.models.errors import ErrorKind
from weatherapp.models.forecast import ForecastRecord


class Intent(StrEnum):
    LOAD = "load"
    REFRESH = "refresh"


@dataclass(frozen=True)
class SummaryStats:
    minimum: int
    maximum: int
    mean: float
    count: int

    @classmethod
    def from_records(cls, records: list[ForecastRecord]) -> "SummaryStats":
        """Celsius min/max/mean over the records. Empty input gives zeros."""
        if not records:
            return cls(minimum=0, maximum=0, mean=0.0, count=0)
        temps = [r.temperature_c for r in records]
        return cls(
            minimum=min(temps),
            maximum=max(temps),
            mean=sum(temps) / len(temps),
            count=len(temps),
        )


@dataclass(frozen=True)
class Initial:
    pass


@dataclass(frozen=True)
class Loading:
    intent: Intent = Intent.LOAD


@dataclass(frozen=True)
class Loaded:
    records: tuple[ForecastRecord, ...]
    stats: SummaryStats = field(init=False)

    def __post_init__(self) -> None:
        # Computed once on entry, not per read
        object.__setattr__(self, "stats", SummaryStats.from_records(list(self.records)))


@dataclass(frozen=True)
class Error:
    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN


ViewState: TypeAlias = Initial | Loading | Loaded | Error
