"""Forecast orchestrator: turns load/refresh intents into view states.

Intents run strictly in arrival order, one at a time. Each intent enters
Loading, calls the repository once and lands in Loaded or Error. Every
dispatch takes a sequence number; a result is discarded when a newer intent
is still pending. An intent that is cancelled (queued or in flight) drops out
of the pending set, and if nothing newer remains the orchestrator settles on
the most recent finished outcome instead of staying in Loading.

Listeners are notified after the state is updated. A listener that raises is
logged and does not affect the transition.
"""

import asyncio
import logging
from collections.abc import Callable

from weatherapp.models.errors import ErrorInfo, ErrorKind
from weatherapp.models.forecast import ForecastRecord
from weatherapp.models.result import Failure, Result, Success
from weatherapp.models.state import Error, Initial, Intent, Loaded, Loading, ViewState
from weatherapp.repository.forecast_repository import ForecastRepository

logger = logging.getLogger(__name__)

StateListener = Callable[[ViewState], None]


class ForecastOrchestrator:
    def __init__(self, repository: ForecastRepository):
        self.repository = repository
        self._state: ViewState = Initial()
        self._lock = asyncio.Lock()
        self._issued = 0
        self._pending: set[int] = set()
        # Newest finished outcome, applied or superseded
        self._last_outcome: ViewState = Initial()
        self._last_intent: Intent | None = None
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback for every state transition. Returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load(self) -> ViewState:
        return await self.dispatch(Intent.LOAD)

    async def refresh(self) -> ViewState:
        return await self.dispatch(Intent.REFRESH)

    async def retry(self) -> ViewState:
        """Re-issue the last intent, or load if nothing was dispatched yet."""
        return await self.dispatch(self._last_intent or Intent.LOAD)

    async def dispatch(self, intent: Intent) -> ViewState:
        self._issued += 1
        seq = self._issued
        self._pending.add(seq)
        self._last_intent = intent

        try:
            async with self._lock:
                self._set_state(Loading(intent))
                try:
                    result = await self._call_repository(intent)
                    new_state = _state_from_result(result)
                except Exception:
                    logger.exception("Unexpected failure handling %s intent", intent)
                    new_state = _error_state(
                        ErrorInfo(ErrorKind.UNKNOWN, "Unhandled exception in repository")
                    )
                self._last_outcome = new_state

                newest = max(self._pending)
                if seq != newest:
                    logger.debug(
                        "Discarding stale %s result (seq %d, newest %d)",
                        intent, seq, newest,
                    )
                else:
                    self._set_state(new_state)
                return self._state
        finally:
            self._pending.discard(seq)
            if not self._pending and isinstance(self._state, Loading):
                logger.info(
                    "%s intent (seq %d) cancelled, settling on last outcome",
                    intent, seq,
                )
                self._set_state(self._last_outcome)

    async def _call_repository(self, intent: Intent) -> Result[list[ForecastRecord]]:
        match intent:
            case Intent.LOAD:
                return await self.repository.get_forecast()
            case Intent.REFRESH:
                return await self.repository.refresh()
            case _:
                raise ValueError(f"Unknown intent: {intent!r}")

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed on %s", listener, state)


def _state_from_result(result: Result[list[ForecastRecord]]) -> ViewState:
    match result:
        case Success(value=records):
            return Loaded(tuple(records))
        case Failure(error=err):
            return _error_state(err)
        case _:
            raise TypeError(f"Repository returned a non-Result value: {result!r}")


def _error_state(error: ErrorInfo) -> Error:
    return Error(message=error.user_message, kind=error.kind)
