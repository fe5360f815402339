"""Observable holder for the current CoordinatorState."""

import asyncio
from typing import Callable, Optional

import structlog

from weather_lookup.models.state import CoordinatorState

logger = structlog.get_logger(__name__)

StateListener = Callable[[CoordinatorState], None]


class StateStore:
    """Single current value plus push notification on every change.

    Listeners run synchronously, in subscription order, right after each
    update. A listener that raises is logged and skipped.
    """

    def __init__(self, initial: Optional[CoordinatorState] = None):
        self._value = initial or CoordinatorState()
        self._listeners: list[StateListener] = []
        self._changed = asyncio.Event()

    @property
    def value(self) -> CoordinatorState:
        return self._value

    def subscribe(self, listener: StateListener, emit_current: bool = True) -> Callable[[], None]:
        """Register a listener and return a function that removes it.

        Args:
            listener: Called with the new state after each update
            emit_current: Call the listener once with the current value now
        """
        self._listeners.append(listener)
        if emit_current:
            self._notify_one(listener, self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> CoordinatorState:
        """Copy the current state with ``changes`` applied and publish it."""
        return self.set(self._value.model_copy(update=changes))

    def set(self, state: CoordinatorState) -> CoordinatorState:
        """Replace the current state wholesale and publish it."""
        self._value = state
        for listener in list(self._listeners):
            self._notify_one(listener, state)
        # Wake every waiter, then arm the event again for the next change
        self._changed.set()
        self._changed = asyncio.Event()
        return state

    def _notify_one(self, listener: StateListener, state: CoordinatorState) -> None:
        try:
            listener(state)
        except Exception as e:
            logger.error(
                "state_listener_failed",
                error=str(e),
                error_type=type(e).__name__,
            )

    async def wait_for(
        self,
        predicate: Callable[[CoordinatorState], bool],
        timeout: float = 5.0,
    ) -> CoordinatorState:
        """Wait until the current state satisfies ``predicate``.

        Raises:
            asyncio.TimeoutError: If no matching state appears in time
        """

        async def _wait() -> CoordinatorState:
            while not predicate(self._value):
                await self._changed.wait()
            return self._value

        return await asyncio.wait_for(_wait(), timeout)
