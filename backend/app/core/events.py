import logging
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)


class ChangeEvents:
    """
    In-process change feed. Services publish after a successful commit;
    listeners (the WebSocket manager) push fresh snapshots to subscribers.
    """
    def __init__(self):
        self._listeners: List[Callable] = []

    def subscribe(self, callback: Callable):
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable):
        if callback in self._listeners:
            self._listeners.remove(callback)

    async def publish(self, channel: str, payload: Dict[str, Any]):
        for listener in self._listeners:
            try:
                await listener(channel, payload)
            except Exception:
                # A broken listener must not fail the write that triggered it
                logger.exception("Change listener failed for channel %s", channel)


change_events = ChangeEvents()
