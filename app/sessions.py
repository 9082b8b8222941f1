from collections import OrderedDict
import logging
from typing import Callable
import uuid

from domain.services import Kitchen


logger = logging.getLogger(__name__)


class KitchenStore:
    """One `Kitchen` per browser, in memory. Gone on restart.

    Holds at most `max_sessions` kitchens; the least recently used one is
    dropped first.
    """

    def __init__(
        self, factory: Callable[[], Kitchen], *, max_sessions: int = 1000
    ) -> None:
        self.factory = factory
        self.max_sessions = max(1, max_sessions)
        self._kitchens: OrderedDict[str, Kitchen] = OrderedDict()

    def __len__(self) -> int:
        return len(self._kitchens)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._kitchens

    def get(self, session_id: str | None) -> tuple[str, Kitchen]:
        if session_id is not None and session_id in self._kitchens:
            self._kitchens.move_to_end(session_id)
            return session_id, self._kitchens[session_id]
        session_id = uuid.uuid4().hex
        logger.debug("New kitchen %s", session_id)
        kitchen = self.factory()
        self._kitchens[session_id] = kitchen
        while len(self._kitchens) > self.max_sessions:
            evicted, _ = self._kitchens.popitem(last=False)
            logger.debug("Evicted kitchen %s", evicted)
        return session_id, kitchen
