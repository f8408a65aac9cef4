"""
ResponseHistory component

In-memory conversation history keyed by response id.
"""
import logging
import threading
import uuid
from collections import OrderedDict
from typing import List, Optional

from ..models.response import Response

logger = logging.getLogger(__name__)


class ResponseHistory:
    """
    Bounded, thread-safe, append-only response store

    Responses are never updated in place. Once ``capacity`` is reached the
    oldest response is evicted to make room.
    """

    def __init__(self, capacity: int = 1000):
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._responses: "OrderedDict[uuid.UUID, Response]" = OrderedDict()
        self._lock = threading.Lock()

    def add(self, response: Response) -> bool:
        """
        Record a response

        Returns:
            False if a response with the same id was already recorded
        """
        with self._lock:
            if response.id in self._responses:
                return False
            self._responses[response.id] = response
            while len(self._responses) > self.capacity:
                evicted, _ = self._responses.popitem(last=False)
                logger.debug(f"Evicted response {evicted} from history")
            return True

    def get(self, response_id: uuid.UUID) -> Optional[Response]:
        with self._lock:
            return self._responses.get(response_id)

    def __contains__(self, response_id: object) -> bool:
        with self._lock:
            return response_id in self._responses

    def __len__(self) -> int:
        with self._lock:
            return len(self._responses)

    def recent(self, limit: Optional[int] = None) -> List[Response]:
        """Responses oldest first, optionally only the last ``limit``"""
        with self._lock:
            responses = list(self._responses.values())
        if limit is None:
            return responses
        return responses[-limit:] if limit > 0 else []
