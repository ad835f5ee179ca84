from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Mapping, Optional

from app.core.config import (
    RATE_LIMIT_PER_MINUTE,
    RATE_LIMIT_SELECTION_PER_MINUTE,
    RATE_LIMIT_WINDOW_SECONDS,
)

# Selection actions fire on every click in the customization dialog.
DEFAULT_ROUTE_LIMITS = {"addons/selection": RATE_LIMIT_SELECTION_PER_MINUTE}


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: int


class RateLimiterService(ABC):
    @abstractmethod
    def check(self, *, tenant: str, route: str) -> RateLimitDecision:
        """Decide se a chamada do tenant para a rota ainda cabe na janela."""


class InMemoryRateLimiterService(RateLimiterService):
    """Janela deslizante em memória, um balde por (tenant, rota)."""

    def __init__(
        self,
        *,
        limit: int = RATE_LIMIT_PER_MINUTE,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        route_limits: Optional[Mapping[str, int]] = None,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self.route_limits = dict(DEFAULT_ROUTE_LIMITS if route_limits is None else route_limits)
        self._buckets: dict[tuple[str, str], deque[float]] = {}
        self._lock = Lock()

    def limit_for(self, route: str) -> int:
        return self.route_limits.get(route, self.limit)

    def check(self, *, tenant: str, route: str) -> RateLimitDecision:
        limit = self.limit_for(route)
        now = time.monotonic()

        with self._lock:
            bucket = self._buckets.setdefault((tenant, route), deque())
            while bucket and now - bucket[0] >= self.window_seconds:
                bucket.popleft()

            if len(bucket) < limit:
                bucket.append(now)
                return RateLimitDecision(True, limit, limit - len(bucket), 0)

            oldest_age = now - bucket[0]
            return RateLimitDecision(False, limit, 0, max(1, int(self.window_seconds - oldest_age)))

    def reset(self, tenant: Optional[str] = None) -> None:
        with self._lock:
            if tenant is None:
                self._buckets.clear()
                return
            for key in [key for key in self._buckets if key[0] == tenant]:
                del self._buckets[key]
