"""Sliding-Window Rate Limiter — per-key request counting over a trailing window.

Invariants:
    - A key is limited once it has max_requests hits inside the trailing window
    - Rejected hits are not recorded (a blocked client does not extend its own ban)
    - Timestamps are supplied by the caller: no clock reads, deterministic under test

Design Decisions:
    - In-process dict over Redis: single uvicorn worker, state lost on restart is acceptable
    - Idle keys are pruned from inside hit() at most once per window, never by a
      background task: memory stays bounded by the clients seen in the last window
"""

from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True)
class RateDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after_seconds: int


class SlidingWindowLimiter:
    def __init__(self, max_requests: int, window_seconds: float):
        if max_requests <= 0 or window_seconds <= 0:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = {}
        self._last_prune: float | None = None

    def hit(self, key: str, now: float) -> RateDecision:
        if self._last_prune is None:
            self._last_prune = now
        elif now - self._last_prune >= self.window_seconds:
            self.prune(now)

        hits = self._hits.setdefault(key, deque())
        window_start = now - self.window_seconds
        while hits and hits[0] <= window_start:
            hits.popleft()

        allowed = len(hits) < self.max_requests
        if allowed:
            hits.append(now)

        oldest = hits[0] if hits else now
        reset_after = max(0, int(round(oldest + self.window_seconds - now)))
        return RateDecision(
            allowed=allowed,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - len(hits)),
            reset_after_seconds=reset_after,
        )

    def __len__(self) -> int:
        return len(self._hits)

    def prune(self, now: float) -> None:
        self._last_prune = now
        window_start = now - self.window_seconds
        for key in [k for k, h in self._hits.items() if not h or h[-1] <= window_start]:
            del self._hits[key]

    def reset(self) -> None:
        self._hits.clear()
        self._last_prune = None
