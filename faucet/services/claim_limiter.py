"""Per-address claim cooldown tracking.

Keeps the time of the last successful claim for every address in memory.
State is lost on restart.

The lock only guards map access. Callers run ``check`` -> upstream call ->
``record`` without holding it, so two concurrent claims for the same address
can both pass ``check`` before either is recorded.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimDecision:
    """Result of a cooldown check."""
    allowed: bool
    remaining_seconds: int = 0


ALLOW = ClaimDecision(allowed=True)


class ClaimLimiter:
    """Tracks last-claim timestamps keyed by address."""

    def __init__(self, cooldown_seconds: int, prune_threshold: int = 10_000):
        self.cooldown_seconds = cooldown_seconds
        self.prune_threshold = prune_threshold
        self._last_claim: dict[str, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_claim)

    def __contains__(self, address: str) -> bool:
        with self._lock:
            return address in self._last_claim

    def check(self, address: str, now: Optional[float] = None) -> ClaimDecision:
        """Decide whether ``address`` may claim at ``now`` (monotonic seconds)."""
        if now is None:
            now = time.monotonic()
        with self._lock:
            last = self._last_claim.get(address)
        if last is None:
            return ALLOW

        elapsed = now - last
        if elapsed >= self.cooldown_seconds:
            return ALLOW

        remaining = max(1, math.floor(self.cooldown_seconds - elapsed))
        return ClaimDecision(allowed=False, remaining_seconds=min(remaining, self.cooldown_seconds))

    def record(self, address: str, now: Optional[float] = None) -> None:
        """Store a successful claim. Only call after the upstream confirmed it."""
        if now is None:
            now = time.monotonic()
        with self._lock:
            self._last_claim[address] = now
            oversized = len(self._last_claim) > self.prune_threshold
        if oversized:
            self.prune(now)

    def prune(self, now: Optional[float] = None) -> int:
        """Drop entries whose cooldown has expired. Returns the number removed."""
        if now is None:
            now = time.monotonic()
        with self._lock:
            expired = [
                address
                for address, last in self._last_claim.items()
                if now - last >= self.cooldown_seconds
            ]
            for address in expired:
                del self._last_claim[address]
        if expired:
            logger.info(f"Pruned {len(expired)} expired claim entries")
        return len(expired)
