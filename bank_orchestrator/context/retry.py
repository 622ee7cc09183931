"""
User-triggered retry.

A RetryableOperation remembers how to run a load so the UI can offer a
"Retry" control after a failure. It never retries by itself.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from bank_orchestrator.logging_config import get_logger

logger = get_logger("bank_orchestrator.retry")

T = TypeVar("T")


class RetryableOperation(Generic[T]):
    """
    Wraps an async zero-argument callable.

    Each run() gets a generation number. Only the newest run publishes its
    outcome to `latest` / `last_error`; an older run that settles later still
    returns (or raises) to its own caller but does not overwrite the newer state.
    """

    def __init__(self, operation: Callable[[], Awaitable[T]], name: str = "operation"):
        self.operation = operation
        self.name = name
        self.attempts = 0
        self.latest: Optional[T] = None
        self.last_error: Optional[BaseException] = None
        self._generation = 0

    @property
    def failed(self) -> bool:
        return self.last_error is not None

    async def run(self) -> T:
        self.attempts += 1
        attempt = self.attempts
        self._generation += 1
        generation = self._generation
        logger.info("Running %s (attempt %d)", self.name, attempt)

        try:
            result = await self.operation()
        except Exception as e:
            if generation == self._generation:
                self.last_error = e
            logger.warning("%s attempt %d failed: %s", self.name, attempt, e)
            raise

        if generation == self._generation:
            self.latest = result
            self.last_error = None
        else:
            logger.info("Discarding stale %s result (generation %d)", self.name, generation)
        return result

    # alias used by UI retry controls
    retry = run

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "attempts": self.attempts,
            "failed": self.failed,
            "error": str(self.last_error) if self.last_error else None,
        }
