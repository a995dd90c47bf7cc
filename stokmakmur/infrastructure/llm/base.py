"""
Shared resilience for LLM providers.

Transient transport failures (TimeoutError, ConnectionError) are retried
with exponential backoff via tenacity. Every call that still fails after
retrying counts towards a circuit breaker; once it trips, calls fail fast
until the cooldown has passed.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from stokmakmur.config import get_logger, get_settings
from stokmakmur.core.exceptions import (
    CircuitBreakerOpenError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from stokmakmur.core.interfaces.llm import HealthStatus, ILLMProvider

logger = get_logger(__name__)

T = TypeVar("T")

TRANSIENT_ERRORS = (TimeoutError, ConnectionError)


@dataclass
class CircuitBreaker:
    """Consecutive-failure breaker with a half-open probe after cooldown."""

    failure_threshold: int = 3
    cooldown_seconds: int = 60
    failures: int = 0
    opened_at: float | None = field(default=None)

    @property
    def is_open(self) -> bool:
        return self.opened_at is not None

    def remaining(self) -> int:
        if self.opened_at is None:
            return 0
        return max(0, int(self.cooldown_seconds - (time.monotonic() - self.opened_at)))

    def before_call(self, provider: str) -> None:
        """Raise while open; let one probe through once the cooldown is over."""
        if self.opened_at is None:
            return
        remaining = self.remaining()
        if remaining > 0:
            raise CircuitBreakerOpenError(provider, remaining)
        logger.info("circuit_breaker_half_open", provider=provider)

    def on_success(self) -> None:
        if self.is_open:
            logger.info("circuit_breaker_closed")
        self.failures = 0
        self.opened_at = None

    def on_failure(self) -> None:
        self.failures += 1
        if self.failures >= self.failure_threshold:
            self.opened_at = time.monotonic()
            logger.warning(
                "circuit_breaker_opened",
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("llm_retry", attempt=retry_state.attempt_number, error=str(error))


class BaseLLMProvider(ILLMProvider, ABC):
    """ILLMProvider with retry and circuit breaking around remote calls."""

    provider_name = "llm"

    def __init__(self) -> None:
        llm = get_settings().llm
        self.circuit_breaker = CircuitBreaker(
            failure_threshold=llm.failure_threshold,
            cooldown_seconds=llm.cooldown_seconds,
        )

    def _retrying(self) -> AsyncRetrying:
        llm = get_settings().llm
        return AsyncRetrying(
            stop=stop_after_attempt(max(1, llm.max_retries)),
            wait=wait_exponential(
                multiplier=llm.retry_delay,
                min=llm.retry_delay,
                max=llm.retry_delay * llm.retry_multiplier**3,
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=_log_retry,
            reraise=True,
        )

    async def _with_resilience(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run operation under the breaker, retrying transient failures.

        Raises:
            CircuitBreakerOpenError: breaker is open
            LLMTimeoutError: every attempt timed out
            LLMUnavailableError: provider unreachable after retries
        """
        self.circuit_breaker.before_call(self.provider_name)

        try:
            async for attempt in self._retrying():
                with attempt:
                    result = await operation()
        except TimeoutError as e:
            self.circuit_breaker.on_failure()
            raise LLMTimeoutError(get_settings().llm.timeout) from e
        except ConnectionError as e:
            self.circuit_breaker.on_failure()
            raise LLMUnavailableError(self.provider_name, str(e)) from e

        self.circuit_breaker.on_success()
        return result

    def _health_unavailable(self, error: str) -> HealthStatus:
        return HealthStatus(available=False, provider=self.provider_name, error=error)
