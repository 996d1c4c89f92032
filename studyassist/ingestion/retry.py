import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from studyassist.logging.logger import Log

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with a fixed delay between attempts.

    ``sleep`` is injectable so the policy can be tested without waiting.
    """

    max_attempts: int = 2
    delay_seconds: float = 0.8
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def run(self, func: Callable[[], T], *, label: str = "call") -> T:
        """Call *func* until it returns, re-raising the last error after max_attempts."""

        def log_retry(retry_state: RetryCallState) -> None:
            exc = retry_state.outcome.exception() if retry_state.outcome else None
            Log.warning(
                f"{label} failed, retrying in {self.delay_seconds}s",
                attempt=retry_state.attempt_number,
                error=str(exc),
            )

        retrying = Retrying(
            stop=stop_after_attempt(max(1, self.max_attempts)),
            wait=wait_fixed(self.delay_seconds),
            retry=retry_if_exception_type(self.retry_on),
            sleep=self.sleep,
            before_sleep=log_retry,
            reraise=True,
        )
        return retrying(func)


NO_RETRY = RetryPolicy(max_attempts=1, delay_seconds=0.0)
