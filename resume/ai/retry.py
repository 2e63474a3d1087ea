# resume/ai/retry.py
import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    before_sleep_log
)

from resume.errors import ModelInvocationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, ModelInvocationError) and exc.retryable


@dataclass
class RetryPolicy:
    """Bounded exponential backoff around model invocations"""
    max_attempts: int = 3
    multiplier: float = 1.0
    wait_min: float = 2.0
    wait_max: float = 30.0

    @classmethod
    def no_retry(cls) -> "RetryPolicy":
        return cls(max_attempts=1)

    @classmethod
    def from_config(cls, config) -> "RetryPolicy":
        return cls(
            max_attempts=config.max_attempts,
            multiplier=config.backoff_multiplier,
            wait_min=config.backoff_min,
            wait_max=config.backoff_max
        )

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Run fn, retrying only retryable ModelInvocationErrors"""
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.multiplier,
                min=self.wait_min,
                max=self.wait_max
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        return retrying(fn, *args, **kwargs)
