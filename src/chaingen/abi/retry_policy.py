# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Retry policies for remote ABI registry calls.

Built on tenacity. Policies are decorator factories so callers can wrap
either sync or async callables; exhausted retries surface as
``tenacity.RetryError`` with the last exception attached.
"""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class RegistryServerError(Exception):
    """Transient registry failure: a 5xx or 429 response."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Registry returned HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    httpx.TransportError,
    RegistryServerError,
    ConnectionError,
    TimeoutError,
)


def create_registry_retry_policy(
    max_attempts: int = 3,
    wait_min: float = 0.5,
    wait_max: float = 8.0,
    multiplier: float = 1.0,
):
    """Create the retry decorator used for registry requests.

    Retries transport failures (connect errors, timeouts) and transient server
    responses with exponential backoff. Client errors such as 404 are not
    retried.

    Args:
        max_attempts: Total attempts including the first.
        wait_min: Minimum backoff in seconds.
        wait_max: Maximum backoff in seconds.
        multiplier: Exponential backoff multiplier.

    Returns:
        A tenacity retry decorator.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, min=wait_min, max=wait_max),
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


__all__ = ["RETRYABLE_EXCEPTIONS", "RegistryServerError", "create_registry_retry_policy"]
