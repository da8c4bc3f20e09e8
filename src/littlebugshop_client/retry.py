"""Polling helper for endpoints that reach the expected state eventually."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import httpx

from littlebugshop_client.exceptions import StatusNotReachedError

logger = logging.getLogger(__name__)


async def retry_until_status(
    fn: Callable[[], Awaitable[httpx.Response]],
    expected_status: int = 200,
    max_attempts: int = 5,
    delay: float = 1.0,
) -> httpx.Response:
    """
    Call ``fn`` until it returns a response with ``expected_status``.

    Args:
        fn: Coroutine function sending the request
        expected_status: Status code to wait for
        max_attempts: Maximum number of calls
        delay: Seconds to sleep between calls

    Returns:
        The first response with the expected status

    Raises:
        StatusNotReachedError: If no attempt returned the expected status
        Exception: Whatever ``fn`` raised on the last attempt
    """
    last_response: Optional[httpx.Response] = None

    for attempt in range(1, max_attempts + 1):
        try:
            last_response = await fn()
        except Exception as e:
            if attempt == max_attempts:
                raise
            logger.warning(f"Attempt {attempt}/{max_attempts} raised {e!r}, retrying in {delay}s")
            await asyncio.sleep(delay)
            continue

        if last_response.status_code == expected_status:
            return last_response

        logger.debug(
            f"Attempt {attempt}/{max_attempts}: got {last_response.status_code}, "
            f"waiting for {expected_status}"
        )
        if attempt < max_attempts:
            await asyncio.sleep(delay)

    raise StatusNotReachedError(
        expected_status,
        max_attempts,
        last_response.status_code if last_response is not None else None,
    )
