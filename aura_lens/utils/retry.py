import logging
import time
from typing import Callable

import httpx

_log = logging.getLogger(__name__)


def http_call_with_retry(
    fn: Callable[..., httpx.Response], *args, max_retries: int = 4, **kwargs
) -> httpx.Response:
    """Call an httpx request function, backing off on HTTP 429.

    Waits 1, 2, 4 seconds between attempts. The last response is returned
    as-is, so callers still see the 429 once retries run out.
    """
    for attempt in range(max_retries):
        response = fn(*args, **kwargs)
        if response.status_code != 429 or attempt == max_retries - 1:
            return response
        wait = 2 ** attempt
        _log.warning("rate limited by %s, retrying in %ss", response.request.url.host, wait)
        time.sleep(wait)
    return response
