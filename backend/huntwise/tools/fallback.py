# backend/huntwise/tools/fallback.py
import asyncio
import logging
import time
from typing import Awaitable, Callable, Tuple, TypeVar

from huntwise.constants import Provenance

T = TypeVar("T")

log = logging.getLogger("huntwise.fallback")

def t(): return time.perf_counter()

async def fetch_with_fallback(
    name: str,
    primary: Callable[[], Awaitable[T]],
    fallback_factory: Callable[[], T],
    timeout: float,
) -> Tuple[T, Provenance]:
    """
    Run `primary()` under a bounded timeout. Any failure (timeout included)
    degrades once to `fallback_factory()`; no retry. Never raises.
    """
    start = t()
    try:
        value = await asyncio.wait_for(primary(), timeout=timeout)
    except asyncio.TimeoutError:
        log.warning("%s: timed out after %.1fs, using fallback", name, timeout)
        return fallback_factory(), Provenance.SIMULATED
    except Exception as e:
        log.warning("%s: failed (%s), using fallback", name, e)
        return fallback_factory(), Provenance.SIMULATED

    log.info("%s: %dms", name, round((t() - start) * 1000))
    return value, Provenance.LIVE
