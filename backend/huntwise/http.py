"""
Process-wide httpx client for the upstream providers (Zippopotam, USNO,
Open-Meteo, Supabase). Opened and closed by the app lifespan.
"""
import logging
import httpx
from typing import Optional

log = logging.getLogger("huntwise.http")

client: Optional[httpx.AsyncClient] = None

# Per-call limits are enforced by fetch_with_fallback; these only stop a
# hung socket from outliving the request.
TRANSPORT_TIMEOUT = httpx.Timeout(connect=5.0, read=10.0, write=5.0, pool=10.0)

def _http2_enabled() -> bool:
    try:
        import h2  # noqa: F401
    except ImportError:
        log.info("h2 not installed; provider calls use HTTP/1.1 (pip install huntwise[http2])")
        return False
    return True

async def init_http():
    """Open the provider client. Safe to call once per process."""
    global client
    client = httpx.AsyncClient(
        timeout=TRANSPORT_TIMEOUT,
        http2=_http2_enabled(),
        limits=httpx.Limits(max_keepalive_connections=50, max_connections=100, keepalive_expiry=30),
        headers={
            "Accept": "application/json",
            "User-Agent": "HuntWise/1.0 (+https://huntwise.example.com)",
        },
    )

async def close_http():
    global client
    if client:
        await client.aclose()
        client = None

def get_http_client() -> httpx.AsyncClient:
    """Provider tools call this when no explicit client is passed in."""
    if client is None:
        raise RuntimeError("provider HTTP client is not open; init_http() runs in the app lifespan")
    return client
