# backend/huntwise/tools/history.py
import datetime as dt
import logging
import time
from typing import Optional

import httpx

from huntwise.config import settings
from huntwise.errors import ProviderUnavailable
from huntwise.http import get_http_client

log = logging.getLogger("huntwise.history")

def t(): return time.perf_counter()

def _count_from_headers(r: httpx.Response) -> Optional[int]:
    # PostgREST: "Content-Range: 0-2/3" (or "*/0" when empty)
    cr = r.headers.get("content-range")
    if not cr or "/" not in cr:
        return None
    total = cr.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None

async def count_recent_harvests(
    postal_code: str,
    window_days: int = 30,
    now: Optional[dt.date] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> int:
    """
    Number of trophy records logged for `postal_code` with a kill date in
    the trailing `window_days`.
    """
    if not settings.history_configured:
        raise ProviderUnavailable("history", "SUPABASE_URL / SUPABASE_ANON_KEY not set")

    start = t()
    since = (now or dt.date.today()) - dt.timedelta(days=window_days)
    url = f"{settings.SUPABASE_URL.rstrip('/')}/rest/v1/{settings.TROPHY_TABLE}"
    params = {
        "select": "id",
        "zip_code": f"eq.{postal_code}",
        "kill_date": f"gte.{since.isoformat()}",
    }
    headers = {
        "apikey": settings.SUPABASE_ANON_KEY,
        "Authorization": f"Bearer {settings.SUPABASE_ANON_KEY}",
        "Prefer": "count=exact",
    }

    client = client or get_http_client()
    try:
        r = await client.get(url, params=params, headers=headers)
        r.raise_for_status()
        count = _count_from_headers(r)
        if count is None:
            rows = r.json()
            if not isinstance(rows, list):
                raise ValueError("expected a list of rows")
            count = len(rows)
    except httpx.HTTPError as e:
        raise ProviderUnavailable("history", str(e)) from e
    except ValueError as e:
        raise ProviderUnavailable("history", f"malformed response: {e}") from e

    log.info("History %s (%dd): %d records in %dms", postal_code, window_days, count,
             round((t() - start) * 1000))
    return count
