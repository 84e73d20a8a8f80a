"""
Tests for huntwise/http.py.

What we test
------------
  - get_http_client() refuses to hand out a client before init_http().
  - init_http() opens a client carrying the JSON Accept / HuntWise User-Agent headers.
  - close_http() closes it and resets the module state.
"""

from __future__ import annotations

import httpx
import pytest

from huntwise import http


@pytest.mark.asyncio
async def test_client_lifecycle():
    assert http.client is None
    with pytest.raises(RuntimeError):
        http.get_http_client()

    await http.init_http()
    try:
        c = http.get_http_client()
        assert isinstance(c, httpx.AsyncClient)
        assert c.headers["Accept"] == "application/json"
        assert c.headers["User-Agent"].startswith("HuntWise/")
    finally:
        await http.close_http()

    assert c.is_closed
    assert http.client is None
