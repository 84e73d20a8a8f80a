"""
Tests for huntwise/tools/fallback.py.

What we test
------------
fetch_with_fallback():
  - Returns the primary value tagged Live on success.
  - Returns the fallback tagged Simulated on any exception.
  - Treats a timeout exactly like a failure.
  - Calls the primary once (no retry) and builds the fallback only when needed.
"""

from __future__ import annotations

import asyncio

import pytest

from huntwise.constants import Provenance
from huntwise.tools.fallback import fetch_with_fallback


@pytest.mark.asyncio
async def test_success_is_live():
    async def primary():
        return 42

    def fallback():
        raise AssertionError("fallback should not be built")

    assert await fetch_with_fallback("x", primary, fallback, timeout=1.0) == (42, Provenance.LIVE)


@pytest.mark.asyncio
async def test_failure_is_simulated_without_retry():
    calls = []

    async def primary():
        calls.append(1)
        raise RuntimeError("boom")

    value, prov = await fetch_with_fallback("x", primary, lambda: 0, timeout=1.0)
    assert (value, prov) == (0, Provenance.SIMULATED)
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_timeout_is_simulated():
    async def slow():
        await asyncio.sleep(5)
        return 1

    value, prov = await fetch_with_fallback("x", slow, lambda: -1, timeout=0.05)
    assert (value, prov) == (-1, Provenance.SIMULATED)
