"""Tests for restroute._internal.invoke — settling sync and async results."""

import pytest

from restroute._internal.invoke import resolve


class TestResolve:
    @pytest.mark.asyncio
    async def test_plain_value(self) -> None:
        assert await resolve({"id": 1}) == {"id": 1}

    @pytest.mark.asyncio
    async def test_coroutine(self) -> None:
        async def produce() -> str:
            return "done"

        assert await resolve(produce()) == "done"

    @pytest.mark.asyncio
    async def test_none(self) -> None:
        assert await resolve(None) is None
