"""Async members of fakes awaited by real code."""

import asyncio
from typing import Protocol

import pytest

from fakecheck import FakeOptions, FakeScope, call_to


class IFooAsyncAwaitService(Protocol):
    async def command_async(self) -> None: ...

    async def query_async(self) -> int: ...


class FooAsyncAwait:
    def __init__(self, service: IFooAsyncAwaitService) -> None:
        self.service = service

    async def command_async(self) -> None:
        await self.service.command_async()

    async def query_async(self) -> int:
        return await self.service.query_async()


@pytest.fixture
def service(fake_scope: FakeScope) -> IFooAsyncAwaitService:
    return fake_scope.fake(IFooAsyncAwaitService)


class TestConfigured:
    """Configured async members."""

    def test_value_awaited(self, service: IFooAsyncAwaitService) -> None:
        call_to(service.query_async).returns(9)
        assert asyncio.run(FooAsyncAwait(service).query_async()) == 9

    def test_void_member(self, service: IFooAsyncAwaitService) -> None:
        call_to(service.command_async).does_nothing()
        assert asyncio.run(FooAsyncAwait(service).command_async()) is None

    def test_configured_awaitable_passed_through(self, service: IFooAsyncAwaitService) -> None:
        """An awaitable return value is not wrapped again."""

        async def nine() -> int:
            return 9

        call_to(service.query_async).returns_lazily(nine)
        assert asyncio.run(FooAsyncAwait(service).query_async()) == 9

    def test_raising_member(self, service: IFooAsyncAwaitService) -> None:
        """Configured exceptions surface at the call, before any await."""
        call_to(service.query_async).raises(TimeoutError)
        with pytest.raises(TimeoutError):
            asyncio.run(FooAsyncAwait(service).query_async())


class TestUnconfigured:
    """Async members without rules."""

    def test_completed_immediately(self, service: IFooAsyncAwaitService) -> None:
        awaitable = service.query_async()
        assert awaitable.done()
        assert awaitable.result() == 0

    def test_default_awaited(self, service: IFooAsyncAwaitService) -> None:
        assert asyncio.run(FooAsyncAwait(service).query_async()) == 0

    def test_void_default_awaited(self, service: IFooAsyncAwaitService) -> None:
        assert asyncio.run(FooAsyncAwait(service).command_async()) is None

    def test_without_wrapping(self, fake_scope: FakeScope) -> None:
        service = fake_scope.fake(IFooAsyncAwaitService, FakeOptions(wrap_coroutines=False))
        assert service.query_async() == 0
