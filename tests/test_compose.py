"""Tests for wren.middleware.compose — ordering, short-circuit, guard."""

import asyncio

import pytest

from wren.errors import InvalidContinuation
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.compose import compose


def _pair() -> tuple[Request, Response]:
    return Request(method="GET", path="/"), Response()


def _recorder(log: list[str], name: str):
    async def step(request, response, next) -> None:
        log.append(f"{name}:before")
        await next()
        log.append(f"{name}:after")

    step.__name__ = name
    return step


class TestOrdering:
    async def test_steps_then_handler(self) -> None:
        log: list[str] = []

        async def handler(request, response) -> None:
            log.append("H")

        await compose([_recorder(log, "A"), _recorder(log, "B")])(*_pair(), handler)
        assert log == ["A:before", "B:before", "H", "B:after", "A:after"]

    async def test_no_steps_runs_handler(self) -> None:
        ran: list[bool] = []
        await compose([])(*_pair(), lambda request, response: ran.append(True))
        assert ran == [True]

    async def test_sync_steps_and_handler(self) -> None:
        log: list[str] = []

        def sync_step(request, response, next):
            log.append("sync")
            return next()

        def handler(request, response) -> None:
            log.append("H")

        await compose([sync_step])(*_pair(), handler)
        assert log == ["sync", "H"]

    async def test_async_work_before_next(self) -> None:
        log: list[str] = []

        async def slow(request, response, next) -> None:
            await asyncio.sleep(0.01)
            log.append("slow")
            await next()

        async def handler(request, response) -> None:
            log.append("H")

        await compose([slow])(*_pair(), handler)
        assert log == ["slow", "H"]

    async def test_step_sees_request_mutations(self) -> None:
        async def tag(request, response, next) -> None:
            request.params = {"tagged": "yes"}
            await next()

        seen: list[dict[str, str]] = []
        await compose([tag])(*_pair(), lambda request, response: seen.append(request.params))
        assert seen == [{"tagged": "yes"}]


class TestShortCircuit:
    async def test_step_without_next_stops_chain(self) -> None:
        log: list[str] = []

        async def gate(request, response, next) -> None:
            log.append("A")
            response.send_json({"message": "nope"}, status=403)

        async def handler(request, response) -> None:
            log.append("H")

        request, response = _pair()
        await compose([gate, _recorder(log, "B")])(request, response, handler)
        assert log == ["A"]
        assert response.status == 403


class TestContinuationGuard:
    async def test_double_next_raises(self) -> None:
        async def twice(request, response, next) -> None:
            await next()
            await next()

        async def handler(request, response) -> None:
            pass

        with pytest.raises(InvalidContinuation, match="twice"):
            await compose([twice])(*_pair(), handler)

    async def test_handler_not_rerun(self) -> None:
        calls: list[int] = []

        async def twice(request, response, next) -> None:
            await next()
            await next()

        with pytest.raises(InvalidContinuation):
            await compose([twice])(*_pair(), lambda request, response: calls.append(1))
        assert calls == [1]

    async def test_stale_continuation_raises(self) -> None:
        saved = []

        async def keep(request, response, next) -> None:
            saved.append(next)
            await next()

        async def replay(request, response, next) -> None:
            await next()
            await saved[0]()

        with pytest.raises(InvalidContinuation):
            await compose([keep, replay])(*_pair(), lambda request, response: None)

    async def test_swallowed_violation_still_surfaces(self) -> None:
        async def sloppy(request, response, next) -> None:
            await next()
            try:
                await next()
            except InvalidContinuation:
                pass

        with pytest.raises(InvalidContinuation):
            await compose([sloppy])(*_pair(), lambda request, response: None)

    async def test_errors_propagate(self) -> None:
        async def handler(request, response) -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await compose([_recorder([], "A")])(*_pair(), handler)


class TestConcurrency:
    async def test_independent_cursors(self) -> None:
        async def yielding(request, response, next) -> None:
            await asyncio.sleep(0)
            await next()

        run = compose([yielding, yielding, yielding])
        done: list[str] = []

        async def handler(request, response) -> None:
            await asyncio.sleep(0)
            done.append(request.path)

        pairs = [(Request(method="GET", path=f"/{i}"), Response()) for i in range(20)]
        await asyncio.gather(*(run(req, resp, handler) for req, resp in pairs))
        assert sorted(done) == sorted(f"/{i}" for i in range(20))

    async def test_reusable(self) -> None:
        run = compose([_recorder([], "A")])
        count: list[int] = []
        for _ in range(3):
            await run(*_pair(), lambda request, response: count.append(1))
        assert len(count) == 3
