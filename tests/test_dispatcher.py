import logging

import pytest

from payzen_ws.callbacks.dispatcher import ResponseDispatcher
from payzen_ws.errors import CallbackError
from payzen_ws.result import OperationKind, aggregate


@pytest.fixture
def result():
    return aggregate(OperationKind.VALIDATE_PAYMENT, {"commonResponse": {"responseCode": 0}})


@pytest.mark.asyncio
async def test_no_callback_is_noop(result):
    assert await ResponseDispatcher().dispatch(None, result) is result


@pytest.mark.asyncio
async def test_sync_callback_gets_result(result):
    seen = []
    await ResponseDispatcher().dispatch(seen.append, result)
    assert seen == [result]


@pytest.mark.asyncio
async def test_async_callback_is_awaited(result):
    seen = []

    async def handle(r):
        seen.append(r)

    await ResponseDispatcher().dispatch(handle, result)
    assert seen == [result]


@pytest.mark.asyncio
async def test_failing_callback_is_logged_and_suppressed(result, caplog):
    def boom(r):
        raise RuntimeError("handler broke")

    with caplog.at_level(logging.ERROR, logger="payzen_ws.callbacks.dispatcher"):
        returned = await ResponseDispatcher().dispatch(boom, result)

    assert returned is result
    records = [r for r in caplog.records if r.name == "payzen_ws.callbacks.dispatcher"]
    assert len(records) == 1
    assert isinstance(records[0].exc_info[1], CallbackError)
    assert isinstance(records[0].exc_info[1].__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_failing_async_callback_is_suppressed(result):
    async def boom(r):
        raise ValueError("nope")

    assert await ResponseDispatcher().dispatch(boom, result) is result
