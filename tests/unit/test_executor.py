"""Unit tests for the background executor."""

import asyncio
import threading

import pytest

from coronatracker.database.errors import StoreClosedError
from coronatracker.database.executor import BackgroundExecutor

TIMEOUT = 5


@pytest.fixture
def executor():
    executor = BackgroundExecutor(name="test-executor")
    executor.start()
    yield executor
    executor.stop(timeout=TIMEOUT)


def test_submit_returns_result(executor):
    async def answer():
        return 42

    assert executor.submit(answer()).result(TIMEOUT) == 42


def test_work_runs_off_the_calling_thread(executor):
    async def thread_name():
        return threading.current_thread().name

    assert executor.submit(thread_name()).result(TIMEOUT) == "test-executor"
    assert not executor.in_background()


def test_work_starts_in_submission_order(executor):
    started = []

    async def job(i):
        started.append(i)
        await asyncio.sleep(0)

    futures = [executor.submit(job(i)) for i in range(10)]
    for future in futures:
        future.result(TIMEOUT)

    assert started == list(range(10))


def test_exception_travels_through_future(executor):
    async def fail():
        raise ValueError("bad record")

    with pytest.raises(ValueError, match="bad record"):
        executor.submit(fail()).result(TIMEOUT)


def test_submit_before_start():
    executor = BackgroundExecutor()

    async def noop():
        return None

    with pytest.raises(StoreClosedError):
        executor.submit(noop())


def test_stop_drains_pending_work():
    executor = BackgroundExecutor()
    executor.start()
    done = []

    async def slow():
        await asyncio.sleep(0.05)
        done.append(True)

    executor.submit(slow())
    executor.stop(timeout=TIMEOUT)

    assert done == [True]
    assert not executor.running


def test_submit_after_stop(executor):
    executor.stop(timeout=TIMEOUT)

    async def noop():
        return None

    with pytest.raises(StoreClosedError):
        executor.submit(noop())

    with pytest.raises(StoreClosedError):
        executor.start()
