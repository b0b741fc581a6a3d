import time

import pytest

from ppomppu_linkhub_core.utils.pacing import Pacer


@pytest.mark.asyncio
async def test_zero_interval_never_sleeps():
    pacer = Pacer(0)
    start = time.monotonic()
    for _ in range(5):
        await pacer.wait()
    assert time.monotonic() - start < 0.05


@pytest.mark.asyncio
async def test_wait_enforces_minimum_interval():
    pacer = Pacer(0.05)
    start = time.monotonic()
    await pacer.wait()
    await pacer.wait()
    assert time.monotonic() - start >= 0.09


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        Pacer(-1)
