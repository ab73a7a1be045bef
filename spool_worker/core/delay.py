"""Wall-clock delay used in production."""

from __future__ import annotations

import asyncio


class AsyncioDelay:
    """DelayPort backed by ``asyncio.sleep``.

    Yields to the event loop, so watch events keep arriving while a work
    order is being "processed".
    """

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(max(0.0, seconds))
