import asyncio
import time
from typing import Optional

from ppomppu_linkhub_core.utils.logger import get_logger

logger = get_logger(logger_level="INFO")


class Pacer:
    """對來源網站的最小請求間隔

    每次與網路互動後呼叫 `wait()`，距離上一次 `wait()` 不足 `interval` 秒時
    會 sleep 補足差額。interval 為 0 時不等待（測試用）。
    """

    def __init__(self, interval: float):
        if interval < 0:
            raise ValueError("interval 不可為負數")
        self.interval = interval
        self._last: Optional[float] = None

    async def wait(self) -> None:
        if self.interval == 0:
            return
        now = time.monotonic()
        if self._last is None:
            delay = self.interval
        else:
            delay = max(0.0, self.interval - (now - self._last))
        if delay > 0:
            logger.debug(f"⏳ 等待 {delay:.2f} 秒")
            await asyncio.sleep(delay)
        self._last = time.monotonic()
