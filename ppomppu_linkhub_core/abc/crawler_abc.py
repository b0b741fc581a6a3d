import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, TypeVar, Generic

T = TypeVar("T")

# 每次請求隨機挑一個，降低被來源網站指紋辨識或限流的機率
USER_AGENTS: List[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:120.0) Gecko/20100101 Firefox/120.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0.5993.70 Safari/537.36",
]

ACCEPT_LANGUAGE = "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7"


class BaseCrawlerABC(ABC, Generic[T]):
    """
    Crawler 層的抽象基底類，規範所有頁面抓取器的標準介面。

    - fetch_raw: 取得原始頁面（渲染後的 HTML）
    - parse: 把原始頁面轉成結構化資料
    - fetch: 兩者串起來的統一入口
    """
    @abstractmethod
    async def fetch_raw(self, *args, **kwargs) -> Any:
        pass

    @abstractmethod
    def parse(self, raw: Any, *args, **kwargs) -> T:
        pass

    async def fetch(self, *args, **kwargs) -> T:
        """
        外部統一調用：自動 fetch_raw 並 parse，回傳結構化資料
        """
        raw = await self.fetch_raw(*args, **kwargs)
        return self.parse(raw, *args, **kwargs)

    def pick_user_agent(self) -> str:
        return random.choice(USER_AGENTS)

    def get_headers(self) -> Dict[str, str]:
        """額外的請求標頭（User-Agent 另外交給渲染器設定）"""
        return {"Accept-Language": ACCEPT_LANGUAGE}
