from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Tuple

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from ppomppu_linkhub_core.errors import TransportError
from ppomppu_linkhub_core.fetcher.models import PostBody, WaitUntil
from ppomppu_linkhub_core.utils.logger import get_logger

logger = get_logger(logger_level="INFO")

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


class PageRenderer(ABC):
    """頁面渲染引擎的介面

    抓取層只依賴這個介面，測試時可換成以靜態 HTML 模擬的實作。
    頁面載入失敗或超時一律以 TransportError 回報。
    """

    async def __aenter__(self) -> "PageRenderer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    @abstractmethod
    async def render(
        self,
        url: str,
        *,
        user_agent: str,
        headers: Dict[str, str],
        wait_until: WaitUntil,
        timeout: float,
    ) -> str:
        """回傳渲染後整頁 HTML"""

    @abstractmethod
    async def render_first(
        self,
        url: str,
        selectors: Sequence[str],
        *,
        user_agent: str,
        headers: Dict[str, str],
        wait_until: WaitUntil,
        timeout: float,
        selector_timeout: float,
    ) -> Optional[PostBody]:
        """依序等待 selectors，回傳第一個文字非空的元素；都沒有則回傳 None"""


class PlaywrightRenderer(PageRenderer):
    """以 Playwright Chromium 渲染頁面

    瀏覽器在 `async with` 期間只啟動一次，每個請求各自開新的 context，
    讓 User-Agent 與額外標頭可以逐次設定。
    """

    def __init__(self, *, headless: bool = True) -> None:
        self._headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> "PlaywrightRenderer":
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._headless,
            args=BROWSER_ARGS,
        )
        logger.debug("🧭 瀏覽器已啟動")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        logger.debug("🧭 瀏覽器已關閉")

    def _require_browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("PlaywrightRenderer 尚未啟動，請使用 `async with PlaywrightRenderer() as r:`")
        return self._browser

    async def _open_page(self, url: str, user_agent: str, headers: Dict[str, str]) -> Tuple[BrowserContext, Page]:
        """開新的 context 與分頁

        Raises:
            TransportError: context 或分頁建立失敗
        """
        browser = self._require_browser()
        try:
            context = await browser.new_context(user_agent=user_agent, extra_http_headers=headers)
        except PlaywrightError as e:
            raise TransportError(f"瀏覽器 context 建立失敗 {url}: {e.message}") from e
        try:
            page = await context.new_page()
        except PlaywrightError as e:
            await self._close_context(context, url)
            raise TransportError(f"分頁建立失敗 {url}: {e.message}") from e
        return context, page

    @staticmethod
    async def _close_context(context: BrowserContext, url: str) -> None:
        # 關閉失敗不影響已取得的結果
        try:
            await context.close()
        except PlaywrightError as e:
            logger.warning(f"⚠️ 關閉 context 失敗 {url}: {e.message}")

    async def render(
        self,
        url: str,
        *,
        user_agent: str,
        headers: Dict[str, str],
        wait_until: WaitUntil,
        timeout: float,
    ) -> str:
        context, page = await self._open_page(url, user_agent, headers)
        try:
            await page.goto(url, wait_until=wait_until, timeout=timeout * 1000)
            return await page.content()
        except PlaywrightError as e:
            raise TransportError(f"頁面載入失敗 {url}: {e.message}") from e
        finally:
            await self._close_context(context, url)

    async def render_first(
        self,
        url: str,
        selectors: Sequence[str],
        *,
        user_agent: str,
        headers: Dict[str, str],
        wait_until: WaitUntil,
        timeout: float,
        selector_timeout: float,
    ) -> Optional[PostBody]:
        context, page = await self._open_page(url, user_agent, headers)
        try:
            try:
                await page.goto(url, wait_until=wait_until, timeout=timeout * 1000)
            except PlaywrightError as e:
                raise TransportError(f"頁面載入失敗 {url}: {e.message}") from e

            for selector in selectors:
                try:
                    element = await page.wait_for_selector(selector, timeout=selector_timeout * 1000)
                    if element is None:
                        continue
                    text = await element.text_content() or ""
                    if not text.strip():
                        continue
                    return PostBody(selector=selector, html=await element.inner_html())
                except PlaywrightError as e:
                    # 逾時或元素已脫離 DOM，換下一個選擇器
                    logger.debug(f"⌛ 選擇器失敗：{selector} ({e.message})")
                    continue
            return None
        finally:
            await self._close_context(context, url)
