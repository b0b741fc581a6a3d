from typing import List, Optional

from bs4 import BeautifulSoup

from ppomppu_linkhub_core.abc.crawler_abc import BaseCrawlerABC
from ppomppu_linkhub_core.errors import TransportError
from ppomppu_linkhub_core.fetcher.models import (
    BodyContract,
    CandidatePost,
    ListingContract,
    PostBody,
    absolutize,
)
from ppomppu_linkhub_core.fetcher.renderer import PageRenderer
from ppomppu_linkhub_core.utils.logger import get_logger

logger = get_logger(logger_level="INFO")


class BoardCrawler(BaseCrawlerABC[List[CandidatePost]]):
    """論壇列表頁 / 文章本文爬蟲

    資料流程：
    1. fetch_raw: 渲染列表頁 -> BeautifulSoup（失敗時 None）
    2. parse: BeautifulSoup -> List[CandidatePost]
    3. fetch_body: 渲染單篇文章 -> PostBody（找不到本文時 None）

    頁面載入失敗不會往外拋，只代表「這次沒有候選文章」。
    """

    def __init__(self, renderer: PageRenderer):
        self._renderer = renderer

    async def fetch_raw(self, url: str, contract: ListingContract) -> Optional[BeautifulSoup]:
        """渲染列表頁

        Args:
            url: 列表頁網址
            contract: 選擇器約定（含載入條件與超時）

        Returns:
            BeautifulSoup | None: 載入失敗時回傳 None
        """
        logger.debug(f"🌐 請求列表頁：{url}")
        try:
            html = await self._renderer.render(
                url,
                user_agent=self.pick_user_agent(),
                headers=self.get_headers(),
                wait_until=contract.wait_until,
                timeout=contract.timeout,
            )
        except TransportError as e:
            logger.error(f"❌ 頁面載入失敗：{e.message}")
            return None
        logger.debug(f"📥 收到列表頁：{len(html)} chars")
        return BeautifulSoup(html, "html.parser")

    def parse(self, raw: Optional[BeautifulSoup], url: str, contract: ListingContract) -> List[CandidatePost]:
        """解析列表頁，每列最多產生一筆 CandidatePost

        標題或連結缺一即略過該列。
        """
        if raw is None:
            return []

        posts: List[CandidatePost] = []
        for row in raw.select(contract.row):
            title_el = row.select_one(contract.title)
            link_el = row.select_one(contract.link)
            if title_el is None or link_el is None:
                continue
            title = title_el.get_text().strip()
            href = link_el.get("href")
            if not title or not href:
                continue
            posts.append(CandidatePost(title=title, link=absolutize(href)))
        return posts

    async def list_candidates(self, url: str, contract: ListingContract) -> List[CandidatePost]:
        posts = await self.fetch(url, contract)
        logger.info(f"📋 列表頁解析完成：{len(posts)} 篇")
        return posts

    async def fetch_body(self, post_link: str, contract: BodyContract) -> Optional[PostBody]:
        """取得文章本文

        Returns:
            PostBody | None: None 表示本文無法取得（EXTRACTION_UNAVAILABLE）
        """
        logger.debug(f"📄 請求本文：{post_link}")
        try:
            body = await self._renderer.render_first(
                post_link,
                contract.selectors,
                user_agent=self.pick_user_agent(),
                headers=self.get_headers(),
                wait_until=contract.wait_until,
                timeout=contract.timeout,
                selector_timeout=contract.selector_timeout,
            )
        except TransportError as e:
            logger.error(f"❌ 本文載入失敗：{e.message}")
            return None
        if body is None:
            logger.warning(f"⚠️ 所有本文選擇器都失敗：{post_link}")
        return body
