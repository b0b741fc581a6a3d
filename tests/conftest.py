from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest
from bs4 import BeautifulSoup

from ppomppu_linkhub_core.errors import TransportError
from ppomppu_linkhub_core.fetcher.models import PostBody
from ppomppu_linkhub_core.fetcher.renderer import PageRenderer
from ppomppu_linkhub_core.register.models import LinkPayload, RegistrationResult


class FakeRenderer(PageRenderer):
    """以靜態 HTML 模擬渲染器"""

    def __init__(self, pages: Optional[Dict[str, str]] = None, failing: Sequence[str] = ()):
        self.pages: Dict[str, str] = dict(pages or {})
        self.failing: Set[str] = set(failing)
        self.calls: List[Tuple[str, str, Dict[str, str]]] = []

    def _load(self, url: str, user_agent: str, headers: Dict[str, str]) -> str:
        self.calls.append((url, user_agent, dict(headers)))
        if url in self.failing or url not in self.pages:
            raise TransportError(f"頁面載入失敗 {url}")
        return self.pages[url]

    async def render(self, url, *, user_agent, headers, wait_until, timeout) -> str:
        return self._load(url, user_agent, headers)

    async def render_first(self, url, selectors, *, user_agent, headers, wait_until, timeout, selector_timeout):
        soup = BeautifulSoup(self._load(url, user_agent, headers), "html.parser")
        for selector in selectors:
            element = soup.select_one(selector)
            if element is not None and element.get_text().strip():
                return PostBody(selector=selector, html=element.decode_contents())
        return None

    def body_requests(self) -> List[str]:
        return [url for url, _, _ in self.calls if "view.php" in url]


class FakeClient:
    """以記憶體模擬 linkhub API"""

    def __init__(
        self,
        existing: Sequence[str] = (),
        statuses: Optional[Dict[str, int]] = None,
        check_fails: bool = False,
    ):
        self.existing: Set[str] = set(existing)
        self.statuses: Dict[str, int] = dict(statuses or {})
        self.check_fails = check_fails
        self.checked: List[str] = []
        self.registered: List[LinkPayload] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def check_exists(self, url: str) -> bool:
        self.checked.append(url)
        if self.check_fails:
            raise TransportError("connection refused")
        return url in self.existing

    async def register(self, payload: LinkPayload) -> RegistrationResult:
        self.registered.append(payload)
        status = self.statuses.get(payload.url, 201)
        if 200 <= status < 300:
            self.existing.add(payload.url)
            return RegistrationResult.registered(status)
        if status == 409:
            return RegistrationResult.duplicate()
        return RegistrationResult.failed(f"HTTP {status}", http_status=status)


def jjizzle_listing(rows: Sequence[Tuple[str, str]]) -> str:
    """쥐즐 검색 결과 列表頁：(標題, href)"""
    trs = "".join(
        f'<tr><td><a class="baseList-title" href="{href}">{title}</a></td></tr>'
        for title, href in rows
    )
    return f'<html><body><table id="revolution_main_table"><tr><th>제목</th></tr>{trs}</table></body></html>'


def coupon_listing(rows: Sequence[Tuple[str, str]]) -> str:
    """쿠폰게시판 列表頁：(標題, href)"""
    trs = "".join(
        f'<tr><td class="baseList-space title"><a href="{href}"><span>{title}</span></a></td>'
        f'<td><span class="baseList-name">글쓴이</span></td></tr>'
        for title, href in rows
    )
    return f'<html><body><table id="revolution_main_table"><tr><th>제목</th></tr>{trs}</table></body></html>'


def post_page(content_html: str, selector_class: str = "board-contents") -> str:
    return f'<html><body><table><tr><td class="{selector_class}">{content_html}</td></tr></table></body></html>'


@pytest.fixture
def history_file(tmp_path):
    return tmp_path / "crawled_posts.json"
