"""抓取層的資料結構

raw HTML -> CandidatePost（列表頁）
raw HTML -> PostBody（文章本文）
"""
from typing import List, Literal, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

FORUM_HOST = "https://www.ppomppu.co.kr"
BOARD_BASE = f"{FORUM_HOST}/zboard/"

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]


def absolutize(href: str) -> str:
    """把列表頁的相對連結轉為以論壇網域為根的絕對網址

    - "/zboard/view.php?..." -> https://www.ppomppu.co.kr/zboard/view.php?...
    - "view.php?..."         -> https://www.ppomppu.co.kr/zboard/view.php?...
    - 已是絕對網址則原樣回傳
    """
    href = href.strip()
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("/"):
        return FORUM_HOST + href
    return urljoin(BOARD_BASE, href)


class CandidatePost(BaseModel):
    """列表頁上的一筆文章，link 即為去重鍵"""
    model_config = ConfigDict(frozen=True)

    title: str
    link: str


class ListingContract(BaseModel):
    """列表頁的選擇器約定

    - row: 每一列
    - title: 列內的標題元素（取文字）
    - link: 列內的連結元素（取 href）
    """
    model_config = ConfigDict(frozen=True)

    row: str = "#revolution_main_table tr"
    title: str
    link: str
    wait_until: WaitUntil = "networkidle"
    timeout: float = 30.0


class BodyContract(BaseModel):
    """文章本文的選擇器約定，依序嘗試，第一個有文字的勝出"""
    model_config = ConfigDict(frozen=True)

    selectors: Tuple[str, ...] = Field(min_length=1)
    wait_until: WaitUntil = "networkidle"
    timeout: float = 30.0
    selector_timeout: float = 5.0


class Anchor(BaseModel):
    text: str
    href: str | None = None


class PostBody(BaseModel):
    """文章本文元素（渲染後的 inner HTML）"""
    selector: str
    html: str

    def _soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")

    @property
    def text(self) -> str:
        """等同 DOM 的 textContent：保留原始換行，不額外插入分隔字元"""
        return self._soup().get_text()

    def anchors(self) -> List[Anchor]:
        return [
            Anchor(text=a.get_text(), href=a.get("href"))
            for a in self._soup().find_all("a")
        ]


# ========================
# 📋 預設選擇器
# ========================

JJIZZLE_LISTING = ListingContract(
    title="a.baseList-title",
    link="a.baseList-title",
)

COUPON_LISTING = ListingContract(
    title="td.baseList-space.title a span",
    link="td.baseList-space.title a",
)

HARVEST_BODY = BodyContract(
    selectors=("td.board-contents",),
    wait_until="networkidle",
    timeout=30.0,
    selector_timeout=5.0,
)

QUIZ_BODY = BodyContract(
    selectors=("td.board-contents", "#readArea", ".board-contents", ".content"),
    wait_until="domcontentloaded",
    timeout=15.0,
    selector_timeout=3.0,
)
