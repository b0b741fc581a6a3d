"""三種爬蟲模式的預設目標

- jjizzle: 휴대폰포럼 / 재테크포럼 的 쥐즐 文章，直接註冊連結
- naverpay: 쿠폰게시판 的 [네이버페이] 文章，收集本文中的網址
- quiz: 쿠폰게시판 的金融 App 測驗文章，答案合併成每日摘要
"""
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from ppomppu_linkhub_core.fetcher.models import (
    COUPON_LISTING,
    FORUM_HOST,
    JJIZZLE_LISTING,
    ListingContract,
)


class Mode(str, Enum):
    JJIZZLE = "jjizzle"
    NAVERPAY = "naverpay"
    QUIZ = "quiz"


class BoardTarget(BaseModel):
    """一個要爬取的列表頁"""
    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    display_name: str
    listing: ListingContract


COUPON_BOARD_URL = f"{FORUM_HOST}/zboard/zboard.php?id=coupon"

JJIZZLE_TARGETS: List[BoardTarget] = [
    BoardTarget(
        name="phone",
        url=f"{FORUM_HOST}/zboard/zboard.php?search_type=name&id=phone&page_num=30&keyword=%C1%E3%C1%F1",
        display_name="휴대폰포럼",
        listing=JJIZZLE_LISTING,
    ),
    BoardTarget(
        name="money",
        url=f"{FORUM_HOST}/zboard/zboard.php?search_type=name&id=money&page_num=30&keyword=%C1%E3%C1%F1",
        display_name="재테크포럼",
        listing=JJIZZLE_LISTING,
    ),
]

COUPON_TARGET = BoardTarget(
    name="coupon",
    url=COUPON_BOARD_URL,
    display_name="쿠폰게시판",
    listing=COUPON_LISTING,
)

TARGETS: Dict[Mode, List[BoardTarget]] = {
    Mode.JJIZZLE: JJIZZLE_TARGETS,
    Mode.NAVERPAY: [COUPON_TARGET],
    Mode.QUIZ: [COUPON_TARGET],
}

HISTORY_FILES: Dict[Mode, str] = {
    Mode.JJIZZLE: "crawled_posts_jjizzle.json",
    Mode.NAVERPAY: "crawled_posts.json",
    Mode.QUIZ: "crawled_quiz_posts.json",
}
