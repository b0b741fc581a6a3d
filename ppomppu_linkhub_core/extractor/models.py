"""擷取結果

每一筆擷取結果都對應到恰好一篇 CandidatePost。
"""
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ppomppu_linkhub_core.register.models import LinkPayload


class QuizCategory(str, Enum):
    """測驗分類（固定六種），宣告順序即比對順序"""
    KB_PAY = "KB Pay"
    KB_STAR_BANKING = "KB스타뱅킹"
    SHINHAN_SUPER_SOL = "신한슈퍼SOL"
    SHINHAN_SOL_BASEBALL = "신한쏠야구"
    SHINHAN_SOL_QUIZ_PANGPANG = "신한SOL퀴즈팡팡"
    HPOINT = "Hpoint"

    @property
    def keywords(self) -> Tuple[str, ...]:
        return CATEGORY_KEYWORDS[self]


CATEGORY_KEYWORDS: Dict[QuizCategory, Tuple[str, ...]] = {
    QuizCategory.KB_PAY: ("[KB Pay]",),
    QuizCategory.KB_STAR_BANKING: ("[KB스타뱅킹] 스타퀴즈",),
    QuizCategory.SHINHAN_SUPER_SOL: ("[신한슈퍼SOL]",),
    QuizCategory.SHINHAN_SOL_BASEBALL: ("[신한쏠] 야구상식",),
    QuizCategory.SHINHAN_SOL_QUIZ_PANGPANG: ("[신한플레이] 퀴즈팡팡",),
    QuizCategory.HPOINT: ("[Hpoint]", "[h.point]", "[H.point]"),
}


class LinkItem(BaseModel):
    """可直接註冊的連結（jjizzle）"""
    model_config = ConfigDict(frozen=True)

    url: str
    title: str
    description: str
    thumbnail: Optional[str] = None

    def to_payload(self) -> LinkPayload:
        return LinkPayload(
            url=self.url,
            title=self.title,
            description=self.description,
            thumbnail=self.thumbnail,
        )


class HarvestedURL(BaseModel):
    """文章本文中找到的網址（naverpay），帶固定標籤"""
    model_config = ConfigDict(frozen=True)

    url: str
    label: str
    post_link: str

    def to_payload(self) -> LinkPayload:
        return LinkPayload(url=self.url, tags=[self.label])


class QuizAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: QuizCategory
    answer: str
    original_title: str
    post_link: str

    @property
    def display_text(self) -> str:
        return f"{self.category.value} : {self.answer}"
