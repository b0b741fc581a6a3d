"""測驗文章的分類、日期驗證與答案擷取

- categorize: 標題（忽略空白）比對六種分類的關鍵字
- title_date / is_today: 標題中的 M/D 或 M월D일 與 KST 今天比對
- extract_answer: 依序套用 ANSWER_RULES，第一個成功者勝出
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Sequence, Tuple

from ppomppu_linkhub_core.extractor.models import QuizCategory

KST = timezone(timedelta(hours=9))

_WHITESPACE = re.compile(r"\s+")
_TITLE_DATE = re.compile(r"(\d{1,2})/(\d{1,2})|(\d{1,2})\s*월\s*(\d{1,2})\s*일")
# 句尾的 "입니다" / "입니다." / "."
_COPULA_SUFFIX = re.compile(r"(?:입니다\.?|\.)$")
_LINE_BREAK = re.compile(r"[\n\r]")


# ========================
# 🏷️ 分類
# ========================

def _normalize(text: str) -> str:
    return _WHITESPACE.sub("", text)


def categorize(title: str) -> Optional[QuizCategory]:
    normalized = _normalize(title)
    for category in QuizCategory:
        if any(_normalize(keyword) in normalized for keyword in category.keywords):
            return category
    return None


# ========================
# 📅 日期
# ========================

def today_kst(now: Optional[datetime] = None) -> date:
    """以固定 UTC+9 計算今天日期"""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(KST).date()


def title_date(title: str) -> Optional[Tuple[int, int]]:
    """從標題取出 (月, 日)，找不到則回傳 None"""
    match = _TITLE_DATE.search(title)
    if not match:
        return None
    if match.group(1):
        return int(match.group(1)), int(match.group(2))
    return int(match.group(3)), int(match.group(4))


def is_today(title: str, today: date, *, require_date: bool = True) -> bool:
    """標題日期是否為今天

    標題沒有日期時，依 require_date 決定：True 視為不符，False 視為符合。
    """
    parsed = title_date(title)
    if parsed is None:
        return not require_date
    return parsed == (today.month, today.day)


# ========================
# 🔍 答案擷取
# ========================

AnswerRule = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class RegexAnswerRule:
    """以正規表示式擷取答案，第一個擷取群組即為答案原文"""
    name: str
    pattern: re.Pattern

    def __call__(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if not match:
            return None
        return clean_answer(match.group(1))


def clean_answer(raw: str) -> Optional[str]:
    """只取第一行，去掉句尾的 입니다 / 句點；清完為空則視為沒有答案"""
    answer = _LINE_BREAK.split(raw.strip())[0].strip()
    answer = _COPULA_SUFFIX.sub("", answer).strip()
    return answer or None


ANSWER_RULES: Tuple[AnswerRule, ...] = (
    # "정답입니다" 之後的 "정답:"，最精確
    RegexAnswerRule(
        name="confirmed",
        pattern=re.compile(
            r"정답\s*입니다[\s\S]*?정답\s*:?\s*([^\n\r]+?)(?=\s*[.!?]|\s*[\n\r]|\s*\Z)",
            re.IGNORECASE,
        ),
    ),
    # 單純的 "정답:"
    RegexAnswerRule(
        name="bare",
        pattern=re.compile(
            r"정답\s*:?\s*([^\n\r]+?)(?=\s*[.!?]|\s*[\n\r]|\s*\Z)",
            re.IGNORECASE,
        ),
    ),
)


def extract_answer(text: str, rules: Sequence[AnswerRule] = ANSWER_RULES) -> Optional[str]:
    if not text:
        return None
    for rule in rules:
        answer = rule(text)
        if answer:
            return answer
    return None
