"""單次執行的狀態

每篇候選文章都會落在一個 Outcome；Outcome 決定它是否寫入去重紀錄。
"""
from collections import Counter
from enum import Enum
from typing import Dict, List, Set

from pydantic import BaseModel, Field

from ppomppu_linkhub_core.extractor.models import QuizCategory


class Outcome(str, Enum):
    """候選文章的終點狀態"""
    BLOCKLISTED = "blocklisted"
    LOCALLY_DUPLICATE = "locally_duplicate"
    CATEGORY_UNMATCHED = "category_unmatched"
    CATEGORY_SATISFIED = "category_satisfied"
    DATE_MISMATCHED = "date_mismatched"
    REMOTE_DUPLICATE = "remote_duplicate"
    EXTRACTION_UNAVAILABLE = "extraction_unavailable"
    NOTHING_TO_REGISTER = "nothing_to_register"
    REGISTERED = "registered"
    REGISTRATION_FAILED = "registration_failed"

    @property
    def marks_seen(self) -> bool:
        """是否寫入去重紀錄；不寫入的文章在之後的執行中會重新評估"""
        return self in MARKS_SEEN


MARKS_SEEN = frozenset({
    Outcome.BLOCKLISTED,
    Outcome.LOCALLY_DUPLICATE,
    Outcome.REMOTE_DUPLICATE,
    Outcome.NOTHING_TO_REGISTER,
    Outcome.REGISTERED,
    # 註冊失敗也標記，保證每篇最多嘗試註冊一次
    Outcome.REGISTRATION_FAILED,
})


class Decision(BaseModel):
    target: str
    title: str
    link: str
    outcome: Outcome


class RunState(BaseModel):
    """一次執行的統計與決策紀錄"""
    decisions: List[Decision] = Field(default_factory=list)
    satisfied_categories: Set[QuizCategory] = Field(default_factory=set)
    registered_urls: int = 0

    def record(self, target: str, title: str, link: str, outcome: Outcome) -> Decision:
        decision = Decision(target=target, title=title, link=link, outcome=outcome)
        self.decisions.append(decision)
        return decision

    def counts(self, target: str | None = None) -> Dict[Outcome, int]:
        counter = Counter(
            d.outcome for d in self.decisions
            if target is None or d.target == target
        )
        return {outcome: counter.get(outcome, 0) for outcome in Outcome}

    def summary(self, target: str | None = None) -> Dict[str, int]:
        """新增 / 本地略過 / 遠端略過 的統計"""
        counts = self.counts(target)
        return {
            "new": counts[Outcome.REGISTERED],
            "local_skipped": counts[Outcome.LOCALLY_DUPLICATE] + counts[Outcome.BLOCKLISTED],
            "remote_skipped": counts[Outcome.REMOTE_DUPLICATE],
        }

    def outcome_of(self, link: str) -> Outcome | None:
        """同一連結的最後一個決策"""
        for decision in reversed(self.decisions):
            if decision.link == link:
                return decision.outcome
        return None
