from typing import Dict, List, Optional

from ppomppu_linkhub_core.extractor.models import QuizAnswer, QuizCategory
from ppomppu_linkhub_core.register.models import LinkPayload

QUIZ_TAG = "퀴즈"


class QuizDigest:
    """把本次執行收集到的測驗答案合併成一張文字卡片

    每個分類只接受第一個答案（依列表順序），之後的同分類答案丟棄。
    """

    def __init__(self, tag: str = QUIZ_TAG):
        self.tag = tag
        self._answers: Dict[QuizCategory, QuizAnswer] = {}

    def is_satisfied(self, category: QuizCategory) -> bool:
        return category in self._answers

    def add(self, answer: QuizAnswer) -> bool:
        """加入答案；該分類已有答案時不接受"""
        if self.is_satisfied(answer.category):
            return False
        self._answers[answer.category] = answer
        return True

    @property
    def answers(self) -> List[QuizAnswer]:
        return list(self._answers.values())

    def __len__(self) -> int:
        return len(self._answers)

    def render(self) -> str:
        """一個分類一行：`<category> : <answer>`"""
        return "\n".join(answer.display_text for answer in self._answers.values())

    def to_payload(self) -> Optional[LinkPayload]:
        if not self._answers:
            return None
        return LinkPayload(url=self.render(), tags=[self.tag])
