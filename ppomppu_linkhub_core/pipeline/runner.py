"""執行協調器：抓取 -> 去重 -> 擷取 -> 分類 -> 彙整/註冊 -> 儲存

流程（每個目標看板）：
1. BoardCrawler 取得候選文章
2. 逐篇依模式決定 Outcome（依序、單一 worker，不並行）
3. Outcome.marks_seen 的文章寫入 DedupStore
4. 全部處理完後 finish()（quiz 模式在此註冊摘要），最後才 persist()

任何單篇的錯誤都只影響該篇，不會中止整次執行。
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ppomppu_linkhub_core.dedup.store import DedupStore
from ppomppu_linkhub_core.extractor.harvest import harvest_items, title_has_marker
from ppomppu_linkhub_core.extractor.link import DEFAULT_BLOCKLIST, is_blocklisted, to_link_item
from ppomppu_linkhub_core.extractor.models import QuizAnswer
from ppomppu_linkhub_core.extractor.quiz import categorize, extract_answer, is_today, today_kst
from ppomppu_linkhub_core.fetcher.crawler import BoardCrawler
from ppomppu_linkhub_core.fetcher.models import HARVEST_BODY, QUIZ_BODY, BodyContract, CandidatePost
from ppomppu_linkhub_core.pipeline.aggregator import QuizDigest
from ppomppu_linkhub_core.pipeline.state import Outcome, RunState
from ppomppu_linkhub_core.presets import BoardTarget
from ppomppu_linkhub_core.register.models import LinkPayload, RegistrationResult
from ppomppu_linkhub_core.utils.logger import get_logger, shorten
from ppomppu_linkhub_core.utils.pacing import Pacer

logger = get_logger(logger_level="INFO")


class Registrar(Protocol):
    async def register(self, payload: LinkPayload) -> RegistrationResult: ...


OUTCOME_LOG: Dict[Outcome, str] = {
    Outcome.BLOCKLISTED: "🚫 [排除連結]",
    Outcome.LOCALLY_DUPLICATE: "♻️ [本地重複]",
    Outcome.CATEGORY_UNMATCHED: "🏷️ [分類不符]",
    Outcome.CATEGORY_SATISFIED: "🏷️ [分類已完成]",
    Outcome.DATE_MISMATCHED: "📅 [日期不符]",
    Outcome.REMOTE_DUPLICATE: "🗄️ [遠端重複]",
    Outcome.EXTRACTION_UNAVAILABLE: "🔍 [無法擷取]",
    Outcome.NOTHING_TO_REGISTER: "🔍 [沒有網址]",
    Outcome.REGISTERED: "✅ [註冊完成]",
    Outcome.REGISTRATION_FAILED: "❌ [註冊失敗]",
}


class BaseRunner(ABC):
    """三種模式共用的執行骨架"""

    mode: str = ""

    def __init__(
        self,
        crawler: BoardCrawler,
        client: Registrar,
        store: DedupStore,
        *,
        item_delay: float = 1.0,
        post_delay: float = 2.0,
    ):
        self.crawler = crawler
        self.client = client
        self.store = store
        self.state = RunState()
        self._item_pacer = Pacer(item_delay)
        self._post_pacer = Pacer(post_delay)

    # ====================================
    # 🔄 主要流程
    # ====================================

    async def run(self, targets: Sequence[BoardTarget]) -> RunState:
        logger.info(f"🚀 [{self.mode}] 開始執行，既有紀錄 {len(self.store)} 筆")
        for target in targets:
            logger.info(f"🌐 爬取 {target.display_name} ({target.name})")
            posts = await self.crawler.list_candidates(target.url, target.listing)
            for post in posts:
                await self.process(target, post)

        await self.finish()
        try:
            self.store.persist()
        except OSError as e:
            logger.error(f"❌ 儲存爬取紀錄失敗：{e}")
            raise
        # finish() 可能還會改變 Outcome，統計一律在之後輸出
        for target in targets:
            self._log_summary(target.display_name, self.state.summary(target.name))
        self._log_summary("總計", self.state.summary())
        return self.state

    @abstractmethod
    async def process(self, target: BoardTarget, post: CandidatePost) -> Outcome:
        """決定單篇文章的 Outcome"""

    async def finish(self) -> None:
        """所有看板處理完、儲存之前的收尾"""

    # ====================================
    # 🧰 共用步驟
    # ====================================

    def decide(self, target: BoardTarget, post: CandidatePost, outcome: Outcome, note: str = "") -> Outcome:
        self.state.record(target.name, post.title, post.link, outcome)
        if outcome.marks_seen:
            self.store.mark_seen(post.link)
        message = f"{OUTCOME_LOG[outcome]} {shorten(post.title)}"
        if note:
            message += f" → {note}"
        if outcome is Outcome.REGISTRATION_FAILED:
            logger.warning(message)
        else:
            logger.info(message)
        return outcome

    async def dedupe(self, target: BoardTarget, post: CandidatePost) -> Optional[Outcome]:
        """本地 + 遠端去重；需要繼續處理時回傳 None"""
        if self.store.seen_locally(post.link):
            return self.decide(target, post, Outcome.LOCALLY_DUPLICATE)
        if await self.store.exists_remotely(post.link):
            return self.decide(target, post, Outcome.REMOTE_DUPLICATE)
        return None

    async def register(self, payload: LinkPayload) -> RegistrationResult:
        result = await self.client.register(payload)
        if result.accepted:
            self.state.registered_urls += 1
        await self._item_pacer.wait()
        return result

    def _log_summary(self, label: str, summary: Dict[str, int]) -> None:
        logger.info(
            f"📊 [{label}] 新註冊 {summary['new']} 篇，"
            f"本地略過 {summary['local_skipped']} 篇，遠端略過 {summary['remote_skipped']} 篇"
        )


class PassThroughRunner(BaseRunner):
    """jjizzle：列表頁文章直接註冊成連結"""

    mode = "jjizzle"

    def __init__(self, *args, blocklist: Sequence[str] = DEFAULT_BLOCKLIST, **kwargs):
        super().__init__(*args, **kwargs)
        self.blocklist = tuple(blocklist)

    async def process(self, target: BoardTarget, post: CandidatePost) -> Outcome:
        # 封鎖清單最先判斷，不佔用任何去重查詢
        if is_blocklisted(post.link, self.blocklist):
            return self.decide(target, post, Outcome.BLOCKLISTED, "sponsor/consulting")

        duplicate = await self.dedupe(target, post)
        if duplicate is not None:
            return duplicate

        item = to_link_item(post, target.display_name)
        result = await self.register(item.to_payload())
        if result.accepted:
            return self.decide(target, post, Outcome.REGISTERED)
        return self.decide(target, post, Outcome.REGISTRATION_FAILED, result.reason or "")


class HarvestRunner(BaseRunner):
    """naverpay：收集本文中的網址，逐一註冊"""

    mode = "naverpay"

    def __init__(self, *args, body: BodyContract = HARVEST_BODY, **kwargs):
        super().__init__(*args, **kwargs)
        self.body = body

    async def process(self, target: BoardTarget, post: CandidatePost) -> Outcome:
        if not title_has_marker(post.title):
            return self.decide(target, post, Outcome.CATEGORY_UNMATCHED)

        duplicate = await self.dedupe(target, post)
        if duplicate is not None:
            return duplicate

        body = await self.crawler.fetch_body(post.link, self.body)
        if body is None:
            outcome = self.decide(target, post, Outcome.EXTRACTION_UNAVAILABLE)
            await self._post_pacer.wait()
            return outcome

        items = harvest_items(body, post.link)
        if not items:
            outcome = self.decide(target, post, Outcome.NOTHING_TO_REGISTER)
        else:
            logger.info(f"🔗 找到 {len(items)} 個網址")
            accepted = 0
            for item in items:
                result = await self.register(item.to_payload())
                if result.accepted:
                    accepted += 1
            if accepted:
                outcome = self.decide(target, post, Outcome.REGISTERED, f"{accepted}/{len(items)} 個網址")
            else:
                outcome = self.decide(target, post, Outcome.REGISTRATION_FAILED, f"0/{len(items)} 個網址")
        await self._post_pacer.wait()
        return outcome


class QuizRunner(BaseRunner):
    """quiz：每個分類取第一個今天的答案，最後合併成一張摘要卡片"""

    mode = "quiz"

    def __init__(
        self,
        *args,
        today: Optional[date] = None,
        require_date: bool = True,
        body: BodyContract = QUIZ_BODY,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.today = today or today_kst()
        self.require_date = require_date
        self.body = body
        self.digest = QuizDigest()
        self._accepted: List[Tuple[BoardTarget, CandidatePost]] = []

    async def run(self, targets: Sequence[BoardTarget]) -> RunState:
        logger.info(f"📅 今天日期 {self.today.isoformat()} (KST)")
        return await super().run(targets)

    async def process(self, target: BoardTarget, post: CandidatePost) -> Outcome:
        category = categorize(post.title)
        if category is None:
            return self.decide(target, post, Outcome.CATEGORY_UNMATCHED)

        if self.store.seen_locally(post.link):
            return self.decide(target, post, Outcome.LOCALLY_DUPLICATE)

        # 該分類已有答案就不再抓本文
        if self.digest.is_satisfied(category):
            return self.decide(target, post, Outcome.CATEGORY_SATISFIED, category.value)

        if not is_today(post.title, self.today, require_date=self.require_date):
            return self.decide(
                target, post, Outcome.DATE_MISMATCHED,
                f"今天: {self.today.month}/{self.today.day}",
            )

        if await self.store.exists_remotely(post.link):
            return self.decide(target, post, Outcome.REMOTE_DUPLICATE)

        body = await self.crawler.fetch_body(post.link, self.body)
        answer = extract_answer(body.text) if body is not None else None
        await self._post_pacer.wait()
        if answer is None:
            return self.decide(target, post, Outcome.EXTRACTION_UNAVAILABLE)

        self.digest.add(QuizAnswer(
            category=category,
            answer=answer,
            original_title=post.title,
            post_link=post.link,
        ))
        self.state.satisfied_categories.add(category)
        self._accepted.append((target, post))
        logger.info(f"💡 找到答案 {category.value} : {answer} ({len(self.digest)}/6)")
        # 最終 Outcome 在 finish() 註冊摘要後才決定
        return Outcome.REGISTERED

    async def finish(self) -> None:
        payload = self.digest.to_payload()
        if payload is None:
            logger.info("📭 沒有要註冊的測驗答案")
            return

        logger.info(f"🧾 將 {len(self.digest)} 個測驗答案合併成一張文字卡片註冊\n{payload.url}")
        result = await self.register(payload)
        outcome = Outcome.REGISTERED if result.accepted else Outcome.REGISTRATION_FAILED
        for target, post in self._accepted:
            self.decide(target, post, outcome)
