from __future__ import annotations
"""뽐뿌 → linkhub 爬蟲核心模組"""
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ppomppu_linkhub_core.config import Settings
    from ppomppu_linkhub_core.fetcher.renderer import PageRenderer
    from ppomppu_linkhub_core.pipeline.state import RunState
    from ppomppu_linkhub_core.presets import BoardTarget, Mode
    from ppomppu_linkhub_core.register.client import LinkhubClient


class PpomppuLinkhubCore:
    """爬蟲功能的統一入口點

    此類別提供以下功能：
    1. 設定
       - load_settings(): 從環境變數讀取設定（缺少金鑰時拋出 ConfigurationError）

    2. 單一模式執行
       - run("jjizzle"): 쥐즐 文章直接註冊
       - run("naverpay"): 네이버페이 文章本文網址收集
       - run("quiz"): 測驗答案每日摘要

    3. 全部模式依序執行
       - run_all()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    def get_logger(self, logger_level: str = "INFO"):
        from ppomppu_linkhub_core.utils.logger import get_logger
        return get_logger(logger_level=logger_level)

    def load_settings(self) -> Settings:
        """取得設定，第一次呼叫時從環境變數建立

        Raises:
            ConfigurationError: 缺少 API_SECRET_KEY
        """
        if self._settings is None:
            from ppomppu_linkhub_core.config import Settings
            self._settings = Settings.from_env()
        return self._settings

    def build_runner(
        self,
        mode: Mode | str,
        *,
        renderer: PageRenderer,
        client: LinkhubClient,
        today=None,
    ):
        """組出指定模式的 runner（含已載入的去重紀錄）"""
        from ppomppu_linkhub_core.dedup.store import DedupStore
        from ppomppu_linkhub_core.fetcher.crawler import BoardCrawler
        from ppomppu_linkhub_core.pipeline.runner import HarvestRunner, PassThroughRunner, QuizRunner
        from ppomppu_linkhub_core.presets import HISTORY_FILES, Mode

        settings = self.load_settings()
        mode = Mode(mode)
        store = DedupStore(settings.history_path(HISTORY_FILES[mode]), checker=client).load()
        crawler = BoardCrawler(renderer)
        delays = dict(item_delay=settings.item_delay, post_delay=settings.post_delay)
        if mode is Mode.JJIZZLE:
            return PassThroughRunner(crawler, client, store, **delays)
        if mode is Mode.NAVERPAY:
            return HarvestRunner(crawler, client, store, **delays)
        return QuizRunner(
            crawler, client, store,
            today=today,
            require_date=settings.quiz_require_date,
            **delays,
        )

    async def run(
        self,
        mode: Mode | str,
        *,
        renderer: Optional[PageRenderer] = None,
        client: Optional[LinkhubClient] = None,
        targets: Optional[Sequence[BoardTarget]] = None,
        today=None,
    ) -> RunState:
        """執行一次指定模式

        Args:
            mode: "jjizzle" / "naverpay" / "quiz"
            renderer: 頁面渲染器，預設為 PlaywrightRenderer
            client: linkhub 客戶端，預設依設定建立
            targets: 覆寫預設的目標看板
            today: 覆寫 quiz 模式的今天日期

        Returns:
            RunState: 本次執行的統計與決策紀錄
        """
        from ppomppu_linkhub_core.fetcher.renderer import PlaywrightRenderer
        from ppomppu_linkhub_core.presets import TARGETS, Mode
        from ppomppu_linkhub_core.register.client import LinkhubClient

        settings = self.load_settings()
        mode = Mode(mode)
        renderer = renderer or PlaywrightRenderer(headless=settings.headless)
        client = client or LinkhubClient(
            settings.api_base_url,
            settings.api_secret_key,
            timeout=settings.api_timeout,
        )
        async with renderer, client:
            runner = self.build_runner(mode, renderer=renderer, client=client, today=today)
            return await runner.run(targets if targets is not None else TARGETS[mode])

    async def run_all(self) -> List[RunState]:
        from ppomppu_linkhub_core.presets import Mode
        return [await self.run(mode) for mode in Mode]
