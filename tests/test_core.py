import json
from datetime import date
from pathlib import Path

import pytest

from conftest import FakeClient, FakeRenderer, coupon_listing, post_page
from ppomppu_linkhub_core import PpomppuLinkhubCore
from ppomppu_linkhub_core.__main__ import main
from ppomppu_linkhub_core.config import DEFAULT_API_BASE_URL, Settings
from ppomppu_linkhub_core.errors import ConfigurationError
from ppomppu_linkhub_core.pipeline.state import Outcome
from ppomppu_linkhub_core.presets import COUPON_BOARD_URL, HISTORY_FILES, Mode


def test_settings_require_api_secret_key():
    with pytest.raises(ConfigurationError):
        Settings.from_env({})
    with pytest.raises(ConfigurationError):
        Settings.from_env({"API_SECRET_KEY": "   "})


def test_settings_defaults_and_overrides():
    settings = Settings.from_env({"API_SECRET_KEY": "k"})
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.item_delay == 1.0
    assert settings.post_delay == 2.0
    assert settings.quiz_require_date is True

    settings = Settings.from_env({
        "API_SECRET_KEY": "k",
        "CRAWLER_HISTORY_DIR": "/tmp/history",
        "CRAWLER_ITEM_DELAY": "0.5",
        "QUIZ_REQUIRE_DATE": "false",
        "CRAWLER_HEADLESS": "0",
    })
    assert settings.history_path("a.json") == Path("/tmp/history/a.json")
    assert settings.item_delay == 0.5
    assert settings.quiz_require_date is False
    assert settings.headless is False


def test_settings_reject_bad_numbers():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"API_SECRET_KEY": "k", "CRAWLER_ITEM_DELAY": "-1"})


def test_main_exits_non_zero_without_secret(monkeypatch):
    monkeypatch.delenv("API_SECRET_KEY", raising=False)
    monkeypatch.setattr("ppomppu_linkhub_core.config.load_dotenv", lambda: False)
    assert main(["quiz"]) == 1


@pytest.mark.asyncio
async def test_core_run_quiz_mode(tmp_path):
    settings = Settings(api_secret_key="k", history_dir=tmp_path, item_delay=0, post_delay=0)
    link = "https://www.ppomppu.co.kr/zboard/view.php?id=coupon&no=1"
    renderer = FakeRenderer({
        COUPON_BOARD_URL: coupon_listing([("[Hpoint] 8/10 퀴즈", "view.php?id=coupon&no=1")]),
        link: post_page("정답입니다. 정답: 사과\n"),
    })
    client = FakeClient()

    state = await PpomppuLinkhubCore(settings).run(
        "quiz", renderer=renderer, client=client, today=date(2024, 8, 10)
    )

    assert state.outcome_of(link) is Outcome.REGISTERED
    assert client.registered[0].url == "Hpoint : 사과"
    history = tmp_path / HISTORY_FILES[Mode.QUIZ]
    assert json.loads(history.read_text(encoding="utf-8")) == [link]
