"""執行設定

從環境變數（含 .env）建立 Settings。API_SECRET_KEY 為必填，
缺少時在任何網路動作之前拋出 ConfigurationError。
"""
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ppomppu_linkhub_core.errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://linkhub-dev.vercel.app/api"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """爬蟲執行設定

    欄位：
    - api_secret_key: linkhub API 金鑰（x-api-key 標頭）
    - api_base_url: linkhub API 位址
    - history_dir: 爬取紀錄 JSON 檔所在目錄
    - item_delay: 每次註冊呼叫後的等待秒數
    - post_delay: 每篇文章處理完後的等待秒數（naverpay / quiz）
    - headless: 瀏覽器是否以無頭模式啟動
    - quiz_require_date: 標題沒有日期的測驗文章是否視為日期不符
    - api_timeout: API 請求超時（秒）
    """
    api_secret_key: str = Field(min_length=1)
    api_base_url: str = DEFAULT_API_BASE_URL
    history_dir: Path = Path(".")
    item_delay: float = Field(default=1.0, ge=0)
    post_delay: float = Field(default=2.0, ge=0)
    headless: bool = True
    quiz_require_date: bool = True
    api_timeout: float = Field(default=15.0, gt=0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """從環境變數建立設定

        Args:
            environ: 測試時可注入的環境變數，預設為 os.environ（會先載入 .env）

        Raises:
            ConfigurationError: 缺少 API_SECRET_KEY 或數值格式錯誤
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        secret = environ.get("API_SECRET_KEY", "").strip()
        if not secret:
            raise ConfigurationError("API_SECRET_KEY 環境變數未設定")

        values = {"api_secret_key": secret}
        optional = {
            "LINKHUB_API_BASE_URL": "api_base_url",
            "CRAWLER_HISTORY_DIR": "history_dir",
            "CRAWLER_ITEM_DELAY": "item_delay",
            "CRAWLER_POST_DELAY": "post_delay",
            "API_TIMEOUT": "api_timeout",
        }
        for env_name, field_name in optional.items():
            if environ.get(env_name):
                values[field_name] = environ[env_name]
        for env_name, field_name in (("CRAWLER_HEADLESS", "headless"), ("QUIZ_REQUIRE_DATE", "quiz_require_date")):
            if environ.get(env_name):
                values[field_name] = _as_bool(environ[env_name])

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"設定格式錯誤：{e}") from e

    def history_path(self, file_name: str) -> Path:
        return self.history_dir / file_name
