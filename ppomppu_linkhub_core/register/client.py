import asyncio
from typing import Optional

import aiohttp
from aiohttp import client_exceptions

from ppomppu_linkhub_core.errors import TransportError
from ppomppu_linkhub_core.register.models import LinkPayload, RegistrationResult
from ppomppu_linkhub_core.utils.logger import get_logger, shorten

logger = get_logger(logger_level="INFO")


class LinkhubClient:
    """linkhub API 客戶端

    - check_exists: POST /links/check，失敗時拋出 TransportError
    - register: POST /links，回傳 RegistrationResult（不拋例外）

    使用 `async with LinkhubClient(...) as client:` 共用一個 session；
    未進入 context 時每次呼叫各自建立 session。
    """

    API_KEY_HEADER = "x-api-key"

    def __init__(self, base_url: str, api_key: str, *, timeout: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "LinkhubClient":
        self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self.get_headers())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def get_headers(self) -> dict:
        return {self.API_KEY_HEADER: self._api_key}

    async def _post(self, path: str, body: dict) -> tuple[int, object]:
        """送出 POST，回傳 (狀態碼, JSON 內容或 None)

        Raises:
            TransportError: 網路錯誤或超時
        """
        url = f"{self.base_url}{path}"
        own_session = self._session is None
        session = self._session or aiohttp.ClientSession(timeout=self._timeout, headers=self.get_headers())
        try:
            async with session.post(url, json=body) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    data = None
                return response.status, data
        except client_exceptions.ClientError as e:
            raise TransportError(f"網路請求錯誤：{e}") from e
        except asyncio.TimeoutError as e:
            raise TransportError("請求超時") from e
        finally:
            if own_session:
                await session.close()

    async def check_exists(self, url: str) -> bool:
        """詢問 linkhub 是否已有此網址

        Raises:
            TransportError: 網路錯誤、非 2xx 或回應格式錯誤
        """
        status, data = await self._post("/links/check", {"url": url})
        if not 200 <= status < 300:
            raise TransportError(f"存在檢查回應異常：HTTP {status}", status=status)
        if not isinstance(data, dict) or not isinstance(data.get("exists"), bool):
            raise TransportError(f"存在檢查回應格式錯誤：{data!r}", status=status)
        return data["exists"]

    async def register(self, payload: LinkPayload) -> RegistrationResult:
        """註冊一筆連結

        - 2xx: REGISTERED
        - 409: DUPLICATE（遠端已有，視同成功）
        - 其他: FAILED
        """
        try:
            status, data = await self._post("/links", payload.to_request())
        except TransportError as e:
            logger.error(f"❌ 註冊失敗 {shorten(payload.url, 50)}: {e.message}")
            return RegistrationResult.failed(e.message)

        if 200 <= status < 300:
            logger.info(f"✅ 註冊完成 {shorten(payload.url, 50)} → {status}")
            return RegistrationResult.registered(status)
        if status == 409:
            logger.info(f"🔁 已註冊過，略過 {shorten(payload.url, 50)}")
            return RegistrationResult.duplicate()
        reason = f"HTTP {status}: {data!r}"
        logger.error(f"❌ 註冊失敗 {shorten(payload.url, 50)}: {reason}")
        return RegistrationResult.failed(reason, http_status=status)
