from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class LinkPayload(BaseModel):
    """POST /links 的請求內容

    文字卡片（測驗摘要）時，文字本身放在 url 欄位。
    """
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    tags: Optional[List[str]] = None

    def to_request(self) -> dict:
        return self.model_dump(exclude_none=True)


class RegistrationStatus(str, Enum):
    REGISTERED = "registered"
    DUPLICATE = "duplicate"
    FAILED = "failed"


class RegistrationResult(BaseModel):
    status: RegistrationStatus
    http_status: Optional[int] = None
    reason: Optional[str] = Field(default=None, description="失敗原因")

    @property
    def accepted(self) -> bool:
        """2xx 或 409：遠端已持有此筆資料"""
        return self.status in (RegistrationStatus.REGISTERED, RegistrationStatus.DUPLICATE)

    @classmethod
    def registered(cls, http_status: int) -> "RegistrationResult":
        return cls(status=RegistrationStatus.REGISTERED, http_status=http_status)

    @classmethod
    def duplicate(cls) -> "RegistrationResult":
        return cls(status=RegistrationStatus.DUPLICATE, http_status=409)

    @classmethod
    def failed(cls, reason: str, http_status: Optional[int] = None) -> "RegistrationResult":
        return cls(status=RegistrationStatus.FAILED, http_status=http_status, reason=reason)
