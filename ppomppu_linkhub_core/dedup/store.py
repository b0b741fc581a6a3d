"""已處理網址的去重儲存

兩層判斷：
1. 本地：啟動時載入的 JSON 快照 + 本次執行新增的鍵
2. 遠端：linkhub 的 /links/check，失敗時退回本地判斷

快照只在整次執行結束、且確實新增過鍵時整份覆寫。
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set

from pydantic import TypeAdapter, ValidationError

from ppomppu_linkhub_core.errors import TransportError
from ppomppu_linkhub_core.utils.logger import get_logger

logger = get_logger(logger_level="INFO")

_snapshot_adapter = TypeAdapter(List[str])


class ExistenceChecker(Protocol):
    async def check_exists(self, url: str) -> bool: ...


class DedupStore:
    """去重儲存

    Args:
        file_path: 快照檔路徑（JSON 字串陣列）
        checker: 遠端存在檢查，None 時只用本地判斷
    """

    def __init__(self, file_path: str | Path, checker: Optional[ExistenceChecker] = None):
        self._file = Path(file_path)
        self._checker = checker
        self._keys: Set[str] = set()
        self._order: List[str] = []
        self._dirty = False

    # ====================================
    # 💾 快照讀寫
    # ====================================

    def load(self) -> "DedupStore":
        """載入快照；檔案不存在或損壞時重設為空集合"""
        self._keys.clear()
        self._order.clear()
        self._dirty = False
        if not self._file.exists():
            logger.info(f"🆕 找不到爬取紀錄檔，將新建：{self._file}")
            return self
        try:
            with open(self._file, encoding="utf-8") as f:
                keys = _snapshot_adapter.validate_python(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"❌ 讀取爬取紀錄檔失敗，重設為空：{e}")
            return self
        self._extend(keys)
        logger.info(f"💾 已載入爬取紀錄 {len(self._keys)} 筆")
        return self

    def persist(self) -> bool:
        """把目前全部的鍵整份寫回快照

        Returns:
            bool: 有寫入為 True；本次沒有新增鍵則略過並回傳 False
        """
        if not self._dirty:
            logger.info("💤 沒有新增的紀錄，略過儲存")
            return False
        self._file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self._file.name}.", dir=self._file.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._order, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._file)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        self._dirty = False
        logger.info(f"💾 爬取紀錄已更新：共 {len(self._order)} 筆")
        return True

    # ====================================
    # 🔍 去重判斷
    # ====================================

    def seen_locally(self, key: str) -> bool:
        return key in self._keys

    def mark_seen(self, key: str) -> bool:
        """加入鍵；已存在時不做任何事

        Returns:
            bool: 是否為新加入的鍵
        """
        if key in self._keys:
            return False
        self._keys.add(key)
        self._order.append(key)
        self._dirty = True
        return True

    async def exists_remotely(self, key: str) -> bool:
        """詢問 linkhub 是否已有此網址；API 失敗時以本地判斷為準"""
        if self._checker is None:
            return self.seen_locally(key)
        try:
            return await self._checker.check_exists(key)
        except TransportError as e:
            logger.error(f"❌ 遠端存在檢查失敗，改用本地紀錄 {key}: {e.message}")
            return self.seen_locally(key)

    # ====================================
    # 🧰 其他
    # ====================================

    def _extend(self, keys: Iterable[str]) -> None:
        for key in keys:
            if key not in self._keys:
                self._keys.add(key)
                self._order.append(key)

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def file_path(self) -> Path:
        return self._file

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: str) -> bool:
        return key in self._keys

    def keys(self) -> List[str]:
        return list(self._order)
