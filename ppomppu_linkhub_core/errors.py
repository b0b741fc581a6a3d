"""爬蟲流程中使用的例外型別

- ConfigurationError: 啟動前的設定錯誤（致命）
- TransportError: 頁面載入或 API 呼叫失敗（非致命）
- ExtractionUnavailable: 本文已取得但無法擷取內容（非致命，之後可重試）
"""


class LinkhubCoreError(Exception):
    """所有爬蟲錯誤的基底類別"""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(LinkhubCoreError):
    """缺少必要設定（例如 API_SECRET_KEY），在任何網路動作之前拋出"""


class TransportError(LinkhubCoreError):
    """頁面載入、選擇器等待或 API 呼叫失敗"""
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ExtractionUnavailable(LinkhubCoreError):
    """本文中找不到可用的內容"""
