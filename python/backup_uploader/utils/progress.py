"""マルチパートアップロードの進捗とキャンセル監視"""
import time
import threading
from typing import Optional

from ..exceptions import UploadCancelledError
from ..models.bucket import UploadTarget
from .logger import LoggerManager

# 進捗ログの間隔（%）
LOG_STEP = 10


class ProgressTracker:
    """単一ファイルのアップロード進捗を追跡

    boto3のCallbackとして渡す。キャンセルイベントがセットされていれば
    次のチャンク転送時に UploadCancelledError を送出する。
    """

    def __init__(self, total_size: int, path: str, target: UploadTarget,
                 cancel_event: Optional[threading.Event] = None, enabled: bool = True):
        self.total_size = total_size
        self.path = path
        self.target = target
        self.cancel_event = cancel_event
        self.enabled = enabled
        self.uploaded_size = 0
        self.lock = threading.Lock()
        self.start_time = time.monotonic()
        self._last_logged = 0
        self.logger = LoggerManager.get_logger()

    def __call__(self, bytes_transferred: int):
        """boto3のコールバック関数として使用"""
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise UploadCancelledError(
                f"Upload of {self.path} cancelled",
                self.target.bucket, self.target.key, self.path,
            )
        with self.lock:
            self.uploaded_size += bytes_transferred
            if self.enabled:
                self._log_progress()

    @property
    def percent(self) -> float:
        if self.total_size == 0:
            return 100.0
        return self.uploaded_size * 100 / self.total_size

    def _log_progress(self):
        step = int(self.percent) // LOG_STEP * LOG_STEP
        if step <= self._last_logged:
            return
        self._last_logged = step

        elapsed_time = time.monotonic() - self.start_time
        speed = self.uploaded_size / elapsed_time / 1024 / 1024 if elapsed_time > 0 else 0
        self.logger.info(
            f"{self.path}: {self.percent:.1f}% ({self.uploaded_size}/{self.total_size}) "
            f"- {speed:.2f} MB/s"
        )
