"""認証情報を環境変数へ書き出す"""
import os
import threading
from typing import MutableMapping, Optional

from ..exceptions import CredentialError
from ..utils.logger import LoggerManager
from .s3_client import Credentials

ACCESS_KEY_ENV = "AWS_ACCESS_KEY_ID"
SECRET_KEY_ENV = "AWS_SECRET_ACCESS_KEY"
REGION_ENV = "AWS_REGION"
SESSION_TOKEN_ENV = "AWS_SESSION_TOKEN"


class CredentialEnvironmentBridge:
    """認証情報を環境変数に反映する

    集約バックアップなど、認証情報をプログラムから受け取れない外部プロセス向け。
    アップロード開始前に一度だけ実行する。2回目以降は何もしない。
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        self.logger = LoggerManager.get_logger()
        self._lock = threading.Lock()
        self._exported = False

    @property
    def exported(self) -> bool:
        return self._exported

    def export_credentials(self, credentials: Credentials) -> None:
        with self._lock:
            if self._exported:
                self.logger.debug("Credentials already exported, skipping")
                return

            # リージョン未設定でも空文字で書き出す
            values = {
                ACCESS_KEY_ENV: credentials.access_key_id,
                SECRET_KEY_ENV: credentials.secret_access_key,
                REGION_ENV: credentials.region or "",
            }
            if credentials.session_token:
                values[SESSION_TOKEN_ENV] = credentials.session_token

            previous = {name: self.environ.get(name) for name in values}
            written = []
            try:
                for name, value in values.items():
                    self.environ[name] = value
                    written.append(name)
            except (OSError, TypeError, ValueError) as e:
                self.logger.error(f"Unable to export credentials to environment: {e}")
                self._restore(written, previous)
                raise CredentialError(f"Unable to set {name}: {e}") from e

            self._exported = True
            self.logger.info(f"Exported AWS credentials to environment ({', '.join(values)})")

    def _restore(self, written, previous):
        """途中まで書き込んだ変数を元に戻す"""
        for name in written:
            if previous[name] is None:
                self.environ.pop(name, None)
            else:
                self.environ[name] = previous[name]
