"""Backup Uploader パッケージ"""
import threading
from typing import List, Optional, Sequence, Union

from botocore.exceptions import BotoCoreError

from .exceptions import (
    BackupUploaderError,
    ConfigurationError,
    ConnectivityError,
    CredentialError,
    FileIOError,
    UploadCancelledError,
    UploadError,
)
from .models.bucket import BucketAddress, UploadTarget, resolve
from .models.config import Config
from .utils.logger import LoggerManager
from .core.s3_client import S3ClientManager
from .core.connectivity import ConnectivityChecker
from .core.credentials import CredentialEnvironmentBridge
from .core.transfer import UploadStrategy, classify
from .core.uploader import (
    ParallelUploadDispatcher,
    UploadDispatcher,
    UploadExecutor,
    UploadResult,
)


class BackupUploader:
    """バックアップファイルをS3へアップロードするメインクラス"""

    def __init__(self, config: Optional[Config] = None, s3_client=None,
                 client_manager: Optional[S3ClientManager] = None,
                 bridge: Optional[CredentialEnvironmentBridge] = None):
        # 設定が無ければ環境変数から
        self.config = config or Config.from_env()

        self.logger = LoggerManager.setup(self.config.logging)
        self.client_manager = client_manager or S3ClientManager(self.config.aws, self.config.options)
        self._s3_client = s3_client
        self.bridge = bridge or CredentialEnvironmentBridge()
        self.logger.info("Backup Uploader initialized")

    @property
    def s3_client(self):
        if self._s3_client is None:
            self._s3_client = self.client_manager.get_client()
        return self._s3_client

    def check_access(self, bucket_address: Union[str, BucketAddress]) -> None:
        """バケットへの接続を確認"""
        try:
            s3_client = self.s3_client
        except BotoCoreError as e:
            address = str(bucket_address)
            raise ConnectivityError(
                f"Unable to connect to s3 bucket {address}. Here's why: {e}", address
            ) from e
        ConnectivityChecker(s3_client).check_access(bucket_address)

    def upload_files(self, file_names: Sequence[str],
                     bucket_address: Union[str, BucketAddress],
                     cancel_event: Optional[threading.Event] = None) -> List[UploadResult]:
        """LOCATION配下のファイルをアップロード（最初の失敗で中断）"""
        options = self.config.options
        try:
            s3_client = self.s3_client
        except BotoCoreError as e:
            raise CredentialError(f"Unable to create S3 client: {e}") from e
        executor = UploadExecutor(s3_client, options)
        if options.parallel_uploads > 1:
            dispatcher = ParallelUploadDispatcher(executor, options.location, options.parallel_uploads)
        else:
            dispatcher = UploadDispatcher(executor, options.location)
        return dispatcher.upload_all(file_names, bucket_address, cancel_event)

    def export_credentials(self) -> None:
        """認証情報を環境変数へ書き出す"""
        credentials = self.client_manager.retrieve_credentials()
        self.bridge.export_credentials(credentials)


__all__ = [
    'BackupUploader',
    'BucketAddress',
    'UploadTarget',
    'UploadStrategy',
    'UploadResult',
    'Config',
    'resolve',
    'classify',
    'BackupUploaderError',
    'ConfigurationError',
    'ConnectivityError',
    'CredentialError',
    'FileIOError',
    'UploadCancelledError',
    'UploadError',
]
