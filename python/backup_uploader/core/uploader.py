"""S3アップロード実行クラス"""
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed, wait
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)
from ..exceptions import FileIOError, UploadCancelledError, UploadError
from ..models.bucket import BucketAddress, UploadTarget
from ..models.config import UploadOptions
from ..utils.file_utils import FileInfo, FileScanner
from ..utils.logger import LoggerManager
from ..utils.progress import ProgressTracker
from .transfer import TransferConfigManager, UploadStrategy, classify


@dataclass
class UploadResult:
    """アップロード結果"""
    file_path: str
    target: UploadTarget
    strategy: UploadStrategy
    dry_run: bool = False


class UploadExecutor:
    """ファイル単位のアップロード実行（直接 / マルチパート）"""

    def __init__(self, s3_client, options: UploadOptions):
        self.s3_client = s3_client
        self.options = options
        self.logger = LoggerManager.get_logger()
        self.transfer_config = TransferConfigManager.create_config(options)

    def upload_file(self, file_info: FileInfo, target: UploadTarget,
                    cancel_event: Optional[threading.Event] = None) -> UploadResult:
        """単一ファイルをアップロード"""
        strategy = classify(file_info.size)

        if self.options.dry_run:
            self.logger.info(
                f"[DRY RUN]: Would upload {file_info.path} ({strategy.value}) "
                f"to {target.bucket}/{target.key}"
            )
            return UploadResult(file_info.path, target, strategy, dry_run=True)

        if cancel_event is not None and cancel_event.is_set():
            raise UploadCancelledError(
                f"Upload of {file_info.path} cancelled before start",
                target.bucket, target.key, file_info.path,
            )

        self.logger.info(f"Starting upload of file {file_info.path}")
        self.logger.info(f"KeyName := {target.key}")

        try:
            file = open(file_info.path, "rb")
        except OSError as e:
            self.logger.error(f"Couldn't open file {file_info.path}: {e}")
            raise FileIOError(
                f"Couldn't open file {file_info.path} to upload. Here's why: {e}",
                file_info.path,
            ) from e

        with file:
            try:
                if strategy is UploadStrategy.MULTIPART:
                    self._upload_multipart(file, file_info, target, cancel_event)
                else:
                    self.s3_client.put_object(Bucket=target.bucket, Key=target.key, Body=file)
            except UploadError:
                raise
            except (ConnectTimeoutError, ReadTimeoutError) as e:
                self.logger.error(f"Upload of {file_info.path} timed out: {e}")
                raise UploadCancelledError(
                    f"Upload of {file_info.path} to {target.bucket}/{target.key} timed out: {e}",
                    target.bucket, target.key, file_info.path,
                ) from e
            except (ClientError, BotoCoreError) as e:
                self.logger.error(f"AWS error uploading {file_info.path}: {e}")
                raise UploadError(
                    f"Couldn't upload file {file_info.path} to "
                    f"{target.bucket}/{target.key}. Here's why: {e}",
                    target.bucket, target.key, file_info.path,
                ) from e

        if strategy is UploadStrategy.MULTIPART:
            self.logger.info(f"File (Large) {file_info.name} uploaded to s3 bucket {target.bucket} !!")
        else:
            self.logger.info(f"File {file_info.name} uploaded to s3 bucket {target.bucket} !!")
        return UploadResult(file_info.path, target, strategy)

    def _upload_multipart(self, file, file_info: FileInfo, target: UploadTarget,
                          cancel_event: Optional[threading.Event]):
        """1GBパートに分割してアップロード"""
        tracker = ProgressTracker(
            file_info.size, file_info.path, target,
            cancel_event=cancel_event, enabled=self.options.enable_progress,
        )
        self.s3_client.upload_fileobj(
            file,
            target.bucket,
            target.key,
            Config=self.transfer_config,
            Callback=tracker,
        )


class UploadDispatcher:
    """ファイル一覧を順番にアップロード（AllOrAbort）

    最初に失敗したファイルで処理を打ち切り、その例外をそのまま送出する。
    一部だけアップロードされたバックアップを成功として報告しないため。
    """

    def __init__(self, executor: UploadExecutor, location: str):
        self.executor = executor
        self.file_scanner = FileScanner(location)
        self.logger = LoggerManager.get_logger()

    def upload_all(self, file_names: Sequence[str],
                   bucket_address: Union[str, BucketAddress],
                   cancel_event: Optional[threading.Event] = None) -> List[UploadResult]:
        if not isinstance(bucket_address, BucketAddress):
            bucket_address = BucketAddress.parse(bucket_address)

        self.logger.info(f"Uploading {len(file_names)} files to {bucket_address}")
        results = []
        for file_name in file_names:
            results.append(self._upload_one(file_name, bucket_address, cancel_event))
        return results

    def _upload_one(self, file_name: str, bucket_address: BucketAddress,
                    cancel_event: Optional[threading.Event]) -> UploadResult:
        try:
            file_info = self.file_scanner.get_file_info(file_name)
        except FileIOError as e:
            self.logger.error(e.message)
            raise
        return self.executor.upload_file(file_info, bucket_address.target(file_name), cancel_event)


class ParallelUploadDispatcher(UploadDispatcher):
    """並列アップロード（AllOrAbort は維持）

    いずれかのファイルが失敗したら未開始のタスクを取り消し、
    実行中のマルチパート転送にもキャンセルを通知してから最初の例外を送出する。
    """

    def __init__(self, executor: UploadExecutor, location: str, max_workers: int = 2):
        super().__init__(executor, location)
        self.max_workers = max_workers

    def upload_all(self, file_names: Sequence[str],
                   bucket_address: Union[str, BucketAddress],
                   cancel_event: Optional[threading.Event] = None) -> List[UploadResult]:
        if not isinstance(bucket_address, BucketAddress):
            bucket_address = BucketAddress.parse(bucket_address)
        cancel_event = cancel_event or threading.Event()

        self.logger.info(
            f"Starting parallel upload of {len(file_names)} files "
            f"to {bucket_address} with {self.max_workers} workers"
        )

        results = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            future_to_name = {
                pool.submit(self._upload_one, file_name, bucket_address, cancel_event): file_name
                for file_name in file_names
            }
            for future in as_completed(future_to_name):
                error = future.exception()
                if error is not None:
                    self.logger.error(
                        f"Upload of {future_to_name[future]} failed, aborting remaining uploads"
                    )
                    cancel_event.set()
                    for pending in future_to_name:
                        pending.cancel()
                    wait(future_to_name)
                    raise error
                results[future_to_name[future]] = future.result()

        return [results[file_name] for file_name in file_names]
