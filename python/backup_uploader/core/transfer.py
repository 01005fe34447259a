"""アップロード方式の判定とS3転送設定"""
from enum import Enum

from boto3.s3.transfer import TransferConfig as BotoTransferConfig
from ..models.config import UploadOptions

GiB = 1024 * 1024 * 1024

# 1GB以上はマルチパート、パートサイズも1GB固定
MULTIPART_THRESHOLD = GiB
MULTIPART_PART_SIZE = GiB


class UploadStrategy(Enum):
    """アップロード方式"""
    DIRECT = "direct"
    MULTIPART = "multipart"


def classify(size_bytes: int) -> UploadStrategy:
    """ファイルサイズからアップロード方式を決定"""
    if size_bytes >= MULTIPART_THRESHOLD:
        return UploadStrategy.MULTIPART
    return UploadStrategy.DIRECT


class TransferConfigManager:
    """S3転送設定の管理"""

    @staticmethod
    def create_config(options: UploadOptions) -> BotoTransferConfig:
        """マルチパートアップロード用のTransferConfigを作成"""
        return BotoTransferConfig(
            multipart_threshold=MULTIPART_THRESHOLD,
            multipart_chunksize=MULTIPART_PART_SIZE,
            max_concurrency=options.max_concurrency,
            use_threads=options.use_threads,
            max_io_queue=options.max_io_queue,
            io_chunksize=options.io_chunksize,
        )
