"""バックアップアップローダーの例外階層"""
from typing import Dict, Optional


class BackupUploaderError(Exception):
    """全てのアップローダー例外の基底クラス"""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BackupUploaderError):
    """設定が不正または不足している"""
    pass


class ConnectivityError(BackupUploaderError):
    """バケットに到達できない、または仮想サブバケットが存在しない"""

    def __init__(self, message: str, bucket: str):
        super().__init__(message, {"bucket": bucket})
        self.bucket = bucket


class FileIOError(BackupUploaderError):
    """ローカルファイルのopen/statに失敗"""

    def __init__(self, message: str, path: str):
        super().__init__(message, {"path": path})
        self.path = path


class UploadError(BackupUploaderError):
    """直接アップロードまたはマルチパートアップロード中の失敗"""

    def __init__(self, message: str, bucket: str, key: str, path: str):
        super().__init__(message, {"bucket": bucket, "key": key, "path": path})
        self.bucket = bucket
        self.key = key
        self.path = path


class UploadCancelledError(UploadError):
    """キャンセルまたはタイムアウトによる中断"""
    pass


class CredentialError(BackupUploaderError):
    """認証情報の取得または環境変数への書き出しに失敗"""
    pass
