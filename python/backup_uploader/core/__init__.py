"""Backup Uploader コアモジュール"""
from .s3_client import S3ClientManager, Credentials
from .connectivity import ConnectivityChecker
from .credentials import CredentialEnvironmentBridge
from .transfer import UploadStrategy, classify
from .uploader import UploadExecutor, UploadDispatcher, ParallelUploadDispatcher, UploadResult

__all__ = [
    'S3ClientManager',
    'Credentials',
    'ConnectivityChecker',
    'CredentialEnvironmentBridge',
    'UploadStrategy',
    'classify',
    'UploadExecutor',
    'UploadDispatcher',
    'ParallelUploadDispatcher',
    'UploadResult',
]
