"""S3クライアント管理"""
from dataclasses import dataclass
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..exceptions import CredentialError
from ..models.config import AWSConfig, UploadOptions
from ..utils.logger import LoggerManager


@dataclass(frozen=True)
class Credentials:
    """下流ツールに渡す認証情報"""
    access_key_id: str
    secret_access_key: str
    region: Optional[str]
    session_token: Optional[str] = None


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, aws_config: AWSConfig, options: Optional[UploadOptions] = None):
        self.aws_config = aws_config
        self.options = options or UploadOptions()
        self.logger = LoggerManager.get_logger()
        self._session: Optional[boto3.Session] = None
        self._client = None

    @property
    def session(self) -> boto3.Session:
        if self._session is None:
            self._session = boto3.Session(
                profile_name=self.aws_config.profile,
                region_name=self.aws_config.region,
            )
        return self._session

    def get_client(self):
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def build_boto_config(self) -> BotoConfig:
        """タイムアウトとアドレッシング方式を含むbotocore設定"""
        s3_options = {}
        # MinIOなどエンドポイント指定時はパス形式でアクセス
        if self.aws_config.endpoint:
            s3_options["addressing_style"] = "path"
        return BotoConfig(
            connect_timeout=self.options.connect_timeout,
            read_timeout=self.options.read_timeout,
            s3=s3_options or None,
        )

    def _create_client(self):
        """S3クライアントを作成"""
        try:
            s3_client = self.session.client(
                's3',
                region_name=self.aws_config.region,
                endpoint_url=self.aws_config.endpoint,
                config=self.build_boto_config(),
            )
        except BotoCoreError as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise

        if self.aws_config.endpoint:
            self.logger.info(f"S3 client created for endpoint {self.aws_config.endpoint}")
        else:
            self.logger.info("S3 client created with default credentials.")
        return s3_client

    def retrieve_credentials(self) -> Credentials:
        """セッションの認証情報を取得"""
        try:
            boto_credentials = self.session.get_credentials()
            if boto_credentials is None:
                raise NoCredentialsError()
            frozen = boto_credentials.get_frozen_credentials()
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"AWS credentials not available: {e}")
            raise CredentialError(f"Unable to retrieve AWS credentials: {e}") from e

        return Credentials(
            access_key_id=frozen.access_key,
            secret_access_key=frozen.secret_key,
            region=self.aws_config.region or self.session.region_name,
            session_token=frozen.token,
        )
