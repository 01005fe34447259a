"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import Mapping, Optional
import json
import os

from ..exceptions import ConfigurationError


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AWSConfig:
    """AWS関連の設定"""
    region: Optional[str] = None
    profile: Optional[str] = None
    endpoint: Optional[str] = None  # MinIOなどS3互換ストレージ用

    def __post_init__(self):
        # 空白のみのエンドポイントは未指定扱い
        if self.endpoint is not None and not self.endpoint.strip():
            self.endpoint = None
        elif self.endpoint is not None:
            self.endpoint = self.endpoint.strip()


@dataclass
class UploadOptions:
    """アップロードオプション"""
    location: str = "/backups"
    max_concurrency: int = 4
    use_threads: bool = True
    max_io_queue: int = 100
    io_chunksize: int = 262144  # 256KB
    connect_timeout: int = 60
    read_timeout: int = 300
    parallel_uploads: int = 1
    enable_progress: bool = False
    dry_run: bool = False

    def __post_init__(self):
        if self.parallel_uploads < 1:
            raise ValueError(
                f"Invalid parallel_uploads: {self.parallel_uploads}. Must be at least 1"
            )
        if self.max_concurrency < 1:
            raise ValueError(
                f"Invalid max_concurrency: {self.max_concurrency}. Must be at least 1"
            )
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError(
                f"Invalid timeouts: connect={self.connect_timeout}, read={self.read_timeout}. "
                "Must be positive"
            )


@dataclass
class Config:
    """メイン設定クラス"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    aws: AWSConfig = field(default_factory=AWSConfig)
    options: UploadOptions = field(default_factory=UploadOptions)

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """設定ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file {config_path} not found.")

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)

            return cls(
                logging=LoggingConfig(**data.get("logging", {})),
                aws=AWSConfig(**data.get("aws", {})),
                options=UploadOptions(**data.get("options", {})),
            )

        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {config_path}: {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Error loading configuration: {e}") from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """環境変数から読み込み

        バックアップジョブのコンテナから渡される LOCATION / ENDPOINT と
        標準的な AWS_* 変数を参照する。
        """
        env = os.environ if environ is None else environ

        logging_config = LoggingConfig(
            level=env.get("LOG_LEVEL", "INFO"),
            file=env.get("LOG_FILE") or None,
        )
        aws_config = AWSConfig(
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
            profile=env.get("AWS_PROFILE") or None,
            endpoint=env.get("ENDPOINT"),
        )

        options_kwargs = {}
        if env.get("LOCATION"):
            options_kwargs["location"] = env["LOCATION"]
        if env.get("PARALLEL_UPLOADS"):
            try:
                options_kwargs["parallel_uploads"] = int(env["PARALLEL_UPLOADS"])
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid PARALLEL_UPLOADS value: {env['PARALLEL_UPLOADS']}"
                ) from e

        try:
            options = UploadOptions(**options_kwargs)
        except ValueError as e:
            raise ConfigurationError(f"Error loading configuration: {e}") from e

        return cls(logging=logging_config, aws=aws_config, options=options)
