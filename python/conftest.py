"""共通フィクスチャ"""
import boto3
import pytest
from moto import mock_aws

from backup_uploader.utils.logger import LoggerManager

REGION = "us-east-1"


def pytest_configure(config):
    config.addinivalue_line("markers", "s3: tests that run against moto S3")


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    LoggerManager.reset()


@pytest.fixture
def aws_env(monkeypatch):
    """motoが使うダミーの認証情報"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("ENDPOINT", raising=False)


@pytest.fixture
def s3(aws_env):
    """バケット demo を作成済みのmoto S3クライアント"""
    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        client.create_bucket(Bucket="demo")
        yield client


@pytest.fixture
def backup_dir(tmp_path):
    """小さなバックアップファイルを置いたディレクトリ"""
    for name in ("a.dump", "b.dump", "c.dump"):
        (tmp_path / name).write_bytes(f"backup {name}".encode())
    return tmp_path
