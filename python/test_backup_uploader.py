#!/usr/bin/env python3
"""BackupUploader（呼び出し側API）のテスト"""
import pytest
from botocore.exceptions import ProfileNotFound

from backup_uploader import (
    BackupUploader,
    Config,
    ConnectivityError,
    CredentialError,
    FileIOError,
    UploadStrategy,
)
from backup_uploader.core.credentials import CredentialEnvironmentBridge
from backup_uploader.models.config import AWSConfig, UploadOptions


def make_uploader(s3, location, **options):
    config = Config(
        aws=AWSConfig(region="us-east-1"),
        options=UploadOptions(location=str(location), **options),
    )
    return BackupUploader(config, s3_client=s3)


@pytest.mark.s3
def test_check_then_upload(s3, backup_dir):
    s3.put_object(Bucket="demo", Key="test/test2/.keep", Body=b"")
    uploader = make_uploader(s3, backup_dir)

    uploader.check_access("demo/test/test2")
    results = uploader.upload_files(["a.dump", "b.dump"], "demo/test/test2")

    assert [r.strategy for r in results] == [UploadStrategy.DIRECT, UploadStrategy.DIRECT]
    s3.head_object(Bucket="demo", Key="test/test2/a.dump")
    s3.head_object(Bucket="demo", Key="test/test2/b.dump")


@pytest.mark.s3
def test_check_access_missing_virtual_bucket(s3, backup_dir):
    with pytest.raises(ConnectivityError):
        make_uploader(s3, backup_dir).check_access("demo/missing")


@pytest.mark.s3
def test_upload_aborts_on_missing_file(s3, backup_dir):
    (backup_dir / "b.dump").unlink()

    with pytest.raises(FileIOError):
        make_uploader(s3, backup_dir).upload_files(["a.dump", "b.dump", "c.dump"], "demo")

    keys = [obj["Key"] for obj in s3.list_objects_v2(Bucket="demo")["Contents"]]
    assert keys == ["a.dump"]


@pytest.mark.s3
def test_parallel_upload_option(s3, backup_dir):
    uploader = make_uploader(s3, backup_dir, parallel_uploads=3)

    results = uploader.upload_files(["a.dump", "b.dump", "c.dump"], "demo/p")

    assert [r.target.key for r in results] == ["p/a.dump", "p/b.dump", "p/c.dump"]


def test_export_credentials(aws_env, backup_dir):
    environ = {}
    config = Config(aws=AWSConfig(region="eu-west-1"), options=UploadOptions(location=str(backup_dir)))
    uploader = BackupUploader(config, bridge=CredentialEnvironmentBridge(environ))

    uploader.export_credentials()

    assert environ["AWS_ACCESS_KEY_ID"] == "testing"
    assert environ["AWS_SECRET_ACCESS_KEY"] == "testing"
    assert environ["AWS_REGION"] == "eu-west-1"


@pytest.fixture
def unknown_profile(aws_env, monkeypatch, tmp_path):
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")
    config = Config(
        aws=AWSConfig(region="us-east-1", profile="no-such-profile-xyz"),
        options=UploadOptions(location=str(tmp_path)),
    )
    return BackupUploader(config)


def test_check_access_with_broken_client_is_connectivity_error(unknown_profile):
    with pytest.raises(ConnectivityError) as exc_info:
        unknown_profile.check_access("demo/test")

    assert exc_info.value.bucket == "demo/test"
    assert isinstance(exc_info.value.__cause__, ProfileNotFound)


def test_upload_with_broken_client_is_credential_error(unknown_profile):
    with pytest.raises(CredentialError) as exc_info:
        unknown_profile.upload_files(["a.dump"], "demo")

    assert isinstance(exc_info.value.__cause__, ProfileNotFound)


def test_export_with_broken_client_is_credential_error(unknown_profile):
    with pytest.raises(CredentialError):
        unknown_profile.export_credentials()
