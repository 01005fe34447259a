#!/usr/bin/env python3
"""設定クラスのテスト"""
import json

import pytest

from backup_uploader.exceptions import ConfigurationError
from backup_uploader.models.config import AWSConfig, Config, UploadOptions


def test_from_env_reads_location_and_endpoint():
    config = Config.from_env({
        "LOCATION": "/data/backups",
        "ENDPOINT": "http://minio:9000",
        "AWS_REGION": "eu-west-1",
        "LOG_LEVEL": "DEBUG",
    })

    assert config.options.location == "/data/backups"
    assert config.aws.endpoint == "http://minio:9000"
    assert config.aws.region == "eu-west-1"
    assert config.logging.level == "DEBUG"


def test_from_env_defaults():
    config = Config.from_env({})

    assert config.options.location == "/backups"
    assert config.options.parallel_uploads == 1
    assert config.aws.endpoint is None
    assert config.aws.region is None


def test_from_env_falls_back_to_default_region():
    config = Config.from_env({"AWS_DEFAULT_REGION": "ap-northeast-1"})
    assert config.aws.region == "ap-northeast-1"


def test_blank_endpoint_is_ignored():
    assert AWSConfig(endpoint="   ").endpoint is None


def test_invalid_parallel_uploads_env():
    with pytest.raises(ConfigurationError):
        Config.from_env({"PARALLEL_UPLOADS": "many"})
    with pytest.raises(ConfigurationError):
        Config.from_env({"PARALLEL_UPLOADS": "0"})


def test_upload_options_validation():
    with pytest.raises(ValueError):
        UploadOptions(read_timeout=0)
    with pytest.raises(ValueError):
        UploadOptions(max_concurrency=0)


def test_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "logging": {"level": "WARNING"},
        "aws": {"region": "us-west-2", "endpoint": "http://localhost:9000"},
        "options": {"location": "/tmp/backups", "parallel_uploads": 2, "dry_run": True},
    }))

    config = Config.from_file(str(path))

    assert config.logging.level == "WARNING"
    assert config.aws.endpoint == "http://localhost:9000"
    assert config.options.parallel_uploads == 2
    assert config.options.dry_run


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_file(str(tmp_path / "missing.json"))


def test_from_file_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ValueError):
        Config.from_file(str(path))


def test_from_file_unknown_option(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"options": {"multipart_threshold": 10}}))

    with pytest.raises(ConfigurationError):
        Config.from_file(str(path))
