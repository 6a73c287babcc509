"""Unit tests for S3ConfigSource using moto."""

from __future__ import annotations

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError, NoCredentialsError
from moto import mock_aws

from slabconf.core.exceptions import ConfigSourceError
from slabconf.persistence import load_from_source
from slabconf.persistence.s3_source import S3ConfigSource

BUCKET = "test-ci-config"
REGION = "us-east-1"


@pytest.fixture
def s3_client():
    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def source(s3_client):
    return S3ConfigSource(bucket=BUCKET, key="ci/slab.toml", region=REGION)


class TestRead:
    def test_read_returns_bytes(self, s3_client, source):
        s3_client.put_object(Bucket=BUCKET, Key="ci/slab.toml", Body=b"[profile]\n")
        assert source.read() == b"[profile]\n"

    def test_read_missing_key_raises(self, source):
        with pytest.raises(ConfigSourceError, match="s3://test-ci-config/ci/slab.toml"):
            source.read()

    def test_read_missing_bucket_raises(self, s3_client):
        src = S3ConfigSource(bucket="no-such-bucket", key="ci/slab.toml", region=REGION)
        with pytest.raises(ConfigSourceError):
            src.read()


class TestWrite:
    def test_write_returns_uri(self, source):
        assert source.write(b"x") == "s3://test-ci-config/ci/slab.toml"

    def test_write_sets_toml_content_type(self, s3_client, source):
        source.write(b"x")
        head = s3_client.head_object(Bucket=BUCKET, Key="ci/slab.toml")
        assert head["ContentType"] == "application/toml"


class TestLoad:
    def test_load_table_from_s3(self, source, small_text):
        source.write(small_text.encode("utf-8"))
        config = load_from_source(source)
        assert config.resolve("code_coverage").profile == "cpu-small"

    def test_non_utf8_bytes_rejected(self, source):
        source.write(b"\xff\xfe")
        with pytest.raises(ConfigSourceError, match="UTF-8"):
            load_from_source(source)


class TestBotocoreFailures:
    def test_missing_credentials_on_read(self, source, monkeypatch):
        def no_credentials(**kwargs):
            raise NoCredentialsError()

        monkeypatch.setattr(source._client, "get_object", no_credentials)
        with pytest.raises(ConfigSourceError, match="S3 read failed"):
            source.read()

    def test_unreachable_endpoint_on_write(self, source, monkeypatch):
        def unreachable(**kwargs):
            raise EndpointConnectionError(endpoint_url="http://localhost:4566")

        monkeypatch.setattr(source._client, "put_object", unreachable)
        with pytest.raises(ConfigSourceError, match="S3 write failed"):
            source.write(b"x")
