"""Integration test fixtures: LocalStack S3 and EC2."""

from __future__ import annotations

import os

import boto3
import pytest
from botocore.exceptions import BotoCoreError, ClientError

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
REGION = "us-east-1"
BUCKET = "slabconf-inttest"


@pytest.fixture(scope="session")
def localstack_s3():
    """S3 client pointing at LocalStack; skips when LocalStack is not running."""
    client = boto3.client("s3", region_name=REGION, endpoint_url=LOCALSTACK_URL)
    try:
        client.list_buckets()
    except (BotoCoreError, ClientError):
        pytest.skip("LocalStack not available")
    existing = [b["Name"] for b in client.list_buckets().get("Buckets", [])]
    if BUCKET not in existing:
        client.create_bucket(Bucket=BUCKET)
    return client


@pytest.fixture(scope="session")
def localstack_url() -> str:
    return LOCALSTACK_URL


@pytest.fixture(scope="session")
def localstack_bucket(localstack_s3) -> str:
    return BUCKET
