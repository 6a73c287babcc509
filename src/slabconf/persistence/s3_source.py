"""S3 source for the dispatch table, shared by every bot instance."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from slabconf.core.exceptions import ConfigSourceError

logger = logging.getLogger(__name__)

TOML_CONTENT_TYPE = "application/toml"


class S3ConfigSource:
    """IConfigSource backed by a single S3 object."""

    def __init__(self, bucket: str, key: str, region: str = "eu-west-3",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        self._key = key
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def read(self) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=self._key)
            return resp["Body"].read()
        except (BotoCoreError, ClientError) as exc:
            raise ConfigSourceError(f"S3 read failed for {self.describe()}: {exc}") from exc

    def write(self, data: bytes) -> str:
        """Upload a new revision of the table; returns the object's URI."""
        try:
            self._client.put_object(
                Bucket=self._bucket, Key=self._key, Body=data, ContentType=TOML_CONTENT_TYPE,
            )
        except (BotoCoreError, ClientError) as exc:
            raise ConfigSourceError(f"S3 write failed for {self.describe()}: {exc}") from exc
        logger.info("Uploaded %d bytes to %s", len(data), self.describe())
        return self.describe()

    def describe(self) -> str:
        return f"s3://{self._bucket}/{self._key}"
