"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class SourceConfig(BaseSettings):
    """Where the dispatch table is read from."""

    model_config = {"env_prefix": "SLAB_SOURCE_"}

    path: str = "config/slab.toml"
    s3_bucket: str = ""  # non-empty switches the loader to S3
    s3_key: str = "ci/slab.toml"
    region: str = "eu-west-3"
    endpoint_url: str | None = None  # LocalStack override


class AwsConfig(BaseSettings):
    """EC2 verification of declared profiles."""

    model_config = {"env_prefix": "SLAB_AWS_"}

    endpoint_url: str | None = None  # LocalStack override
    verify_images: bool = False


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SLAB_"}

    environment: Literal["dev", "ci", "prod"] = "dev"
    log_level: str = "INFO"

    source: SourceConfig = SourceConfig()
    aws: AwsConfig = AwsConfig()
