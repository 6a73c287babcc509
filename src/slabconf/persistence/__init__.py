"""Pluggable dispatch table sources behind Protocol interfaces."""

from __future__ import annotations

import logging

from slabconf.codec import loads
from slabconf.core.config import AppSettings
from slabconf.core.exceptions import ConfigSourceError
from slabconf.core.protocols import IConfigSource
from slabconf.models.table import SlabConfig
from slabconf.persistence.ec2_catalog import Ec2Catalog, verify_profiles
from slabconf.persistence.file_source import FileConfigSource
from slabconf.persistence.memory_source import MemoryConfigSource
from slabconf.persistence.s3_source import S3ConfigSource

logger = logging.getLogger(__name__)

__all__ = [
    "Ec2Catalog",
    "FileConfigSource",
    "MemoryConfigSource",
    "S3ConfigSource",
    "create_source",
    "load_bytes",
    "load_from_source",
    "verify_profiles",
]


def create_source(settings: AppSettings | None = None) -> IConfigSource:
    """Create the configured table source: S3 when a bucket is set, else a local file."""
    if settings is None:
        settings = AppSettings()

    src = settings.source
    if src.s3_bucket:
        return S3ConfigSource(
            bucket=src.s3_bucket,
            key=src.s3_key,
            region=src.region,
            endpoint_url=src.endpoint_url,
        )
    return FileConfigSource(src.path)


def load_bytes(raw: bytes, origin: str) -> SlabConfig:
    """Parse raw table bytes; ``origin`` names where they came from in errors."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigSourceError(f"{origin} is not valid UTF-8: {exc}") from exc
    logger.info("Loading dispatch table from %s", origin)
    return loads(text)


def load_from_source(source: IConfigSource) -> SlabConfig:
    """Read a source and parse its bytes as a dispatch table."""
    return load_bytes(source.read(), source.describe())
