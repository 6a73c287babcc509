"""Validate the dispatch table and publish it to S3 for the dispatch bot.

Usage:
    python scripts/publish_config.py --bucket ci-slab --endpoint-url http://localhost:4566
    python scripts/publish_config.py --bucket ci-slab --dry-run
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import boto3

from slabconf.core.exceptions import SlabConfigError
from slabconf.persistence import FileConfigSource, S3ConfigSource, load_bytes

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "slab.toml"


def ensure_bucket(s3: Any, bucket: str, region: str) -> None:
    """Create the bucket if it does not exist yet."""
    existing = [b["Name"] for b in s3.list_buckets().get("Buckets", [])]
    if bucket in existing:
        print(f"  Bucket {bucket} already exists, skipping")
        return
    kwargs: dict[str, Any] = {"Bucket": bucket}
    if region != "us-east-1":
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
    s3.create_bucket(**kwargs)
    print(f"  Created bucket {bucket}")


def publish(path: Path, bucket: str, key: str, region: str,
            endpoint_url: str | None = None, dry_run: bool = False) -> str | None:
    """Validate ``path`` and upload it unchanged. Returns the S3 URI, or None on dry run."""
    data = FileConfigSource(path).read()
    config = load_bytes(data, str(path))
    print(f"  Validated {path}: {len(config.profiles)} profiles, {len(config.commands)} commands")

    if dry_run:
        print("  Dry run, not uploading")
        return None

    source = S3ConfigSource(bucket=bucket, key=key, region=region, endpoint_url=endpoint_url)
    uri = source.write(data)
    print(f"  Published {uri}")
    return uri


def main() -> None:
    parser = argparse.ArgumentParser(description="Publish the CI dispatch table to S3")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG), help="Path to slab.toml")
    parser.add_argument("--bucket", required=True, help="Target S3 bucket")
    parser.add_argument("--key", default="ci/slab.toml", help="Target S3 key")
    parser.add_argument("--region", default="eu-west-3", help="AWS region")
    parser.add_argument("--endpoint-url", default=None, help="S3 endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--create-bucket", action="store_true", help="Create the bucket if missing")
    parser.add_argument("--dry-run", action="store_true", help="Validate only")
    args = parser.parse_args()

    if args.create_bucket and not args.dry_run:
        kwargs: dict[str, Any] = {"region_name": args.region}
        if args.endpoint_url:
            kwargs["endpoint_url"] = args.endpoint_url
        ensure_bucket(boto3.client("s3", **kwargs), args.bucket, args.region)

    print("Publishing dispatch table...")
    try:
        publish(Path(args.config), args.bucket, args.key, args.region,
                endpoint_url=args.endpoint_url, dry_run=args.dry_run)
    except SlabConfigError as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        sys.exit(1)

    print("Done!")


if __name__ == "__main__":
    main()
