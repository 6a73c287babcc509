"""EC2 lookups used to check that declared profiles can actually be provisioned."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from slabconf.core.exceptions import AwsVerificationError
from slabconf.core.protocols import IImageCatalog
from slabconf.models.table import SlabConfig

logger = logging.getLogger(__name__)

_MISSING_IMAGE_CODES = {"InvalidAMIID.NotFound", "InvalidAMIID.Malformed", "InvalidAMIID.Unavailable"}


class Ec2Catalog:
    """IImageCatalog backed by the EC2 API, one client per region."""

    def __init__(self, endpoint_url: str | None = None) -> None:
        self._endpoint_url = endpoint_url
        self._clients: dict[str, Any] = {}

    def _client(self, region: str):
        if region not in self._clients:
            kwargs: dict = {"region_name": region}
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url
            self._clients[region] = boto3.client("ec2", **kwargs)
        return self._clients[region]

    def image_exists(self, region: str, image_id: str) -> bool:
        try:
            resp = self._client(region).describe_images(ImageIds=[image_id])
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_IMAGE_CODES:
                return False
            raise AwsVerificationError(
                f"describe_images failed for {image_id!r} in {region}: {exc}"
            ) from exc
        except BotoCoreError as exc:
            raise AwsVerificationError(f"describe_images failed in {region}: {exc}") from exc
        return any(img.get("ImageId") == image_id for img in resp.get("Images", []))

    def instance_type_offered(self, region: str, instance_type: str) -> bool:
        try:
            resp = self._client(region).describe_instance_type_offerings(
                LocationType="region",
                Filters=[{"Name": "instance-type", "Values": [instance_type]}],
            )
        except (BotoCoreError, ClientError) as exc:
            raise AwsVerificationError(
                f"describe_instance_type_offerings failed for {instance_type!r} in {region}: {exc}"
            ) from exc
        return any(
            o.get("InstanceType") == instance_type for o in resp.get("InstanceTypeOfferings", [])
        )


def verify_profiles(config: SlabConfig, catalog: IImageCatalog) -> list[str]:
    """Check every profile's image and instance type against the catalog.

    Returns one issue string per problem, in profile-name order. Identical
    (region, image) and (region, instance type) pairs are looked up once.
    """
    images: dict[tuple[str, str], bool] = {}
    types: dict[tuple[str, str], bool] = {}
    issues: list[str] = []

    for name, profile in sorted(config.profiles.items()):
        image_key = (profile.region, profile.image_id)
        if image_key not in images:
            images[image_key] = catalog.image_exists(*image_key)
        if not images[image_key]:
            issues.append(
                f"profile.{name}: image {profile.image_id!r} not found in {profile.region}"
            )

        type_key = (profile.region, profile.instance_type)
        if type_key not in types:
            types[type_key] = catalog.instance_type_offered(*type_key)
        if not types[type_key]:
            issues.append(
                f"profile.{name}: instance type {profile.instance_type!r} "
                f"not offered in {profile.region}"
            )

    logger.info("Verified %d profile(s) against EC2: %d issue(s)", len(config.profiles), len(issues))
    return issues
