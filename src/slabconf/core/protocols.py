"""Protocol interfaces for slabconf abstractions.

Sources and catalogs are structurally typed: no inheritance required, easy
to swap for in-memory fakes in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from slabconf.core.types import ImageId, InstanceType, Region


# ---------------------------------------------------------------------------
# Configuration source
# ---------------------------------------------------------------------------

@runtime_checkable
class IConfigSource(Protocol):
    """Somewhere the raw dispatch table bytes live (local file, S3, memory)."""

    def read(self) -> bytes: ...

    def describe(self) -> str: ...


# ---------------------------------------------------------------------------
# EC2 catalog
# ---------------------------------------------------------------------------

@runtime_checkable
class IImageCatalog(Protocol):
    """Lookup of machine images and instance type availability per region."""

    def image_exists(self, region: Region, image_id: ImageId) -> bool: ...

    def instance_type_offered(self, region: Region, instance_type: InstanceType) -> bool: ...
