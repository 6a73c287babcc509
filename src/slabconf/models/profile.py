"""Instance profile: the machine a CI command runs on."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr

AMI_PATTERN = r"^ami-[0-9a-f]+$"


class Profile(BaseModel):
    """A named bundle of AWS region, machine image and instance type."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    region: StrictStr = Field(min_length=1)
    image_id: StrictStr = Field(pattern=AMI_PATTERN)
    instance_type: StrictStr = Field(min_length=1)
