"""CI command: an operator trigger mapped to a workflow and a profile."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class Command(BaseModel):
    """One ``[command.<name>]`` entry of the dispatch table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    workflow: StrictStr
    profile: StrictStr = Field(min_length=1)
    check_run_name: StrictStr

    @field_validator("workflow")
    @classmethod
    def _workflow_is_yml_filename(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("workflow must be a bare filename, not a path")
        if not value.endswith(".yml") or value == ".yml":
            raise ValueError("workflow must be a filename ending in '.yml'")
        return value

    @field_validator("check_run_name")
    @classmethod
    def _check_run_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("check_run_name must not be blank")
        return value
