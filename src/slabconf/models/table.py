"""The dispatch table: profiles, commands, and the lookups the bot performs.

The table is immutable once loaded. Referential integrity (every command
points at a declared profile) is checked at construction, so a
``SlabConfig`` instance that exists is always resolvable.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from slabconf.core.exceptions import UnknownCommandError, UnknownProfileError
from slabconf.core.types import CommandName, ProfileName, WorkflowFile
from slabconf.models.command import Command
from slabconf.models.profile import Profile

BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")
DANGLING_PROFILE = "dangling_profile"


class DispatchTarget(BaseModel):
    """A command joined with the profile it runs on."""

    model_config = ConfigDict(frozen=True)

    command: CommandName
    workflow: WorkflowFile
    check_run_name: str
    profile: ProfileName
    region: str
    image_id: str
    instance_type: str


class SlabConfig(BaseModel):
    """Profiles and commands declared in one dispatch table."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    profiles: dict[ProfileName, Profile] = Field(default_factory=dict, alias="profile")
    commands: dict[CommandName, Command] = Field(default_factory=dict, alias="command")

    @field_validator("profiles", "commands", mode="before")
    @classmethod
    def _names_are_bare_keys(cls, value: object) -> object:
        if isinstance(value, dict):
            bad = [name for name in value if not isinstance(name, str) or not BARE_KEY.match(name)]
            if bad:
                raise ValueError(
                    f"names must match [A-Za-z0-9_-]+, got {', '.join(repr(b) for b in bad)}"
                )
        return value

    @model_validator(mode="after")
    def _profiles_resolve(self) -> SlabConfig:
        dangling = [
            f"command {name!r} references undeclared profile {cmd.profile!r}"
            for name, cmd in sorted(self.commands.items())
            if cmd.profile not in self.profiles
        ]
        if dangling:
            raise PydanticCustomError(
                DANGLING_PROFILE,
                "{count} undeclared profile reference(s): {detail}",
                {"count": len(dangling), "detail": ", ".join(dangling), "references": dangling},
            )
        return self

    # ---- lookups ----

    def get_profile(self, name: ProfileName) -> Profile:
        try:
            return self.profiles[name]
        except KeyError:
            raise UnknownProfileError(name) from None

    def get_command(self, name: CommandName) -> Command:
        try:
            return self.commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    def resolve(self, name: CommandName) -> DispatchTarget:
        """Resolve a command name to its workflow and machine profile."""
        command = self.get_command(name)
        profile = self.get_profile(command.profile)
        return DispatchTarget(
            command=name,
            workflow=command.workflow,
            check_run_name=command.check_run_name,
            profile=command.profile,
            region=profile.region,
            image_id=profile.image_id,
            instance_type=profile.instance_type,
        )

    def commands_for_profile(self, name: ProfileName) -> list[CommandName]:
        self.get_profile(name)
        return sorted(c for c, cmd in self.commands.items() if cmd.profile == name)

    # ---- lint ----

    def unused_profiles(self) -> list[ProfileName]:
        """Declared profiles that no command runs on."""
        used = {cmd.profile for cmd in self.commands.values()}
        return sorted(name for name in self.profiles if name not in used)

    def shared_workflows(self) -> dict[WorkflowFile, list[CommandName]]:
        """Workflows that more than one command triggers."""
        by_workflow: dict[WorkflowFile, list[CommandName]] = {}
        for name, cmd in sorted(self.commands.items()):
            by_workflow.setdefault(cmd.workflow, []).append(name)
        return {wf: names for wf, names in by_workflow.items() if len(names) > 1}
