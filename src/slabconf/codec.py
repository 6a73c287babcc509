"""Read and write the dispatch table in its TOML form.

Layout written by :func:`dumps`::

    [profile.<name>]
    region = "..."
    image_id = "ami-..."
    instance_type = "..."

    [command.<name>]
    workflow = "....yml"
    profile = "<profile name>"
    check_run_name = "..."

Profiles come first, then commands, each in declaration order, so a table
loaded from a canonically formatted file dumps back to the same bytes.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from slabconf.core.exceptions import ConfigParseError, ConfigSourceError, ConfigValidationError
from slabconf.models.table import DANGLING_PROFILE, SlabConfig

logger = logging.getLogger(__name__)

PROFILE_KEYS = ("region", "image_id", "instance_type")
COMMAND_KEYS = ("workflow", "profile", "check_run_name")

_POSITION = re.compile(r"\(at line (\d+), column (\d+)\)")


def _format_issues(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into ``location: message`` strings."""
    issues: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "table"
        if err["type"] == DANGLING_PROFILE:
            # One table-level error carries every dangling reference.
            issues.extend(f"{loc}: {ref}" for ref in err["ctx"]["references"])
            continue
        msg = err["msg"]
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        issues.append(f"{loc}: {msg}")
    return issues


def from_mapping(data: dict[str, Any]) -> SlabConfig:
    """Validate an already-parsed mapping into a :class:`SlabConfig`."""
    try:
        config = SlabConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(_format_issues(exc)) from exc

    logger.info("Loaded %d profile(s) and %d command(s)", len(config.profiles), len(config.commands))
    for name in config.unused_profiles():
        logger.warning("Profile %r is not used by any command", name)
    for workflow, names in config.shared_workflows().items():
        logger.warning("Workflow %r is triggered by several commands: %s", workflow, ", ".join(names))
    return config


def loads(text: str) -> SlabConfig:
    """Parse and validate dispatch table TOML."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        match = _POSITION.search(str(exc))
        line, col = (int(match.group(1)), int(match.group(2))) if match else (None, None)
        raise ConfigParseError(f"Malformed TOML: {exc}", line=line, col=col) from exc
    return from_mapping(data)


def load(path: str | Path) -> SlabConfig:
    """Read, parse and validate a dispatch table file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigSourceError(f"Config file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigSourceError(f"Failed to read config file {path}: {exc}") from exc
    logger.debug("Read %d bytes from %s", len(text), path)
    return loads(text)


def _toml_string(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes, except DEL.
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def _table(kind: str, name: str, values: dict[str, str], keys: tuple[str, ...]) -> str:
    lines = [f"[{kind}.{name}]"]
    lines.extend(f"{key} = {_toml_string(values[key])}" for key in keys)
    return "\n".join(lines)


def dumps(config: SlabConfig) -> str:
    """Serialize a table back to TOML."""
    blocks = [
        _table("profile", name, profile.model_dump(), PROFILE_KEYS)
        for name, profile in config.profiles.items()
    ]
    blocks.extend(
        _table("command", name, command.model_dump(), COMMAND_KEYS)
        for name, command in config.commands.items()
    )
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"
