"""Command line access to the dispatch table.

Usage:
    slabconf validate [--check-aws]
    slabconf resolve cpu_test [--json]
    slabconf list
    slabconf dump
    slabconf --config ci/slab.toml validate
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from slabconf.codec import dumps
from slabconf.core.config import AppSettings
from slabconf.core.exceptions import (
    ConfigValidationError,
    SlabConfigError,
    UnknownCommandError,
)
from slabconf.core.logging import configure_logging
from slabconf.core.protocols import IConfigSource, IImageCatalog
from slabconf.models.table import SlabConfig
from slabconf.persistence import (
    Ec2Catalog,
    FileConfigSource,
    create_source,
    load_from_source,
    verify_profiles,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slabconf", description="Inspect and validate the CI dispatch table")
    parser.add_argument("--config", default=None, help="Path to a local table (overrides SLAB_SOURCE_*)")
    parser.add_argument("--log-level", default=None, help="Log level (default: SLAB_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="action", required=True)

    validate = sub.add_parser("validate", help="Check schema and profile references")
    validate.add_argument("--check-aws", action="store_true", default=None,
                          help="Also verify images and instance types against EC2")

    resolve = sub.add_parser("resolve", help="Show the workflow and machine for a command")
    resolve.add_argument("command", help="Command name, e.g. cpu_test")
    resolve.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    sub.add_parser("list", help="List commands with their profile and check run name")
    sub.add_parser("dump", help="Print the table in canonical TOML form")
    return parser


def _cmd_validate(config: SlabConfig, check_aws: bool, catalog: IImageCatalog | None) -> int:
    if check_aws:
        issues = verify_profiles(config, catalog)
        if issues:
            for issue in issues:
                print(f"  {issue}", file=sys.stderr)
            print(f"INVALID: {len(issues)} issue(s)", file=sys.stderr)
            return 1
    print(f"OK: {len(config.profiles)} profile(s), {len(config.commands)} command(s)")
    return 0


def _cmd_resolve(config: SlabConfig, name: str, as_json: bool) -> int:
    target = config.resolve(name)
    if as_json:
        print(target.model_dump_json())
        return 0
    for field, value in target.model_dump().items():
        print(f"{field:<15} {value}")
    return 0


def _cmd_list(config: SlabConfig) -> int:
    width = max((len(name) for name in config.commands), default=0)
    for name, cmd in sorted(config.commands.items()):
        print(f"{name:<{width}}  {cmd.profile:<10}  {cmd.check_run_name}")
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: AppSettings | None = None,
    source: IConfigSource | None = None,
    catalog: IImageCatalog | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    settings = settings or AppSettings()
    try:
        configure_logging(args.log_level or settings.log_level)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if source is None:
        source = FileConfigSource(args.config) if args.config else create_source(settings)

    try:
        config = load_from_source(source)
        if args.action == "validate":
            check_aws = settings.aws.verify_images if args.check_aws is None else args.check_aws
            if check_aws and catalog is None:
                catalog = Ec2Catalog(endpoint_url=settings.aws.endpoint_url)
            return _cmd_validate(config, check_aws, catalog)
        if args.action == "resolve":
            return _cmd_resolve(config, args.command, args.json)
        if args.action == "list":
            return _cmd_list(config)
        sys.stdout.write(dumps(config))
        return 0
    except ConfigValidationError as exc:
        for issue in exc.issues:
            print(f"  {issue}", file=sys.stderr)
        print(f"INVALID: {len(exc.issues)} issue(s) in {source.describe()}", file=sys.stderr)
        return 1
    except UnknownCommandError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except SlabConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
