#!/usr/bin/env python3
"""Inspect, validate and export the laptop-saw configuration.

Usage:
    python scripts/config_manager.py validate
    python scripts/config_manager.py get scoring.weight_tolerance
    python scripts/config_manager.py export effective.json --format json
"""

import argparse
import sys

from laptop_saw.config.utils import (
    create_user_config_from_template,
    export_config_to_file,
    get_config_value,
    get_environment,
    get_user_config_path,
    print_config_summary,
    set_environment,
    validate_config,
)


def cmd_validate(args: argparse.Namespace) -> int:
    if not validate_config():
        print("Configuration validation failed")
        return 1
    print("Configuration is valid")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    print_config_summary()
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    export_config_to_file(args.output, args.format)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    create_user_config_from_template()
    print(f"Overrides go in {get_user_config_path()}")
    return 0


def cmd_env(args: argparse.Namespace) -> int:
    if args.set:
        set_environment(args.set)
    print(f"Environment: {get_environment()}")
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    value = get_config_value(args.key)
    if value is None:
        print(f"{args.key} is not set")
        return 1
    print(f"{args.key} = {value}")
    return 0


COMMANDS = {
    "validate": (cmd_validate, "Validate the active configuration"),
    "summary": (cmd_summary, "Print a configuration summary"),
    "export": (cmd_export, "Write the merged configuration to a file"),
    "init": (cmd_init, "Create user.yaml from the packaged template"),
    "env": (cmd_env, "Show or switch the active environment"),
    "get": (cmd_get, "Show one value by dot-notation key"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="laptop-saw configuration tool")
    subparsers = parser.add_subparsers(dest="command")
    commands = {name: subparsers.add_parser(name, help=text) for name, (_, text) in COMMANDS.items()}

    commands["export"].add_argument("output", help="Output file path")
    commands["export"].add_argument("--format", choices=["yaml", "json"], default="yaml")
    commands["env"].add_argument("--set", metavar="ENVIRONMENT", help="Environment to switch to")
    commands["get"].add_argument("key", help="Key such as scoring.precision")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    handler, _ = COMMANDS[args.command]
    try:
        return handler(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
