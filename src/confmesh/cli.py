"""conf-mesh CLI - inspect merged configuration.

Usage:
    confmesh get database.port --file app.yaml --env-prefix APP__
    confmesh dump --config ~/.confmesh/settings.yaml
    confmesh dump --file base.yaml --file local.yaml --trace

Providers from ``--file`` and ``--env-prefix`` are registered after those in
the settings file. Registration order decides precedence: earlier wins.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional

import yaml

from .config import MeshSettings, ProviderSettings, ProviderType
from .container import ConfigContainer
from .errors import ProviderLoadError


def build_settings(args: argparse.Namespace) -> MeshSettings:
    """Combine the settings file with providers given on the command line."""
    if args.config:
        settings = MeshSettings.from_file(args.config)
    else:
        settings = MeshSettings.from_env()

    for path in args.file or []:
        settings.providers.append(ProviderSettings(type=ProviderType.YAML, path=path))
    if args.env_prefix:
        settings.providers.append(
            ProviderSettings(type=ProviderType.ENV, prefix=args.env_prefix)
        )
    if args.trace:
        settings.options.trace = True
    return settings


async def _load(settings: MeshSettings) -> ConfigContainer:
    container = ConfigContainer(settings)
    await container.initialize()
    try:
        await container.service.load()
    except BaseException:
        await container.shutdown()
        raise
    return container


async def _run(args: argparse.Namespace) -> int:
    try:
        settings = build_settings(args)
        container = await _load(settings)
    except ProviderLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        if args.command == "get":
            if not container.service.has_value(args.key):
                print(f"Key not found: {args.key}", file=sys.stderr)
                return 1
            _print_json(container.service.get_value(args.key))
        else:
            _print_json(container.service.snapshot)
    finally:
        await container.shutdown()
    return 0


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, default=str))


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="confmesh",
        description="conf-mesh — merge configuration from many sources",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", type=str, default=None,
                        help="Settings YAML (default: $CONFMESH_CONFIG)")
    common.add_argument("--file", "-f", action="append", default=None,
                        help="YAML config file provider (repeatable)")
    common.add_argument("--env-prefix", type=str, default=None,
                        help="Environment variable provider prefix, e.g. APP__")
    common.add_argument("--trace", action="store_true",
                        help="Log load diagnostics to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # get
    get_parser = subparsers.add_parser("get", parents=[common],
                                       help="Print the value at a key path")
    get_parser.add_argument("key", help="Dotted or colon-delimited key path")

    # dump
    subparsers.add_parser("dump", parents=[common], help="Print the merged configuration")

    args = parser.parse_args(argv)

    if args.command not in ("get", "dump"):
        parser.print_help()
        return 1

    # stdout carries JSON output
    logging.basicConfig(
        level=logging.INFO if args.trace else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
