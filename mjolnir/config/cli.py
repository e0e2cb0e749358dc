#!/usr/bin/env python3
"""
Configuration Diagnostics

Command-line helper for operators: shows which file the service would load,
the effective configuration after defaults are applied, and any shape
problems found in the file.

    python -m mjolnir.config.cli --env production --validation strict
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError
from .loader import ConfigLoader, resolve_config_path
from .validator import ValidationLevel, check_overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Mjolnir configuration diagnostics')
    parser.add_argument('--env-file', help='Load environment variables from this dotenv file first')
    parser.add_argument('--config-dir', help='Configuration directory (overrides MJOLNIR_CONFIG_DIR)')
    parser.add_argument('--env', dest='env_name', help='Environment name (overrides MJOLNIR_ENV)')
    parser.add_argument('--validation', choices=[level.value for level in ValidationLevel],
                        help='Validation level (overrides MJOLNIR_CONFIG_VALIDATION)')
    parser.add_argument('--show-path', action='store_true', help='Print the resolved file path and exit')
    parser.add_argument('--dump', action='store_true', help='Print the effective configuration as YAML')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function for command-line usage."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    if args.env_file:
        load_dotenv(args.env_file, override=False)

    env = dict(os.environ)
    if args.config_dir:
        env['MJOLNIR_CONFIG_DIR'] = args.config_dir
    if args.env_name:
        env['MJOLNIR_ENV'] = args.env_name

    path = resolve_config_path(env)
    if args.show_path:
        print(path)
        return 0

    # Status mode reports findings itself; only strict still stops the load
    validation = args.validation
    if not args.dump and validation != ValidationLevel.STRICT.value:
        validation = ValidationLevel.OFF

    try:
        loader = ConfigLoader(config_path=path, env=env, validation=validation)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.dump:
        print(yaml.safe_dump(loader.config.to_dict(), sort_keys=False, default_flow_style=False), end='')
        return 0

    report = check_overrides(loader.raw)

    print("\n=== Configuration Status ===")
    print(f"File: {path}")
    print(f"Overridden keys: {', '.join(sorted(map(str, loader.raw))) or 'none'}")

    if report.errors:
        print("Errors:")
        for error in report.errors:
            print(f"  - {error}")

    if report.warnings:
        print("Warnings:")
        for warning in report.warnings:
            print(f"  - {warning}")

    return 0 if report.is_valid else 1


if __name__ == '__main__':
    sys.exit(main())
