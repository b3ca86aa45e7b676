#!/usr/bin/env python3
"""
Command-line interface for mledger.

Creates, validates and displays managed ledger policy configuration files.

Copyright 2025 Firefly Software Solutions Inc
Licensed under the Apache License, Version 2.0
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError

from mledger import __version__
from mledger.config import ConfigurationManager
from mledger.config.logging_config import LoggingConfig
from mledger.logging import setup_mledger_logging


def setup_logging(level: str = "WARNING", format_type: str = "text") -> None:
    """Configure logging for the CLI."""
    setup_mledger_logging(LoggingConfig(level=level, format=format_type))


def init_config(output_path: str) -> int:
    """Write a default configuration file."""
    ConfigurationManager.create_default_config_file(output_path, format="auto")
    print(f"Default ledger configuration written to {output_path}")
    return 0


def validate_config(config_path: str, use_env: bool = False) -> int:
    """Load a configuration file and report errors and warnings."""
    try:
        config = ConfigurationManager.from_file(config_path)
        if use_env:
            config = ConfigurationManager.apply_env_overrides(config)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1
    except (ValidationError, ValueError) as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    warnings = config.validate_configuration()
    if warnings:
        print(f"⚠️  {config_path} is valid with {len(warnings)} warning(s):")
        for warning in warnings:
            print(f"   - {warning}")
    else:
        print(f"✅ {config_path} is valid")
    return 0


def show_config(config_path: Optional[str] = None, use_env: bool = True) -> int:
    """Print the effective configuration as JSON."""
    try:
        config = ConfigurationManager.load_config(config_path, use_env=use_env)
    except (ValidationError, ValueError) as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    output = {
        "settings": config.model_dump(mode="json", exclude={"password"}),
        "summary": config.describe(),
        "warnings": config.validate_configuration(),
    }
    print(json.dumps(output, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="mledger - Managed ledger policy configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mledger init-config ledger.yml            # Create default config
  mledger validate ledger.yml               # Validate a config file
  mledger validate ledger.yml --env         # Validate with MLEDGER_* overrides
  mledger show ledger.toml                  # Show effective config
        """,
    )

    parser.add_argument("--version", action="version", version=f"mledger {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument(
        "--log-format", choices=["json", "text"], default="text", help="Set log output format"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init-config", help="Create default configuration file")
    init_parser.add_argument("output", help="Output file path (.yml, .toml or .json)")

    validate_parser = subparsers.add_parser("validate", help="Validate a configuration file")
    validate_parser.add_argument("config", help="Configuration file path")
    validate_parser.add_argument(
        "--env", action="store_true", help="Apply MLEDGER_* environment overrides"
    )

    show_parser = subparsers.add_parser("show", help="Show the effective configuration")
    show_parser.add_argument("config", nargs="?", default=None, help="Configuration file path")
    show_parser.add_argument(
        "--no-env", action="store_true", help="Ignore MLEDGER_* environment overrides"
    )

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, format_type=args.log_format)

    if args.command == "init-config":
        return init_config(args.output)

    elif args.command == "validate":
        return validate_config(args.config, use_env=args.env)

    elif args.command == "show":
        return show_config(args.config, use_env=not args.no_env)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
