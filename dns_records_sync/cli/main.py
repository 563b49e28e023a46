#!/usr/bin/env python3
"""
DNS Records Sync - Command Line Interface

Main entry point for the DNS Records Sync CLI.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .. import __version__
from ..config import build_controller, config_logger, load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dns-sync",
        description="DNS Records Sync - Reconcile desired DNS records with a DNS backend",
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )
    parser.add_argument(
        "--source-csv",
        "-f",
        action="append",
        help="CSV file containing desired records; specify multiple times for multiple files",
    )
    parser.add_argument("--provider", help="DNS provider (options: inmemory, bind)")
    parser.add_argument("--policy", help="Synchronization policy (options: sync, upsert-only)")
    parser.add_argument("--registry", help="Ownership registry (options: txt, noop)")
    parser.add_argument("--txt-owner-id", help="Owner id written into ownership TXT records")
    parser.add_argument("--txt-prefix", help="Prefix for the names of ownership TXT records")
    parser.add_argument(
        "--domain-filter",
        action="append",
        help="Limit the zones the provider may touch; specify multiple times for multiple domains",
    )
    parser.add_argument(
        "--basedomain-filter",
        action="append",
        help="Only manage records under these domains; specify multiple times for multiple domains",
    )
    parser.add_argument(
        "--cidr-ignore",
        action="append",
        help="Skip A records whose address lies in this range; specify multiple times",
    )
    parser.add_argument(
        "--dns-ignore",
        action="append",
        help="Skip records with this name or single-level wildcard; specify multiple times",
    )
    parser.add_argument("--interval", type=float, help="Seconds between reconciliation runs")
    parser.add_argument("--once", action="store_true", help="Run a single reconciliation")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without making changes",
    )
    parser.add_argument(
        "--cleanup",
        action="store_true",
        help="Remove all records owned by this instance and exit",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        help="File to save dry run diff output (only used with --dry-run)",
    )
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(config: Dict, args: argparse.Namespace) -> Dict:
    """Override configuration values with the flags given on the command line."""
    if args.source_csv:
        config["sources"] = [{"type": "csv", "path": path} for path in args.source_csv]

    if args.provider:
        config["default_provider"] = args.provider

    for key in ("policy", "registry", "txt_owner_id", "txt_prefix", "interval"):
        value = getattr(args, key)
        if value is not None:
            config[key] = value

    for key in ("domain_filter", "basedomain_filter", "cidr_ignore", "dns_ignore"):
        value = getattr(args, key)
        if value:
            config[key] = value

    for key in ("once", "dry_run", "cleanup"):
        if getattr(args, key):
            config[key] = True

    if args.log_level or args.verbose:
        logging_config = dict(config.get("logging") or {})
        logging_config["level"] = "DEBUG" if args.verbose else args.log_level
        config["logging"] = logging_config

    return config


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)
        if args.output_file and not config.get("dry_run", False):
            print("Error: --output-file can only be used with a dry run")
            sys.exit(1)

        config_logger(config)

        controller = build_controller(config, output_file=args.output_file)
        controller.run(once=config.get("once", False), cleanup=config.get("cleanup", False))

    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    print("DNS record synchronization completed successfully")
    sys.exit(0)


if __name__ == "__main__":
    main()
