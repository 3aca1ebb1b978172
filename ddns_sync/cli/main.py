#!/usr/bin/env python3
"""
DNS Records Sync - Command Line Interface

Main entry point for the ddns-sync CLI.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from ..core.errors import ConfigurationError, format_error_chain
from ..core.models import DnsConfig
from ..core.sync_manager import run_sync
from ..parsers.config import ConfigParser, get_default_config

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="DNS Records Sync - keep provider DNS records pointed at this host's WAN address"
    )

    parser.add_argument(
        "--config",
        "-c",
        help="Configuration file path (default: resolve the WAN address only)",
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    config_logger(config.log_level)

    result = asyncio.run(run_sync(config))
    sys.exit(result.exit_code)


def load_config(config_path: Optional[str]) -> DnsConfig:
    """Load configuration from YAML file, or the defaults when no file is given."""
    if config_path is None:
        return get_default_config()

    try:
        return ConfigParser(config_path).parse()
    except ConfigurationError as e:
        # Make sure the error is visible whatever level the file asked for
        config_logger("WARNING")
        logger.error(
            format_error_chain(f"could not configure application from: {config_path}", e)
        )
        sys.exit(1)


def config_logger(level: str):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # httpx logs every request at INFO, including query strings with credentials
    logging.getLogger("httpx").setLevel(logging.WARNING)


if __name__ == "__main__":
    main()
