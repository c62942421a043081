#!/usr/bin/env python3

"""
Entry point script that parses a VATSIM status file from the command line.
"""

import argparse
import logging
import sys
from typing import List, Optional

from vatsim_status.config.constants import APP_DESCRIPTION
from vatsim_status.config.settings import settings
from vatsim_status.data.privacy_filter import PrivacyFilter
from vatsim_status.ui.cli import create_cli

logger = logging.getLogger("vatsim_status.main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description=APP_DESCRIPTION
    )
    parser.add_argument(
        'path',
        help='Status file (data.txt) to parse'
    )
    parser.add_argument(
        '--encoding',
        default=None,
        help=f"Character encoding of the file (default: {settings.get('default_encoding')})"
    )
    parser.add_argument(
        '--network-info',
        action='store_true',
        help='Parse the file as network information (status.txt) instead'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the parsed content as JSON'
    )
    parser.add_argument(
        '--faults',
        action='store_true',
        default=None,
        help='List all parse faults'
    )
    parser.add_argument(
        '--anonymize',
        action='store_true',
        help='Write the file with real names removed instead of evaluating it'
    )
    parser.add_argument(
        '--strip-remarks',
        action='store_true',
        help='With --anonymize: also strip flight plan remarks'
    )
    parser.add_argument(
        '--hide-observers',
        action='store_true',
        help='With --anonymize: also replace observer callsigns'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    level = logging.DEBUG if args.debug else logging.getLevelName(str(settings.get('log_level', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO

    package_logger = logging.getLogger("vatsim_status")
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)

    privacy_filter = None
    if args.anonymize:
        privacy_filter = PrivacyFilter(
            remove_real_name=True,
            remove_remarks=args.strip_remarks,
            substitute_observer_callsign=args.hide_observers,
        )

    try:
        cli = create_cli()
        return cli.run(
            args.path,
            encoding=args.encoding,
            network_info=args.network_info,
            as_json=args.json,
            show_faults=args.faults,
            privacy_filter=privacy_filter,
        )
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
