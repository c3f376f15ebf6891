"""
Shared helpers for the command line tools.
"""

import logging
import sys

from ..settings import Settings

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

def configure_logging(settings: Settings, verbose: bool = False):
    """
    Send log records to stderr; stdout is reserved for tool output.

    Args:
        settings: loaded settings (``logging.level``)
        verbose: force INFO level when the configured level is quieter
    """
    level_name = str(settings.get("logging.level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    if verbose and level > logging.INFO:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

def add_common_arguments(parser, settings: Settings):
    """Add the --db and -v options every tool understands."""
    default_db = settings.get("paths.database")
    parser.add_argument(
        '--db',
        type=str,
        default=default_db,
        help=f'Path to the SQLite database file (default: {default_db})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress to stderr'
    )
