"""
VATSIM Status File Parser
Parses legacy VATSIM data.txt status files into validated records.

Features:
- Splitting status files into sections
- Validating online clients and prefiled flight plans against their roles
- Collecting per-line faults without aborting the parse
- Reading network information (status.txt) files
"""

__version__ = '0.1.0'

from . import config
from . import data
from .config.constants import APP_NAME, APP_VERSION, APP_AUTHOR, APP_LICENSE

__author__ = APP_AUTHOR
__license__ = APP_LICENSE

# Initialize logging when the package is imported
import logging
import sys

# Configure package logger
root_logger = logging.getLogger("vatsim_status")
root_logger.setLevel(logging.INFO)

# Log to stderr so stdout stays clean for JSON output
console_handler = logging.StreamHandler(sys.stderr)
console_handler.setLevel(logging.INFO)

# Create formatter
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(formatter)

# Add handler to logger
root_logger.addHandler(console_handler)

root_logger.debug(f"Initializing {APP_NAME} v{APP_VERSION}")
