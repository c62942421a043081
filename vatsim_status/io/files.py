"""
File access utilities for the VATSIM Status File Parser.
"""

import os
import logging
import datetime
from typing import Optional, Dict, Any

from ..config.settings import settings

# Configure logger
logger = logging.getLogger("vatsim_status.io.files")


def read_status_file(filepath: str, encoding: Optional[str] = None) -> str:
    """
    Read and decode a status or network information file.

    Status files are single-byte encoded; undecodable bytes are replaced
    so a single broken character cannot prevent the file from being parsed.

    Args:
        filepath: Path to the file
        encoding: Character encoding (default: from settings)

    Returns:
        str: Decoded file content

    Raises:
        OSError: if the file cannot be read
        LookupError: if the encoding is unknown
    """
    if encoding is None:
        encoding = settings.get('default_encoding')

    logger.debug(f"Reading {filepath} as {encoding}")
    with open(filepath, 'r', encoding=encoding, errors='replace', newline='') as f:
        return f.read()


def get_file_info(filepath: str) -> Dict[str, Any]:
    """
    Get information about a file.

    Args:
        filepath: Path to the file

    Returns:
        Dict[str, Any]: Dictionary with file information
    """
    try:
        if not os.path.exists(filepath):
            return {'exists': False, 'error': 'File not found'}

        stat = os.stat(filepath)
        mtime = datetime.datetime.fromtimestamp(stat.st_mtime)
        size_bytes = stat.st_size

        # Format size
        if size_bytes < 1024:
            size_str = f"{size_bytes} bytes"
        elif size_bytes < 1024 * 1024:
            size_str = f"{size_bytes / 1024:.1f} KB"
        else:
            size_str = f"{size_bytes / (1024 * 1024):.1f} MB"

        return {
            'exists': True,
            'path': filepath,
            'filename': os.path.basename(filepath),
            'size_bytes': size_bytes,
            'size_str': size_str,
            'modified': mtime.isoformat(),
        }
    except OSError as e:
        logger.error(f"Error getting file info for {filepath}: {e}")
        return {'exists': False, 'error': str(e)}
