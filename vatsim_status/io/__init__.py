"""
I/O package for the VATSIM Status File Parser.
Contains file reading helpers; parsing itself never performs I/O.
"""

from .files import read_status_file, get_file_info

__all__ = [
    'read_status_file',
    'get_file_info'
]
