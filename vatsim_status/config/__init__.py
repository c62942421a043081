"""
Configuration package for the VATSIM status file parser.
Contains settings and constants used across the application.
"""

from .constants import *
from .settings import settings, Settings

__all__ = ['settings', 'Settings']
