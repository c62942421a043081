"""
User interface package for the VATSIM Status File Parser.
"""

from .cli import CLI, create_cli

__all__ = [
    'CLI',
    'create_cli'
]
