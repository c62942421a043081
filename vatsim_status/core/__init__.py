"""
Core package for the VATSIM Status File Parser.
Contains evaluations built on top of parsed status files.
"""

from .summary import StatusSummary

__all__ = [
    'StatusSummary'
]
