"""
Utils Package - Core utilities for sidandtos
Contains logging utilities
"""

from .logger import Logger

__all__ = ["Logger"]
