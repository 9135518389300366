"""
Output formatters - Strategy Pattern for different output formats.
"""

from .base_formatter import OutputFormatter
from .resource_formatter import ResourceFormatter

__all__ = ['OutputFormatter', 'ResourceFormatter']
