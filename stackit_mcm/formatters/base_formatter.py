"""
Base output formatter - Abstract base class for formatters.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import Server, NIC


class OutputFormatter(ABC):
    """
    Abstract base class for output formatters.

    Design Pattern: Strategy Pattern
    Different formatters for different output styles (list, table, JSON).
    """

    @abstractmethod
    def format_servers(self, servers: List[Server]) -> str:
        """
        Format servers for output.

        Args:
            servers: Servers to format

        Returns:
            Formatted string for output
        """
        pass

    @abstractmethod
    def format_nics(self, nics: List[NIC]) -> str:
        """Format network interfaces for output."""
        pass
