"""
Repositories and factories - Factory Pattern implementation.
"""

from .client_factory import ClientFactory, ClientKind

__all__ = ['ClientFactory', 'ClientKind']
