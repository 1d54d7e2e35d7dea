"""
Client modules for external service communication
"""

from .backend import PersistenceClient

__all__ = ["PersistenceClient"]
