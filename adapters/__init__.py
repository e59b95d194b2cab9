"""
Adapters package - External service connections.
MongoDB adapter for the recipe catalog.
"""

from adapters import mongo_adapter

__all__ = [
    "mongo_adapter",
]
