"""API routes package"""

from . import health, profiles, goals, plans

__all__ = ["health", "profiles", "goals", "plans"]
