"""
Repository layer initialization module.

Usage:
    from membership_api.repositories import SQLStore, Store
"""

from .base_repository import BaseRepository
from .member_repository import MemberRepository
from .sport_repository import SportRepository
from .membership_repository import MembershipRepository
from .store import MemberStore, SportStore, MembershipStore, Store, SQLStore

__all__ = [
    "BaseRepository",
    "MemberRepository",
    "SportRepository",
    "MembershipRepository",
    "MemberStore",
    "SportStore",
    "MembershipStore",
    "Store",
    "SQLStore",
]
