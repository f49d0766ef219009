"""
Single import point for the ORM models.

Importing this package registers every table on `Base.metadata`, which table creation
and the test fixtures rely on:

    from membership_api.models import Member, Sport, Membership
"""

from .member import Member, MemberStatus
from .sport import Sport
from .membership import Membership, MembershipStatus, MembershipType

__all__ = [
    "Member",
    "MemberStatus",
    "Sport",
    "Membership",
    "MembershipStatus",
    "MembershipType",
]
