"""
Declarative base shared by the Member, Sport and Membership ORM models.
Import this Base in every model module and in anything that needs `Base.metadata`
(table creation, test fixtures).
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Constraint names are part of the error contract: the integrity classifier reports
# them (e.g. "uq_members_email") alongside the violated columns.
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
