"""
Column types shared by the models.
"""
from enum import Enum
from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.types import TypeDecorator


class ValueEnum(TypeDecorator):
    """
    Store a Python Enum by its `.value` in a plain INTEGER or (unbounded) VARCHAR column.

    Unlike `sqlalchemy.Enum`, this type adds no CHECK constraint and does not reject
    unknown values on bind: which values are acceptable is a business rule checked
    by the model's `is_valid()`, not by the store. Values read back are converted
    to the enum member when possible and returned raw otherwise.
    """

    impl = String
    cache_ok = True

    def __init__(self, enum_class: type[Enum], length: int | None = None):
        super().__init__(length)
        self.enum_class = enum_class
        self.length = length

    def load_dialect_impl(self, dialect):
        # IntEnum-style classes (MemberStatus, MembershipStatus) live in INTEGER columns
        if issubclass(self.enum_class, int):
            return dialect.type_descriptor(Integer())
        return dialect.type_descriptor(String(self.length))

    def process_bind_param(self, value: Any, dialect) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    def process_result_value(self, value: Any, dialect) -> Any:
        if value is None:
            return None
        try:
            return self.enum_class(value)
        except ValueError:
            return value
