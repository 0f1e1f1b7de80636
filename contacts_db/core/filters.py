from enum import Enum
from dataclasses import dataclass
from typing import Any

import sqlalchemy as sa

from .. import models
from . import exceptions


class FilterOperator(Enum):
    EQUALS = "eq"
    PREFIX = "prefix"
    GREATER_EQUAL = "ge"


class ContactField(Enum):
    ID = "id"
    NAME = "name"
    TELEPHONE = "telephone"
    EMAIL = "email"

    @property
    def column(self):
        return getattr(models.Contact, self.value)


@dataclass(frozen=True)
class ContactFilter:
    field: ContactField
    operator: FilterOperator
    value: Any

    def __post_init__(self):
        if self.operator == FilterOperator.PREFIX and not isinstance(self.value, str):
            raise exceptions.InvalidValue(f"Prefix filter on '{self.field.value}' needs a string, got {self.value!r}")

    @classmethod
    def equals(cls, field: ContactField, value: Any) -> "ContactFilter":
        return cls(field, FilterOperator.EQUALS, value)

    @classmethod
    def prefix(cls, field: ContactField, value: str) -> "ContactFilter":
        return cls(field, FilterOperator.PREFIX, value)

    @classmethod
    def at_least(cls, field: ContactField, value: Any) -> "ContactFilter":
        return cls(field, FilterOperator.GREATER_EQUAL, value)

    def to_clause(self) -> sa.ColumnElement[bool]:
        column = self.field.column
        if self.operator == FilterOperator.EQUALS:
            return column == self.value
        if self.operator == FilterOperator.PREFIX:
            # compares the leading characters so the match is case-sensitive on every
            # backend and % or _ in the prefix match literally
            return sa.func.substr(column, 1, len(self.value)) == self.value
        if self.operator == FilterOperator.GREATER_EQUAL:
            return column >= self.value
        raise exceptions.InvalidValue(f"Unknown operator {self.operator}")
