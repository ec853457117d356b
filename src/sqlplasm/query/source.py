# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Query sources, relation metadata, and field reference normalization.

Every helper in :mod:`sqlplasm.query` accepts either a ``Select`` or a
mapped class.  :func:`as_query` promotes the class to ``select(Entity)`` and
:class:`RelationDescriptor` answers the two questions the helpers ask of
the relation: *which attribute is named X* and *which attribute is the
primary key*.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from sqlalchemy import Select, inspect, select
from sqlalchemy.orm import ColumnProperty, QueryableAttribute

from sqlplasm.kernel.exceptions import NoPrimaryKeyError, UnknownFieldError

FieldRef: TypeAlias = "str | QueryableAttribute[Any] | Enum"
QuerySource: TypeAlias = "Select[Any] | type[Any]"


def field_name(ref: FieldRef) -> str:
    """Normalize a field reference to its attribute name.

    ``"name"``, ``Puppy.name`` and a string-valued ``Enum`` member whose
    value is ``"name"`` all normalize to ``"name"``.
    """
    if isinstance(ref, str):
        return ref
    if isinstance(ref, QueryableAttribute):
        return ref.key
    if isinstance(ref, Enum):
        return str(ref.value)
    raise TypeError(f"Field reference must be a str, mapped attribute or Enum, got {type(ref).__name__}")


def _mapped(source: Any) -> bool:
    insp = inspect(source, raiseerr=False)
    if insp is None:
        return False
    return bool(getattr(insp, "is_mapper", False) or getattr(insp, "is_aliased_class", False))


def as_query(source: QuerySource) -> Select[Any]:
    """Return *source* as a ``Select``, promoting a mapped class to ``select(cls)``."""
    if isinstance(source, Select):
        return source
    if _mapped(source):
        return select(source)
    raise TypeError(f"Expected a Select or a mapped class, got {type(source).__name__}")


@dataclass(frozen=True)
class RelationDescriptor:
    """Read-only view of the mapped entity a query selects from."""

    entity: Any

    @classmethod
    def of(cls, source: QuerySource) -> RelationDescriptor:
        """Describe the primary entity of *source*.

        For a ``Select`` this is the first column description that belongs
        to a mapped entity (or alias), so ``select(Puppy)`` and
        ``select(Puppy.name)`` both describe ``Puppy``.
        """
        if not isinstance(source, Select):
            if not _mapped(source):
                raise TypeError(f"Expected a Select or a mapped class, got {type(source).__name__}")
            return cls(source)

        for description in source.column_descriptions:
            entity = description.get("entity")
            if entity is not None:
                return cls(entity)
        raise TypeError("Cannot resolve a mapped entity from a query without ORM columns")

    @property
    def mapper(self) -> Any:
        insp = inspect(self.entity)
        return insp if insp.is_mapper else insp.mapper

    @property
    def name(self) -> str:
        return self.mapper.class_.__name__

    @property
    def primary_key_fields(self) -> tuple[str, ...]:
        mapper = self.mapper
        return tuple(mapper.get_property_by_column(col).key for col in mapper.primary_key)

    @property
    def primary_key(self) -> str:
        """The single primary-key attribute name.

        Raises:
            NoPrimaryKeyError: When the relation has no key or a composite one.
        """
        fields = self.primary_key_fields
        if len(fields) != 1:
            raise NoPrimaryKeyError(self.name, fields)
        return fields[0]

    def column(self, ref: FieldRef) -> Any:
        """Return the queryable attribute for *ref* on this entity.

        Raises:
            UnknownFieldError: When the entity has no column attribute of that name.
                Relationships and plain methods do not count as columns.
        """
        name = field_name(ref)
        try:
            attr = getattr(self.entity, name)
        except AttributeError as exc:
            raise UnknownFieldError(self.name, name) from exc
        if not isinstance(attr, QueryableAttribute) or not isinstance(attr.property, ColumnProperty):
            raise UnknownFieldError(self.name, name)
        return attr
