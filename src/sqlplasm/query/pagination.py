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
"""Ordering, limiting and page requests.

``first`` / ``last`` order by the insertion timestamp and take the oldest /
newest ``n`` rows (one by default).  :class:`Sort` and :class:`Pageable`
describe arbitrary orderings and pages::

    stmt = last(Puppy, 5)
    stmt = order_by(Puppy, Sort.by("age", Order.desc("name")))
    stmt = paginate(where_all(Puppy, name="Fluffy"), Pageable(page=2, size=20, sort=Sort.by("age")))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select

from sqlplasm.query.settings import QuerySettings
from sqlplasm.query.source import FieldRef, QuerySource, RelationDescriptor, as_query, field_name


@dataclass(frozen=True)
class Order:
    """One ORDER BY term on a field of the queried entity."""

    field: str
    descending: bool = False

    @classmethod
    def asc(cls, field: FieldRef) -> Order:
        return cls(field_name(field))

    @classmethod
    def desc(cls, field: FieldRef) -> Order:
        return cls(field_name(field), descending=True)

    def clause(self, relation: RelationDescriptor) -> Any:
        column = relation.column(self.field)
        return column.desc() if self.descending else column.asc()


@dataclass(frozen=True)
class Sort:
    """ORDER BY terms, applied in order."""

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *terms: FieldRef | Order) -> Sort:
        """Sort on each term in turn; bare field references sort ascending."""
        return cls(tuple(term if isinstance(term, Order) else Order.asc(term) for term in terms))


@dataclass(frozen=True)
class Pageable:
    """A 1-based page of *size* rows taken after applying *sort*."""

    page: int = 1
    size: int = 20
    sort: Sort = Sort()

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


def order_by(source: QuerySource, sort: Sort) -> Select[Any]:
    """Append *sort*'s terms to the query's ORDER BY.

    Raises:
        UnknownFieldError: If a sort field does not exist on the queried entity.
    """
    query = as_query(source)
    if not sort.orders:
        return query
    relation = RelationDescriptor.of(query)
    return query.order_by(*(order.clause(relation) for order in sort.orders))


def paginate(source: QuerySource, pageable: Pageable) -> Select[Any]:
    """Apply *pageable*'s sort, then ``LIMIT size OFFSET (page - 1) * size``."""
    return order_by(source, pageable.sort).limit(pageable.size).offset(pageable.offset)


def _take(
    source: QuerySource,
    n: int | None,
    descending: bool,
    field: FieldRef | None,
    settings: QuerySettings | None,
) -> Select[Any]:
    settings = QuerySettings.resolve(settings)
    limit = settings.default_limit if n is None else n
    if limit < 1:
        raise ValueError(f"n must be >= 1, got {limit}")
    name = field_name(field) if field is not None else settings.inserted_at_field
    return order_by(source, Sort((Order(name, descending),))).limit(limit)


def first(
    source: QuerySource,
    n: int | None = None,
    *,
    field: FieldRef | None = None,
    settings: QuerySettings | None = None,
) -> Select[Any]:
    """The *n* earliest-inserted rows (``ORDER BY inserted_at ASC LIMIT n``)."""
    return _take(source, n, False, field, settings)


def last(
    source: QuerySource,
    n: int | None = None,
    *,
    field: FieldRef | None = None,
    settings: QuerySettings | None = None,
) -> Select[Any]:
    """The *n* most recently inserted rows (``ORDER BY inserted_at DESC LIMIT n``)."""
    return _take(source, n, True, field, settings)
