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
"""Aggregate projections and DISTINCT.

Aggregates replace the SELECT list but keep the FROM and WHERE of the
incoming query, so they go last in a chain::

    stmt = avg(where_all(Puppy, name="Fluffy"), "age")
    (await session.execute(stmt)).scalar_one()
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func
from sqlalchemy.dialects import postgresql

from sqlplasm.kernel.exceptions import NoPrimaryKeyError, UnsupportedOperationError
from sqlplasm.query.sampling import dialect_name
from sqlplasm.query.source import FieldRef, QuerySource, RelationDescriptor, as_query

# SQLAlchemy 2.1 builds DISTINCT ON through a PostgreSQL syntax extension; 2.0 through Select.distinct().
_DISTINCT_ON = getattr(postgresql, "distinct_on", None)


def _project(source: QuerySource, build: Any) -> Select[Any]:
    query = as_query(source)
    relation = RelationDescriptor.of(query)
    return query.with_only_columns(build(relation), maintain_column_froms=True)


def count(source: QuerySource) -> Select[Any]:
    """``COUNT(primary_key)``; entities without a single-column key use ``COUNT(*)``."""

    def build(relation: RelationDescriptor) -> Any:
        try:
            return func.count(relation.column(relation.primary_key))
        except NoPrimaryKeyError:
            return func.count()

    return _project(source, build)


def count_distinct(source: QuerySource, field: FieldRef) -> Select[Any]:
    """``COUNT(DISTINCT field)``."""
    return _project(source, lambda relation: func.count(relation.column(field).distinct()))


def sum(source: QuerySource, field: FieldRef) -> Select[Any]:  # noqa: A001
    return _project(source, lambda relation: func.sum(relation.column(field)))


def avg(source: QuerySource, field: FieldRef) -> Select[Any]:
    return _project(source, lambda relation: func.avg(relation.column(field)))


def min(source: QuerySource, field: FieldRef) -> Select[Any]:  # noqa: A001
    return _project(source, lambda relation: func.min(relation.column(field)))


def max(source: QuerySource, field: FieldRef) -> Select[Any]:  # noqa: A001
    return _project(source, lambda relation: func.max(relation.column(field)))


def distinct_by(source: QuerySource, field: FieldRef, *, dialect: Any) -> Select[Any]:
    """One row per distinct value of *field*, keeping the selected entity.

    Renders ``DISTINCT ON (field)``, which only PostgreSQL supports, so the
    target dialect must be named as for :func:`~sqlplasm.query.sampling.random`.
    Use :func:`distinct_values` for a portable ``SELECT DISTINCT field``.

    Raises:
        UnsupportedOperationError: If *dialect* is not PostgreSQL.
    """
    name = dialect_name(dialect)
    if name != "postgresql":
        raise UnsupportedOperationError("distinct_by", name)

    query = as_query(source)
    column = RelationDescriptor.of(query).column(field)
    if _DISTINCT_ON is not None:
        return query.ext(_DISTINCT_ON(column))
    return query.distinct(column)


def distinct_values(source: QuerySource, field: FieldRef) -> Select[Any]:
    """``SELECT DISTINCT field`` on any backend."""
    return _project(source, lambda relation: relation.column(field)).distinct()


__all__ = [
    "avg",
    "count",
    "count_distinct",
    "distinct_by",
    "distinct_values",
    "max",
    "min",
    "sum",
]
