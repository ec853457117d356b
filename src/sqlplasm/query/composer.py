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
"""Multi-value WHERE helpers and primary-key lookup.

Usage::

    select_stmt = where_all(Puppy, name="Fluffy", age=[3, 5, 10])
    # WHERE name = 'Fluffy' AND age IN (3, 5, 10)

    select_stmt = where_none(Puppy, name="Fluffy", age=[3, 5, 10])
    # WHERE name != 'Fluffy' AND age NOT IN (3, 5, 10)

    select_stmt = find(Puppy, 10)
    select_stmt = find_many(Puppy, [1, 2, 3])

Each function returns a new ``Select``; existing WHERE criteria on the
input are kept and ANDed with the new ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog
from sqlalchemy import Select
from sqlalchemy.sql.expression import Join

from sqlplasm.query.filter import FilterUtils
from sqlplasm.query.source import QuerySource, RelationDescriptor, as_query
from sqlplasm.query.values import Collection, FilterSpec, Scalar

logger = structlog.get_logger(__name__)


def _prepare(source: QuerySource, filters: Any, fields: dict[str, Any]) -> tuple[Select[Any], FilterSpec]:
    return as_query(source), FilterSpec.of(filters, **fields)


def _has_joins(query: Select[Any]) -> bool:
    return any(isinstance(from_, Join) for from_ in query.get_final_froms())


def where_all(source: QuerySource, filters: Any = None, /, **fields: Any) -> Select[Any]:
    """Keep rows matching every field/value pair.

    Collection values (lists, tuples, sets) become ``IN`` tests and all
    other values ``==`` tests.  When no value is a collection and the query
    has no joins, the pairs go straight to ``Select.filter_by``; both paths
    select the same rows.

    Raises:
        UnknownFieldError: If a field does not exist on the queried entity.
    """
    query, spec = _prepare(source, filters, fields)
    if spec.is_empty:
        return query

    relation = RelationDescriptor.of(query)
    for name in spec.fields:
        relation.column(name)

    if spec.is_scalar_only and not _has_joins(query):
        logger.debug("where_all.native", entity=relation.name, fields=spec.fields)
        return query.filter_by(**spec.as_kwargs())

    logger.debug("where_all.predicates", entity=relation.name, fields=spec.fields)
    return FilterUtils.where_all(spec).to_predicate(relation.entity, query)


def where_none(source: QuerySource, filters: Any = None, /, **fields: Any) -> Select[Any]:
    """Drop rows matching any single field/value pair.

    Collection values become ``NOT IN`` tests and all other values ``!=``
    tests, ANDed together.  ``where_none(q, name="Fluffy", age=3)`` excludes
    every Fluffy *and* every 3-year-old, not only 3-year-old Fluffies.

    Raises:
        UnknownFieldError: If a field does not exist on the queried entity.
    """
    query, spec = _prepare(source, filters, fields)
    if spec.is_empty:
        return query

    relation = RelationDescriptor.of(query)
    logger.debug("where_none.predicates", entity=relation.name, fields=spec.fields)
    return FilterUtils.where_none(spec).to_predicate(relation.entity, query)


def find(source: QuerySource, primary_key_value: Any) -> Select[Any]:
    """Match the row whose primary key equals *primary_key_value*.

    Raises:
        NoPrimaryKeyError: If the entity has no primary key or a composite one.
    """
    query = as_query(source)
    key = RelationDescriptor.of(query).primary_key
    return where_all(query, [(key, Scalar(primary_key_value))])


def find_many(source: QuerySource, primary_key_values: Iterable[Any]) -> Select[Any]:
    """Match rows whose primary key is any of *primary_key_values*.

    An empty iterable matches no rows.

    Raises:
        NoPrimaryKeyError: If the entity has no primary key or a composite one.
    """
    query = as_query(source)
    key = RelationDescriptor.of(query).primary_key
    return where_all(query, [(key, Collection.of(primary_key_values))])
