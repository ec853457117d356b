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
"""Composable query predicates.

A :class:`Specification` wraps a callable ``(root, select) -> select`` that
adds WHERE criteria for the entity ``root``.  Specifications compose with
``&`` (AND), ``|`` (OR) and ``~`` (NOT)::

    fluffy = Specification(lambda root, q: q.where(root.name == "Fluffy"))
    young = Specification(lambda root, q: q.where(root.age < 3))

    stmt = (fluffy | young).apply(select(Puppy))
    stmt = (~fluffy).apply(Puppy)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, not_, or_, select

from sqlplasm.query.source import QuerySource, RelationDescriptor, as_query

T = TypeVar("T")

Predicate = Callable[[Any, Select[Any]], Select[Any]]


class Specification(Generic[T]):
    """Composable WHERE predicate over a mapped entity."""

    def __init__(self, predicate: Predicate) -> None:
        self._predicate = predicate

    @classmethod
    def identity(cls) -> Specification[T]:
        """A specification that adds no criteria."""
        return cls(lambda root, q: q)

    def to_predicate(self, root: Any, query: Select[Any]) -> Select[Any]:
        """Apply this specification's predicate to *query* for entity *root*."""
        return self._predicate(root, query)

    def apply(self, source: QuerySource) -> Select[Any]:
        """Apply to a query (or mapped class), resolving ``root`` from its primary entity."""
        query = as_query(source)
        return self.to_predicate(RelationDescriptor.of(query).entity, query)

    def _clause(self, root: Any) -> Any:
        """The WHERE clause this spec produces on its own, or ``None``."""
        return self._predicate(root, select(root)).whereclause

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def __and__(self, other: Specification[T]) -> Specification[T]:
        """Both specs must match.

        The left predicate is applied first, then the right one; successive
        ``.where()`` calls are ANDed by SQLAlchemy.
        """
        left, right = self._predicate, other._predicate
        return Specification(lambda root, q: right(root, left(root, q)))

    def __or__(self, other: Specification[T]) -> Specification[T]:
        """Either spec may match.

        Each side is evaluated against a bare ``select(root)`` so only its
        own criteria are ORed; the result is ANDed onto the incoming query.
        """

        def or_predicate(root: Any, query: Select[Any]) -> Select[Any]:
            left_clause = self._clause(root)
            right_clause = other._clause(root)
            if left_clause is None or right_clause is None:
                # One side is unrestricted, so the disjunction matches everything.
                return query
            return query.where(or_(left_clause, right_clause))

        return Specification(or_predicate)

    def __invert__(self) -> Specification[T]:
        """Negate this spec's own criteria.  Negating the identity is the identity."""

        def not_predicate(root: Any, query: Select[Any]) -> Select[Any]:
            clause = self._clause(root)
            if clause is None:
                return query
            return query.where(not_(clause))

        return Specification(not_predicate)
