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
"""Column-level filter operators and filter-spec driven Specifications.

:class:`FilterOperator` builds one-column :class:`Specification` objects.
:class:`FilterUtils` turns a :class:`~sqlplasm.query.values.FilterSpec` into
a single Specification, choosing the operator per entry:

============  ==============  ===============
value         ``where_all``   ``where_none``
============  ==============  ===============
Scalar        ``==``          ``!=``
Collection    ``IN``          ``NOT IN``
============  ==============  ===============

Example::

    spec = FilterUtils.where_all({"name": "Fluffy", "age": [3, 5, 10]})
    spec = spec | FilterOperator.is_null("owner_id")
    stmt = spec.apply(Puppy)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlplasm.query.source import FieldRef, RelationDescriptor, field_name
from sqlplasm.query.specification import Specification
from sqlplasm.query.values import Collection, FilterSpec, Scalar


def _column(root: Any, field: str) -> Any:
    return RelationDescriptor(root).column(field)


def _single(field: FieldRef, build: Callable[[Any], Any]) -> Specification[Any]:
    name = field_name(field)
    return Specification(lambda root, q: q.where(build(_column(root, name))))


class FilterOperator:
    """Single-column predicates.  Field references may be names or mapped attributes."""

    @staticmethod
    def eq(field: FieldRef, value: Any) -> Specification[Any]:
        """Equal to (``None`` renders as ``IS NULL``)."""
        return _single(field, lambda col: col == value)

    @staticmethod
    def neq(field: FieldRef, value: Any) -> Specification[Any]:
        """Not equal to (``None`` renders as ``IS NOT NULL``)."""
        return _single(field, lambda col: col != value)

    @staticmethod
    def gt(field: FieldRef, value: Any) -> Specification[Any]:
        return _single(field, lambda col: col > value)

    @staticmethod
    def gte(field: FieldRef, value: Any) -> Specification[Any]:
        return _single(field, lambda col: col >= value)

    @staticmethod
    def lt(field: FieldRef, value: Any) -> Specification[Any]:
        return _single(field, lambda col: col < value)

    @staticmethod
    def lte(field: FieldRef, value: Any) -> Specification[Any]:
        return _single(field, lambda col: col <= value)

    @staticmethod
    def like(field: FieldRef, pattern: str) -> Specification[Any]:
        """SQL LIKE pattern match."""
        return _single(field, lambda col: col.like(pattern))

    @staticmethod
    def contains(field: FieldRef, value: str) -> Specification[Any]:
        """String contains (``LIKE '%value%'``)."""
        return _single(field, lambda col: col.contains(value))

    @staticmethod
    def in_list(field: FieldRef, values: Any) -> Specification[Any]:
        """Value is one of *values*.  An empty list matches nothing."""
        values = tuple(values)
        return _single(field, lambda col: col.in_(values))

    @staticmethod
    def not_in_list(field: FieldRef, values: Any) -> Specification[Any]:
        """Value is none of *values*.  An empty list matches everything."""
        values = tuple(values)
        return _single(field, lambda col: col.not_in(values))

    @staticmethod
    def is_null(field: FieldRef) -> Specification[Any]:
        return _single(field, lambda col: col.is_(None))

    @staticmethod
    def is_not_null(field: FieldRef) -> Specification[Any]:
        return _single(field, lambda col: col.is_not(None))

    @staticmethod
    def between(field: FieldRef, low: Any, high: Any) -> Specification[Any]:
        """Value is between *low* and *high* (inclusive)."""
        return _single(field, lambda col: col.between(low, high))


class FilterUtils:
    """Build Specifications from filter specs.

    ``where_all`` keeps rows matching every entry.  ``where_none`` ANDs one
    exclusion per entry, so a row is dropped when it matches *any* single
    entry; it is not the negation of ``where_all``::

        FilterUtils.where_none({"name": "Fluffy", "age": [3, 5]})
        # name != 'Fluffy' AND age NOT IN (3, 5)
    """

    @staticmethod
    def where_all(filters: Any = None, /, **fields: Any) -> Specification[Any]:
        spec = FilterSpec.of(filters, **fields)
        return FilterUtils._combine_and([FilterUtils._match(name, value) for name, value in spec.entries])

    @staticmethod
    def where_none(filters: Any = None, /, **fields: Any) -> Specification[Any]:
        spec = FilterSpec.of(filters, **fields)
        return FilterUtils._combine_and([FilterUtils._exclude(name, value) for name, value in spec.entries])

    @staticmethod
    def by(**kwargs: Any) -> Specification[Any]:
        """Keyword form of :meth:`where_all`."""
        return FilterUtils.where_all(kwargs)

    @staticmethod
    def from_dict(filters: dict[Any, Any]) -> Specification[Any]:
        """:meth:`where_all` over *filters*, skipping ``None`` values.

        Useful for optional request parameters where ``None`` means "not given".
        """
        return FilterUtils.where_all({k: v for k, v in filters.items() if v is not None})

    @staticmethod
    def _match(name: str, value: Scalar | Collection) -> Specification[Any]:
        if isinstance(value, Collection):
            return FilterOperator.in_list(name, value.values)
        return FilterOperator.eq(name, value.value)

    @staticmethod
    def _exclude(name: str, value: Scalar | Collection) -> Specification[Any]:
        if isinstance(value, Collection):
            return FilterOperator.not_in_list(name, value.values)
        return FilterOperator.neq(name, value.value)

    @staticmethod
    def _combine_and(specs: list[Specification[Any]]) -> Specification[Any]:
        """AND-combine a list of specs.  Returns the identity if empty."""
        if not specs:
            return Specification.identity()
        result = specs[0]
        for s in specs[1:]:
            result = result & s
        return result
