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
"""Timestamp range filters on the insert / update audit columns.

Each filter accepts a ``datetime``, a ``date`` (midnight), or any value
:func:`parse_timestamp` understands, e.g. ``"2014-04-17T14:00:00Z"``::

    stmt = inserted_after(Puppy, "2014-04-17T14:00:00Z")
    stmt = updated_before_incl(stmt, datetime(2015, 1, 1))

The ``_incl`` variants compare with ``>=`` / ``<=``; the others are strict.
Column names come from :class:`~sqlplasm.query.settings.QuerySettings`
unless ``field=`` is given.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from datetime import date, datetime, time
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import Select

from sqlplasm.kernel.exceptions import TimestampParseError
from sqlplasm.query.settings import QuerySettings
from sqlplasm.query.source import FieldRef, QuerySource, RelationDescriptor, as_query

_DATETIME = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> datetime:
    """Cast *value* to a ``datetime``.

    ``datetime`` passes through, ``date`` becomes midnight of that day;
    strings (ISO 8601) and numbers (Unix time) are validated by pydantic.

    Raises:
        TimestampParseError: If *value* is not a valid timestamp.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    try:
        return _DATETIME.validate_python(value)
    except ValidationError as exc:
        raise TimestampParseError(value) from exc


def _compare(
    source: QuerySource,
    field: FieldRef,
    op: Callable[[Any, Any], Any],
    value: Any,
) -> Select[Any]:
    timestamp = parse_timestamp(value)
    query = as_query(source)
    column = RelationDescriptor.of(query).column(field)
    return query.where(op(column, timestamp))


def between_timestamps(source: QuerySource, field: FieldRef, start: Any, end: Any) -> Select[Any]:
    """Rows whose *field* lies between *start* and *end*, both inclusive."""
    low, high = parse_timestamp(start), parse_timestamp(end)
    query = as_query(source)
    column = RelationDescriptor.of(query).column(field)
    return query.where(column.between(low, high))


def _inserted(settings: QuerySettings | None, field: FieldRef | None) -> FieldRef:
    return field if field is not None else QuerySettings.resolve(settings).inserted_at_field


def _updated(settings: QuerySettings | None, field: FieldRef | None) -> FieldRef:
    return field if field is not None else QuerySettings.resolve(settings).updated_at_field


def inserted_after(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _inserted(settings, field), operator.gt, value)


def inserted_after_incl(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _inserted(settings, field), operator.ge, value)


def inserted_before(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _inserted(settings, field), operator.lt, value)


def inserted_before_incl(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _inserted(settings, field), operator.le, value)


def updated_after(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _updated(settings, field), operator.gt, value)


def updated_after_incl(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _updated(settings, field), operator.ge, value)


def updated_before(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _updated(settings, field), operator.lt, value)


def updated_before_incl(
    source: QuerySource, value: Any, *, field: FieldRef | None = None, settings: QuerySettings | None = None
) -> Select[Any]:
    return _compare(source, _updated(settings, field), operator.le, value)
