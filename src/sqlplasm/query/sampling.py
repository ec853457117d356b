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
"""Random sampling via the database's native random ordering.

Random-ordering syntax differs per backend, so the target dialect must be
named explicitly::

    stmt = random(Puppy, 20, dialect=engine)
    stmt = random(Puppy, dialect="postgresql")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, func
from sqlalchemy.engine import Dialect

from sqlplasm.kernel.exceptions import UnsupportedOperationError
from sqlplasm.query.settings import QuerySettings
from sqlplasm.query.source import QuerySource, as_query

_RANDOM_ORDERING: dict[str, Callable[[], Any]] = {
    "postgresql": func.random,
    "sqlite": func.random,
    "mysql": func.rand,
    "mariadb": func.rand,
    "mssql": func.newid,
    "oracle": lambda: func.dbms_random.value(),
}


def dialect_name(dialect: Any) -> str:
    """Resolve a dialect name from a string, ``Dialect``, or anything with ``.dialect``.

    Engines, async engines and connections all expose ``.dialect``.
    """
    if isinstance(dialect, str):
        return dialect.split("+", 1)[0].lower()
    if isinstance(dialect, Dialect):
        return dialect.name
    inner = getattr(dialect, "dialect", None)
    if isinstance(inner, Dialect):
        return inner.name
    raise TypeError(f"Cannot determine a database dialect from {type(dialect).__name__}")


def supports_random(dialect: Any) -> bool:
    """Whether *dialect* has a native random-ordering function."""
    return dialect_name(dialect) in _RANDOM_ORDERING


def random(
    source: QuerySource,
    n: int | None = None,
    *,
    dialect: Any,
    settings: QuerySettings | None = None,
) -> Select[Any]:
    """Up to *n* rows in random order (one by default).

    Raises:
        UnsupportedOperationError: If *dialect* has no native random ordering.
        ValueError: If *n* is less than 1.
    """
    name = dialect_name(dialect)
    ordering = _RANDOM_ORDERING.get(name)
    if ordering is None:
        raise UnsupportedOperationError("random", name)

    limit = QuerySettings.resolve(settings).default_limit if n is None else n
    if limit < 1:
        raise ValueError(f"n must be >= 1, got {limit}")
    return as_query(source).order_by(ordering()).limit(limit)
