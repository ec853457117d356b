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
"""Unified exception hierarchy for sqlplasm.

All library exceptions inherit from PlasmException, enabling unified
error handling: catch PlasmException to handle every query-building
failure, or catch a specific subclass for targeted handling.

None of these are recovered inside the library. A helper that raises
never returns a partially built query.
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# Base Exception
# =============================================================================


class PlasmException(Exception):
    """Base exception for all sqlplasm errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNKNOWN_FIELD").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Query Exceptions
# =============================================================================


class QueryException(PlasmException):
    """A query transformation could not be built."""


class UnknownFieldError(QueryException):
    """Referenced field does not exist on the relation."""

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(
            f"{entity} has no field '{field}'",
            code="UNKNOWN_FIELD",
            context={"entity": entity, "field": field},
        )
        self.entity = entity
        self.field = field


class NoPrimaryKeyError(QueryException):
    """Relation does not expose exactly one primary-key field."""

    def __init__(self, entity: str, primary_key: tuple[str, ...]) -> None:
        if primary_key:
            detail = f"a composite primary key ({', '.join(primary_key)})"
        else:
            detail = "no primary key"
        super().__init__(
            f"{entity} has {detail}; a single-column primary key is required",
            code="NO_PRIMARY_KEY",
            context={"entity": entity, "primary_key": primary_key},
        )
        self.entity = entity
        self.primary_key = primary_key


class TimestampParseError(QueryException):
    """Supplied value does not parse as a valid timestamp."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Cannot parse {value!r} as a timestamp",
            code="TIMESTAMP_PARSE",
            context={"value": value},
        )
        self.value = value


class UnsupportedOperationError(QueryException):
    """The operation has no native equivalent on the target database backend."""

    def __init__(self, operation: str, dialect: str) -> None:
        super().__init__(
            f"'{operation}' is not supported for the '{dialect}' dialect",
            code="UNSUPPORTED_OPERATION",
            context={"operation": operation, "dialect": dialect},
        )
        self.operation = operation
        self.dialect = dialect
