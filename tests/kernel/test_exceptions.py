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
"""Tests for the sqlplasm exception hierarchy."""

import sqlplasm
from sqlplasm.kernel.exceptions import (
    NoPrimaryKeyError,
    PlasmException,
    QueryException,
    TimestampParseError,
    UnknownFieldError,
    UnsupportedOperationError,
)


class TestPlasmException:
    def test_basic_creation(self):
        exc = PlasmException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = PlasmException("bad", code="X_001", context={"entity": "Puppy"})
        assert exc.code == "X_001"
        assert exc.context["entity"] == "Puppy"

    def test_context_not_shared(self):
        exc = PlasmException("a")
        exc.context["key"] = "value"
        assert PlasmException("b").context == {}


class TestExceptionHierarchy:
    def test_query_errors_share_a_base(self):
        for cls in (UnknownFieldError, NoPrimaryKeyError, TimestampParseError, UnsupportedOperationError):
            assert issubclass(cls, QueryException)
            assert issubclass(cls, PlasmException)

    def test_reexported_from_package(self):
        assert sqlplasm.UnknownFieldError is UnknownFieldError
        assert sqlplasm.PlasmException is PlasmException


class TestQueryErrors:
    def test_unknown_field(self):
        exc = UnknownFieldError("Puppy", "colour")
        assert exc.code == "UNKNOWN_FIELD"
        assert exc.context == {"entity": "Puppy", "field": "colour"}
        assert "colour" in str(exc)

    def test_no_primary_key_missing(self):
        exc = NoPrimaryKeyError("View", ())
        assert "no primary key" in str(exc)

    def test_no_primary_key_composite(self):
        exc = NoPrimaryKeyError("Litter", ("mother_id", "number"))
        assert "composite" in str(exc)
        assert "mother_id, number" in str(exc)
        assert exc.context["primary_key"] == ("mother_id", "number")

    def test_timestamp_parse(self):
        exc = TimestampParseError("yesterday")
        assert exc.code == "TIMESTAMP_PARSE"
        assert exc.value == "yesterday"
        assert "'yesterday'" in str(exc)

    def test_unsupported_operation(self):
        exc = UnsupportedOperationError("random", "firebird")
        assert exc.code == "UNSUPPORTED_OPERATION"
        assert exc.dialect == "firebird"
        assert "firebird" in str(exc)
