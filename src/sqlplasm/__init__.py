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
"""sqlplasm: composable query helpers for SQLAlchemy.

Every helper takes a ``Select`` (or a mapped class) and returns a new
``Select``, so helpers chain freely before the statement is executed::

    from sqlplasm import query as q

    stmt = q.where_all(Puppy, name="Fluffy", age=[3, 5, 10])
    stmt = q.last(q.inserted_after(stmt, "2014-04-17T14:00:00Z"), 5)
    puppies = (await session.execute(stmt)).scalars().all()
"""

from sqlplasm.kernel.exceptions import (
    NoPrimaryKeyError,
    PlasmException,
    QueryException,
    TimestampParseError,
    UnknownFieldError,
    UnsupportedOperationError,
)

__version__ = "0.1.0"

__all__ = [
    "NoPrimaryKeyError",
    "PlasmException",
    "QueryException",
    "TimestampParseError",
    "UnknownFieldError",
    "UnsupportedOperationError",
    "__version__",
]
