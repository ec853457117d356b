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
"""sqlplasm Query: composable helpers over SQLAlchemy ``Select`` statements."""

from sqlplasm.query.aggregates import avg, count, count_distinct, distinct_by, distinct_values, max, min, sum
from sqlplasm.query.composer import find, find_many, where_all, where_none
from sqlplasm.query.filter import FilterOperator, FilterUtils
from sqlplasm.query.pagination import Order, Pageable, Sort, first, last, order_by, paginate
from sqlplasm.query.sampling import dialect_name, random, supports_random
from sqlplasm.query.settings import QuerySettings
from sqlplasm.query.source import FieldRef, QuerySource, RelationDescriptor, as_query, field_name
from sqlplasm.query.specification import Specification
from sqlplasm.query.temporal import (
    between_timestamps,
    inserted_after,
    inserted_after_incl,
    inserted_before,
    inserted_before_incl,
    parse_timestamp,
    updated_after,
    updated_after_incl,
    updated_before,
    updated_before_incl,
)
from sqlplasm.query.values import Collection, FilterSpec, FilterValue, Scalar, classify

__all__ = [
    # Composer
    "find",
    "find_many",
    "where_all",
    "where_none",
    # Filter values and specifications
    "Collection",
    "FilterOperator",
    "FilterSpec",
    "FilterUtils",
    "FilterValue",
    "Scalar",
    "Specification",
    "classify",
    # Sources
    "FieldRef",
    "QuerySource",
    "RelationDescriptor",
    "as_query",
    "field_name",
    # Aggregates
    "avg",
    "count",
    "count_distinct",
    "distinct_by",
    "distinct_values",
    "max",
    "min",
    "sum",
    # Pagination
    "Order",
    "Pageable",
    "Sort",
    "first",
    "last",
    "order_by",
    "paginate",
    # Timestamps
    "between_timestamps",
    "inserted_after",
    "inserted_after_incl",
    "inserted_before",
    "inserted_before_incl",
    "parse_timestamp",
    "updated_after",
    "updated_after_incl",
    "updated_before",
    "updated_before_incl",
    # Sampling
    "dialect_name",
    "random",
    "supports_random",
    # Settings
    "QuerySettings",
]
