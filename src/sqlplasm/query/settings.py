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
"""Settings for the timestamp, pagination and sampling helpers."""

from __future__ import annotations

from dataclasses import dataclass

from sqlplasm.core.config import Config, config_properties


@config_properties(prefix="plasm.query")
@dataclass(frozen=True)
class QuerySettings:
    """Column names and defaults the helpers fall back to.

    Bound from the ``plasm.query`` configuration section::

        plasm:
          query:
            inserted_at_field: created_at
            updated_at_field: modified_at
            default_limit: 1

    Helpers called without ``settings=`` use :meth:`resolve`, which applies
    ``PLASM_QUERY_*`` environment variables over the field defaults.  To use
    file-based settings, bind them once and pass them explicitly::

        settings = QuerySettings.from_config(Config.from_sources("."))
        stmt = last(Puppy, settings=settings)
    """

    inserted_at_field: str = "inserted_at"
    updated_at_field: str = "updated_at"
    default_limit: int = 1

    def __post_init__(self) -> None:
        if self.default_limit < 1:
            raise ValueError(f"default_limit must be >= 1, got {self.default_limit}")

    @classmethod
    def from_config(cls, config: Config) -> QuerySettings:
        return config.bind(cls)

    @classmethod
    def resolve(cls, settings: QuerySettings | None = None) -> QuerySettings:
        """*settings* when given, otherwise the defaults with environment overrides applied."""
        if settings is not None:
            return settings
        return cls.from_config(Config({}))
