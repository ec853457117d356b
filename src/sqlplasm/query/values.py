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
"""Filter values and filter specifications.

A filter value is either a :class:`Scalar` (compared with ``==`` / ``!=``)
or a :class:`Collection` (compared with ``IN`` / ``NOT IN``).  Raw caller
values are tagged once by :func:`classify`; everything downstream branches
on the tag.

Example::

    spec = FilterSpec.of({"name": "Fluffy"}, age=[3, 5, 10])
    spec.entries
    # (("name", Scalar("Fluffy")), ("age", Collection((3, 5, 10))))
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from sqlplasm.query.source import FieldRef, field_name

_COLLECTION_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class Scalar:
    """A single value; matched by equality."""

    value: Any


@dataclass(frozen=True)
class Collection:
    """A set of candidate values; matched by membership.

    An empty collection matches no rows.
    """

    values: tuple[Any, ...] = ()

    @classmethod
    def of(cls, values: Iterable[Any]) -> Collection:
        return cls(tuple(values))


FilterValue: TypeAlias = "Scalar | Collection"


def classify(value: Any) -> Scalar | Collection:
    """Tag a raw value: lists, tuples and sets become :class:`Collection`.

    Strings, bytes, ``None`` and every other value are :class:`Scalar`.
    Already tagged values are returned unchanged.
    """
    if isinstance(value, (Scalar, Collection)):
        return value
    if isinstance(value, _COLLECTION_TYPES):
        return Collection.of(value)
    return Scalar(value)


@dataclass(frozen=True)
class FilterSpec:
    """Ordered field -> value mapping used by ``where_all`` / ``where_none``."""

    entries: tuple[tuple[str, Scalar | Collection], ...] = ()

    @classmethod
    def of(
        cls,
        filters: Mapping[Any, Any] | Iterable[tuple[Any, Any]] | FilterSpec | None = None,
        /,
        **fields: Any,
    ) -> FilterSpec:
        """Build a spec from a mapping, ``(field, value)`` pairs, and/or kwargs.

        Field references are normalized with :func:`field_name`; positional
        entries come before keyword entries.

        Raises:
            ValueError: If the same field is given more than once.
        """
        if isinstance(filters, FilterSpec) and not fields:
            return filters

        if filters is None:
            pairs: list[tuple[Any, Any]] = []
        elif isinstance(filters, FilterSpec):
            pairs = list(filters.entries)
        elif isinstance(filters, Mapping):
            pairs = list(filters.items())
        else:
            pairs = list(filters)
        pairs.extend(fields.items())

        entries: list[tuple[str, Scalar | Collection]] = []
        seen: set[str] = set()
        for ref, value in pairs:
            name = field_name(ref)
            if name in seen:
                raise ValueError(f"Field '{name}' given more than once")
            seen.add(name)
            entries.append((name, classify(value)))
        return cls(tuple(entries))

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def is_scalar_only(self) -> bool:
        return all(isinstance(value, Scalar) for _, value in self.entries)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.entries)

    def as_kwargs(self) -> dict[str, Any]:
        """Raw ``field=value`` pairs for an all-scalar spec.

        Raises:
            ValueError: If any entry is a :class:`Collection`.
        """
        if not self.is_scalar_only:
            raise ValueError("as_kwargs() requires a spec with scalar values only")
        return {name: value.value for name, value in self.entries}  # type: ignore[union-attr]

    def __len__(self) -> int:
        return len(self.entries)
