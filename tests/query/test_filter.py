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
"""Tests for FilterOperator and FilterUtils: filter-spec driven Specifications."""

from __future__ import annotations

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sqlplasm.kernel.exceptions import UnknownFieldError
from sqlplasm.query.filter import FilterOperator, FilterUtils
from sqlplasm.query.specification import Specification

# ---------------------------------------------------------------------------
# Test entity
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "filter_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    role: Mapped[str] = mapped_column(String(50), default="user")
    age: Mapped[int] = mapped_column(default=25)
    bio: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            [
                User(name="Alice", role="admin", age=30, bio="Loves Python"),
                User(name="Bob", role="user", age=17),
                User(name="Charlie", role="admin", age=45, bio="Rust fan"),
                User(name="Diana", role="user", age=65),
            ]
        )
        await session.flush()
        yield session


async def _names(session: AsyncSession, spec: Specification[User]) -> list[str]:
    result = await session.execute(spec.apply(User))
    return sorted(u.name for u in result.scalars().all())


# ---------------------------------------------------------------------------
# FilterOperator
# ---------------------------------------------------------------------------


class TestFilterOperator:
    @pytest.mark.asyncio
    async def test_eq_and_neq(self, session: AsyncSession):
        assert await _names(session, FilterOperator.eq("role", "admin")) == ["Alice", "Charlie"]
        assert await _names(session, FilterOperator.neq("role", "admin")) == ["Bob", "Diana"]

    @pytest.mark.asyncio
    async def test_ranges(self, session: AsyncSession):
        assert await _names(session, FilterOperator.gt("age", 30)) == ["Charlie", "Diana"]
        assert await _names(session, FilterOperator.gte("age", 30)) == ["Alice", "Charlie", "Diana"]
        assert await _names(session, FilterOperator.lt("age", 30)) == ["Bob"]
        assert await _names(session, FilterOperator.lte("age", 30)) == ["Alice", "Bob"]
        assert await _names(session, FilterOperator.between("age", 18, 45)) == ["Alice", "Charlie"]

    @pytest.mark.asyncio
    async def test_string_matching(self, session: AsyncSession):
        assert await _names(session, FilterOperator.like("name", "%li%")) == ["Alice", "Charlie"]
        assert await _names(session, FilterOperator.contains("bio", "Python")) == ["Alice"]

    @pytest.mark.asyncio
    async def test_membership(self, session: AsyncSession):
        assert await _names(session, FilterOperator.in_list("age", [17, 65])) == ["Bob", "Diana"]
        assert await _names(session, FilterOperator.not_in_list("age", [17, 65])) == ["Alice", "Charlie"]

    @pytest.mark.asyncio
    async def test_nulls(self, session: AsyncSession):
        assert await _names(session, FilterOperator.is_null("bio")) == ["Bob", "Diana"]
        assert await _names(session, FilterOperator.is_not_null("bio")) == ["Alice", "Charlie"]
        assert await _names(session, FilterOperator.eq("bio", None)) == ["Bob", "Diana"]

    @pytest.mark.asyncio
    async def test_attribute_reference(self, session: AsyncSession):
        assert await _names(session, FilterOperator.eq(User.role, "user")) == ["Bob", "Diana"]

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            FilterOperator.eq("colour", "red").apply(User)


# ---------------------------------------------------------------------------
# FilterUtils
# ---------------------------------------------------------------------------


class TestFilterUtils:
    @pytest.mark.asyncio
    async def test_where_all(self, session: AsyncSession):
        spec = FilterUtils.where_all({"role": "admin", "age": [30, 65]})
        assert await _names(session, spec) == ["Alice"]

    @pytest.mark.asyncio
    async def test_where_none(self, session: AsyncSession):
        spec = FilterUtils.where_none({"role": "admin", "age": [65]})
        assert await _names(session, spec) == ["Bob"]

    @pytest.mark.asyncio
    async def test_by_kwargs(self, session: AsyncSession):
        assert await _names(session, FilterUtils.by(role="user", age=[17])) == ["Bob"]

    @pytest.mark.asyncio
    async def test_from_dict_skips_none(self, session: AsyncSession):
        spec = FilterUtils.from_dict({"role": "admin", "name": None})
        assert await _names(session, spec) == ["Alice", "Charlie"]

    @pytest.mark.asyncio
    async def test_empty_is_identity(self, session: AsyncSession):
        assert await _names(session, FilterUtils.where_all({})) == ["Alice", "Bob", "Charlie", "Diana"]
        assert await _names(session, FilterUtils.where_none({})) == ["Alice", "Bob", "Charlie", "Diana"]

    @pytest.mark.asyncio
    async def test_composes_with_operators(self, session: AsyncSession):
        spec = FilterUtils.where_all(role="user") | FilterOperator.gt("age", 40)
        assert await _names(session, spec) == ["Bob", "Charlie", "Diana"]

    @pytest.mark.asyncio
    async def test_negated_where_all_differs_from_where_none(self, session: AsyncSession):
        filters = {"role": "admin", "age": [30]}
        assert await _names(session, ~FilterUtils.where_all(filters)) == ["Bob", "Charlie", "Diana"]
        assert await _names(session, FilterUtils.where_none(filters)) == ["Bob", "Diana"]
