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
"""Tests for aggregate projections and DISTINCT helpers."""

from __future__ import annotations

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sqlplasm.kernel.exceptions import UnknownFieldError, UnsupportedOperationError
from sqlplasm.query import aggregates
from sqlplasm.query.composer import where_all


class Base(DeclarativeBase):
    pass


class Puppy(Base):
    __tablename__ = "agg_puppies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    age: Mapped[int] = mapped_column(Integer)


class Litter(Base):
    __tablename__ = "agg_litters"

    mother_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    number: Mapped[int] = mapped_column(Integer, primary_key=True)


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
                Puppy(name="Fluffy", age=3),
                Puppy(name="Fluffy", age=5),
                Puppy(name="Rex", age=5),
                Puppy(name="Spot", age=11),
                Litter(mother_id=1, number=1),
                Litter(mother_id=1, number=2),
            ]
        )
        await session.flush()
        yield session


async def _scalar(session: AsyncSession, stmt):
    return (await session.execute(stmt)).scalar_one()


class TestAggregates:
    @pytest.mark.asyncio
    async def test_count(self, session: AsyncSession):
        assert await _scalar(session, aggregates.count(Puppy)) == 4

    @pytest.mark.asyncio
    async def test_count_respects_filters(self, session: AsyncSession):
        assert await _scalar(session, aggregates.count(where_all(Puppy, name="Fluffy"))) == 2

    @pytest.mark.asyncio
    async def test_count_composite_key(self, session: AsyncSession):
        assert await _scalar(session, aggregates.count(Litter)) == 2

    @pytest.mark.asyncio
    async def test_count_distinct(self, session: AsyncSession):
        assert await _scalar(session, aggregates.count_distinct(Puppy, "name")) == 3
        assert await _scalar(session, aggregates.count_distinct(Puppy, Puppy.age)) == 3

    @pytest.mark.asyncio
    async def test_sum(self, session: AsyncSession):
        assert await _scalar(session, aggregates.sum(Puppy, "age")) == 24

    @pytest.mark.asyncio
    async def test_avg(self, session: AsyncSession):
        assert await _scalar(session, aggregates.avg(where_all(Puppy, name="Fluffy"), "age")) == pytest.approx(4.0)

    @pytest.mark.asyncio
    async def test_min_max(self, session: AsyncSession):
        assert await _scalar(session, aggregates.min(Puppy, "age")) == 3
        assert await _scalar(session, aggregates.max(Puppy, "age")) == 11

    @pytest.mark.asyncio
    async def test_aggregate_of_empty_selection(self, session: AsyncSession):
        assert await _scalar(session, aggregates.max(where_all(Puppy, name="Nobody"), "age")) is None

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            aggregates.sum(Puppy, "weight")


class TestDistinct:
    @pytest.mark.asyncio
    async def test_distinct_values(self, session: AsyncSession):
        result = await session.execute(aggregates.distinct_values(Puppy, "name"))
        assert sorted(result.scalars().all()) == ["Fluffy", "Rex", "Spot"]

    def test_distinct_by_renders_distinct_on(self):
        stmt = aggregates.distinct_by(Puppy, "name", dialect="postgresql")
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "DISTINCT ON (agg_puppies.name)" in sql
        assert "agg_puppies.age" in sql

    def test_distinct_by_accepts_dialect_objects(self):
        stmt = aggregates.distinct_by(where_all(Puppy, age=5), Puppy.name, dialect=postgresql.dialect())
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "DISTINCT ON (agg_puppies.name)" in sql
        assert "WHERE agg_puppies.age = " in sql

    @pytest.mark.asyncio
    async def test_distinct_by_fails_fast_on_sqlite(self, session: AsyncSession, engine):
        with pytest.raises(UnsupportedOperationError) as exc_info:
            aggregates.distinct_by(Puppy, "name", dialect=engine)
        assert exc_info.value.context == {"operation": "distinct_by", "dialect": "sqlite"}
        # the portable form still runs there
        result = await session.execute(aggregates.distinct_values(Puppy, "name"))
        assert len(result.scalars().all()) == 3

    def test_distinct_by_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            aggregates.distinct_by(Puppy, "weight", dialect="postgresql")
