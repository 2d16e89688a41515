"""Test config and shared fixtures."""
import pytest
from typing import AsyncGenerator, List
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from main import app
from apps.catalog.models import Category, Product
from apps.courses.models import Discipline, Student


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def session_factory():
    """Session factory bound to a fresh in-memory database."""
    import apps.models  # noqa: F401  registers all tables

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(
    async_session: AsyncSession
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    from framework.dependencies import get_db

    async def _get_db():
        yield async_session

    app.dependency_overrides[get_db] = _get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_categories(async_session: AsyncSession) -> List[Category]:
    """25 categories with ids 1..25."""
    categories = [Category(name=f"Category {index:02d}") for index in range(1, 26)]
    async_session.add_all(categories)
    await async_session.commit()
    return categories


@pytest.fixture
async def sample_category(async_session: AsyncSession) -> Category:
    """Create sample category."""
    category = Category(name="Books", image_url="books.jpg")
    async_session.add(category)
    await async_session.commit()
    await async_session.refresh(category)
    return category


@pytest.fixture
async def sample_products(async_session: AsyncSession, sample_category: Category) -> List[Product]:
    """Products priced 5, 15, 25 and 35 in the sample category."""
    products = [
        Product(name=f"Book {price}", price=float(price), stock=3, category_id=sample_category.id)
        for price in (5, 15, 25, 35)
    ]
    async_session.add_all(products)
    await async_session.commit()
    return products


@pytest.fixture
async def sample_discipline(async_session: AsyncSession) -> Discipline:
    """Create sample discipline."""
    discipline = Discipline(name="Algebra", lessons=12)
    async_session.add(discipline)
    await async_session.commit()
    await async_session.refresh(discipline)
    return discipline


@pytest.fixture
async def sample_student(async_session: AsyncSession, sample_discipline: Discipline) -> Student:
    """Create sample student."""
    student = Student(name="Ana", grade=8.5, discipline_id=sample_discipline.id)
    async_session.add(student)
    await async_session.commit()
    await async_session.refresh(student)
    return student
