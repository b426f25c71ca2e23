"""
Pytest configuration for the Pet Store query service.

Provides fixtures for:
- Building pets with controlled timestamps
- In-memory stores and services for unit tests
- Database connection management for integration tests
"""

from __future__ import annotations

import itertools
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Generator

import psycopg
import pytest

from src.config import Settings
from src.domain.models import Pet, PetType
from src.service import PetService
from src.store.memory import InMemoryPetStore

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

_ids = itertools.count(1)


def build_pet(
    pet_type: PetType = PetType.DOG,
    name: str = "Rex",
    age: int = 3,
    cost: int = 10_000,
    updated_offset: int = 0,
) -> Pet:
    """Pet whose updated_at is BASE_TIME + `updated_offset` seconds."""
    updated_at = BASE_TIME + timedelta(seconds=updated_offset)
    return Pet(
        id=f"pet-{next(_ids)}",
        type=pet_type,
        name=name,
        age=age,
        cost=cost,
        created_at=BASE_TIME,
        updated_at=updated_at,
    )


@pytest.fixture
def make_pet() -> Callable[..., Pet]:
    return build_pet


@pytest.fixture
def memory_store() -> InMemoryPetStore:
    return InMemoryPetStore()


@pytest.fixture
def pet_shop_store() -> InMemoryPetStore:
    """
    7 birds and 20 other pets (8 cats, 7 dogs, 5 reptiles).
    """
    store = InMemoryPetStore()
    pets = [build_pet(PetType.BIRD, f"Bird{i}", age=i, cost=1_000 * (i + 1)) for i in range(7)]
    pets += [build_pet(PetType.CAT, f"Cat{i}", age=i, cost=20_000) for i in range(8)]
    pets += [
        build_pet(PetType.DOG, f"Dog{i}", age=2, cost=30_000, updated_offset=i * 10)
        for i in range(7)
    ]
    pets += [build_pet(PetType.REPTILE, f"Reptile{i}", age=10, cost=15_000) for i in range(5)]
    store.seed(pets)
    return store


@pytest.fixture
def pet_service(pet_shop_store: InMemoryPetStore) -> PetService:
    return PetService(pet_shop_store)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "pet_store"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the pets table exists by running db/init.sql (idempotent).
    """
    init_sql_path = Path(__file__).parent.parent / "db" / "init.sql"
    with db_connection.cursor() as cur:
        cur.execute(init_sql_path.read_text(encoding="utf-8"))
    db_connection.commit()
    return True


@pytest.fixture(scope="function")
def clean_pets_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the pets table before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.pets;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.pets;")
    db_connection.commit()
