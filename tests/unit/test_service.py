from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.models import PetCreate, PetType, PetUpdate
from src.errors import InvalidSortError, PetNotFoundError
from src.service import PetService
from src.store.memory import InMemoryPetStore


class _StepClock:
    """Clock advancing by `step` seconds per call; can be rewound."""

    def __init__(self, step: int = 1) -> None:
        self.now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        self.step = timedelta(seconds=step)

    def __call__(self) -> datetime:
        self.now += self.step
        return self.now


@pytest.mark.asyncio
async def test_create_then_list() -> None:
    service = PetService(InMemoryPetStore())
    created = await service.create(PetCreate(type=PetType.CAT, name="Luna", age=4, cost=12_000))

    result = await service.list({"name": {"eq": "Luna"}})

    assert result.filtered_count == 1
    assert result.data[0].id == created.id
    assert created.created_at == created.updated_at


@pytest.mark.asyncio
async def test_update_applies_set_fields_and_bumps_updated_at() -> None:
    service = PetService(InMemoryPetStore(clock=_StepClock()))
    created = await service.create(PetCreate(type=PetType.DOG, name="Rex", age=2, cost=30_000))

    updated = await service.update(created.id, PetUpdate(age=3))

    assert updated.age == 3
    assert updated.name == "Rex"
    assert updated.updated_at > created.updated_at
    assert updated.created_at == created.created_at


@pytest.mark.asyncio
async def test_update_never_moves_updated_at_backwards() -> None:
    clock = _StepClock()
    service = PetService(InMemoryPetStore(clock=clock))
    created = await service.create(PetCreate(type=PetType.DOG, name="Rex", age=2, cost=30_000))
    clock.step = timedelta(seconds=-60)

    updated = await service.update(created.id, PetUpdate(name="Max"))

    assert updated.updated_at == created.updated_at


@pytest.mark.asyncio
async def test_update_unknown_pet_raises_not_found() -> None:
    service = PetService(InMemoryPetStore())
    with pytest.raises(PetNotFoundError) as excinfo:
        await service.update("missing", PetUpdate(age=1))
    assert excinfo.value.pet_id == "missing"


@pytest.mark.asyncio
async def test_delete_returns_pet_then_none() -> None:
    service = PetService(InMemoryPetStore())
    created = await service.create(PetCreate(type=PetType.BIRD, name="Kiwi", age=1, cost=4_000))

    assert (await service.delete(created.id)).id == created.id
    assert await service.delete(created.id) is None
    assert (await service.list()).total_count == 0


@pytest.mark.asyncio
async def test_list_surfaces_invalid_sort(pet_service: PetService) -> None:
    with pytest.raises(InvalidSortError):
        await pet_service.list(sort="+createdAt")


def test_pet_create_rejects_negative_cost() -> None:
    with pytest.raises(ValueError):
        PetCreate(type=PetType.CAT, name="Luna", age=1, cost=-1)
