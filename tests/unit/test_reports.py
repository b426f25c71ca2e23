from __future__ import annotations

from typing import List

import pytest
from rich.console import Console

from src.config import Settings
from src.domain.models import PetType
from src.reporter import format_dollars, ordinal, print_report, report_lines
from src.reports import (
    PetShopReport,
    average_age_below_cost,
    build_report,
    count_cats_at_least,
    count_pets_by_type,
    iter_pets,
    nth_most_recently_updated,
    total_cost_cents,
)
from src.service import PetService
from src.store.memory import InMemoryPetStore

EXPECTED_TOTAL = 27
EXPECTED_BIRD_COST_CENTS = 28_000
EXPECTED_OLDER_CATS = 3
EXPECTED_AVERAGE_AGE = 3.0


class _CountingService(PetService):
    def __init__(self, store: InMemoryPetStore) -> None:
        super().__init__(store)
        self.list_calls: List[dict] = []

    async def list(self, filters=None, offset=0, limit=None, sort=None):
        self.list_calls.append({"filters": filters, "offset": offset, "limit": limit})
        return await super().list(filters, offset=offset, limit=limit, sort=sort)


@pytest.mark.asyncio
async def test_count_pets_by_type(pet_service: PetService) -> None:
    total, counts = await count_pets_by_type(pet_service)

    assert total == EXPECTED_TOTAL
    assert counts == {
        PetType.BIRD: 7,
        PetType.CAT: 8,
        PetType.DOG: 7,
        PetType.REPTILE: 5,
    }


@pytest.mark.asyncio
async def test_count_cats_at_least(pet_service: PetService) -> None:
    assert await count_cats_at_least(pet_service, 5) == EXPECTED_OLDER_CATS


@pytest.mark.asyncio
async def test_total_cost_of_birds(pet_service: PetService) -> None:
    assert await total_cost_cents(pet_service, PetType.BIRD) == EXPECTED_BIRD_COST_CENTS


@pytest.mark.asyncio
async def test_average_age_of_cheap_pets(pet_service: PetService) -> None:
    assert await average_age_below_cost(pet_service, 9000) == EXPECTED_AVERAGE_AGE


@pytest.mark.asyncio
async def test_average_age_reports_no_pets(pet_service: PetService) -> None:
    assert await average_age_below_cost(pet_service, 500) is None


@pytest.mark.asyncio
async def test_iter_pets_walks_every_page(pet_shop_store: InMemoryPetStore) -> None:
    service = _CountingService(pet_shop_store)

    birds = [pet async for pet in iter_pets(service, {"type": {"eq": "Bird"}}, page_size=3)]

    assert len(birds) == 7
    assert len({pet.id for pet in birds}) == 7
    assert [call["offset"] for call in service.list_calls] == [0, 3, 6]


@pytest.mark.asyncio
async def test_iter_pets_covers_more_than_one_max_page(memory_store: InMemoryPetStore, make_pet) -> None:
    memory_store.seed(make_pet(PetType.BIRD, f"Bird{i}", cost=100) for i in range(230))

    total = await total_cost_cents(PetService(memory_store), PetType.BIRD)

    assert total == 23_000


@pytest.mark.asyncio
async def test_third_most_recently_updated_dog(pet_service: PetService) -> None:
    dog = await nth_most_recently_updated(pet_service, PetType.DOG, 3)

    assert dog is not None
    assert dog.name == "Dog4"


@pytest.mark.asyncio
async def test_nth_dog_short_circuits_when_too_few(
    memory_store: InMemoryPetStore, make_pet
) -> None:
    memory_store.seed([make_pet(PetType.DOG, "A"), make_pet(PetType.DOG, "B")])
    service = _CountingService(memory_store)

    assert await nth_most_recently_updated(service, PetType.DOG, 3) is None
    assert len(service.list_calls) == 1
    assert service.list_calls[0]["limit"] == 1


@pytest.mark.asyncio
async def test_build_report(pet_service: PetService) -> None:
    settings = Settings(report_recent_rank=3, report_min_cat_age=5, report_max_cost_cents=9000)

    report = await build_report(pet_service, settings)

    assert report.total_pets == EXPECTED_TOTAL
    assert report.older_cats == EXPECTED_OLDER_CATS
    assert report.bird_cost_cents == EXPECTED_BIRD_COST_CENTS
    assert report.average_age_of_cheap_pets == EXPECTED_AVERAGE_AGE
    assert report.nth_recent_dog is not None
    assert report.nth_recent_dog.name == "Dog4"


def test_format_dollars() -> None:
    assert format_dollars(28_000) == "$280.00"
    assert format_dollars(9000) == "$90.00"
    assert format_dollars(5) == "$0.05"


@pytest.mark.parametrize(
    ("n", "expected"),
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (13, "13th"), (22, "22nd")],
)
def test_ordinal(n: int, expected: str) -> None:
    assert ordinal(n) == expected


def test_report_lines_for_empty_shop() -> None:
    report = PetShopReport(total_pets=0)

    answers = dict(report_lines(report))

    assert answers["How many total pets are in the pet-shop?"] == "0"
    assert answers["How many birds are in the pet-shop?"] == "0"
    assert answers["What is the average age of pets that cost less than $90.00?"] == "No pets found."
    assert (
        answers["What is the name of the 3rd most recently updated dog?"]
        == "There are less than 3 dogs in the pet shop."
    )


def test_print_report_renders_answers() -> None:
    console = Console(record=True, width=200)
    report = PetShopReport(total_pets=27, bird_cost_cents=28_000, average_age_of_cheap_pets=3.0)

    print_report(report, console=console)

    output = console.export_text()
    assert "Pet Shop Report" in output
    assert "$280.00" in output
    assert "3.00 years old" in output
