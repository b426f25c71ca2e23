from __future__ import annotations

from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from src.domain.models import PetType
from src.reports import PetShopReport

_PLURALS = {
    PetType.BIRD: "birds",
    PetType.CAT: "cats",
    PetType.DOG: "dogs",
    PetType.REPTILE: "reptiles",
}


def format_dollars(cents: int) -> str:
    """Render an amount in cents as dollars, e.g. 9000 -> "$90.00"."""
    return f"${cents / 100:,.2f}"


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def report_lines(report: PetShopReport) -> List[Tuple[str, str]]:
    """
    Question/answer pairs for the report, in presentation order.
    """
    lines: List[Tuple[str, str]] = [
        ("How many total pets are in the pet-shop?", str(report.total_pets)),
    ]
    for pet_type, plural in _PLURALS.items():
        lines.append(
            (f"How many {plural} are in the pet-shop?", str(report.counts_by_type.get(pet_type, 0)))
        )

    lines.append(
        (
            f"How many cats are there with age equal to or greater than {report.min_cat_age} "
            "in the pet-shop?",
            str(report.older_cats),
        )
    )
    lines.append(
        (
            "How much would it cost to buy all the birds in the pet-shop?",
            format_dollars(report.bird_cost_cents),
        )
    )

    if report.average_age_of_cheap_pets is None:
        average = "No pets found."
    else:
        average = f"{report.average_age_of_cheap_pets:.2f} years old"
    lines.append(
        (
            f"What is the average age of pets that cost less than "
            f"{format_dollars(report.max_cost_cents)}?",
            average,
        )
    )

    rank = ordinal(report.recent_rank)
    if report.nth_recent_dog is None:
        dog = f"There are less than {report.recent_rank} dogs in the pet shop."
    else:
        dog = report.nth_recent_dog.name
    lines.append((f"What is the name of the {rank} most recently updated dog?", dog))
    return lines


def print_report(report: PetShopReport, console: Optional[Console] = None) -> None:
    """
    Render the report as a rich table.
    """
    console = console or Console()

    table = Table(title="Pet Shop Report", box=box.ROUNDED)
    table.add_column("Question", style="cyan")
    table.add_column("Answer", justify="right", style="bold green")

    for question, answer in report_lines(report):
        table.add_row(question, answer)

    console.print(table)


__all__ = ["format_dollars", "ordinal", "print_report", "report_lines"]
