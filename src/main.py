from __future__ import annotations

import asyncio
import json
import sys
from typing import List, Optional, Tuple

import typer

from src.config import get_settings
from src.domain.models import PetListWithCounts
from src.errors import InvalidSortError
from src.infrastructure.db_factory import managed_async_pool
from src.query.filters import parse_filter_params
from src.reporter import print_report
from src.reports import PetShopReport, build_report
from src.service import PetService
from src.store.postgres import PostgresPetStore
from src.utils.logging import configure_logging

app = typer.Typer(help="Pet Store query CLI.")


def _split_filter(raw: str) -> Tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep:
        raise typer.BadParameter(f"Expected field[op]=value, got '{raw}'", param_hint="--filter")
    return key.strip(), value


async def _list(
    filters: List[Tuple[str, str]],
    offset: int,
    limit: Optional[int],
    sort: Optional[str],
    dsn: Optional[str],
) -> PetListWithCounts:
    async with managed_async_pool(dsn) as pool:
        service = PetService(PostgresPetStore(pool))
        return await service.list(parse_filter_params(filters), offset=offset, limit=limit, sort=sort)


async def _report(dsn: Optional[str]) -> PetShopReport:
    async with managed_async_pool(dsn) as pool:
        return await build_report(PetService(PostgresPetStore(pool)))


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) "
        f"env={settings.app_env} log_level={settings.log_level}"
    )


@app.command("list")
def list_pets(
    filter_: Optional[List[str]] = typer.Option(
        None,
        "--filter",
        "-f",
        help="Filter as field[op]=value, e.g. type[eq]=Cat or age[gte]=5. Repeatable.",
    ),
    offset: int = typer.Option(0, "--offset", min=0, help="Number of matching pets to skip."),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", help="Page size (at most 100; missing or < 1 means 100)."
    ),
    sort: Optional[str] = typer.Option(
        None, "--sort", "-s", help="Sort token such as -age or +name."
    ),
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
) -> None:
    """
    List one page of pets with total and filtered counts.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    pairs = [_split_filter(raw) for raw in filter_ or []]

    try:
        result = asyncio.run(_list(pairs, offset, limit, sort, dsn))
    except InvalidSortError as exc:
        typer.echo(f"Bad request: {exc}", err=True)
        raise typer.Exit(code=2)

    typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))


@app.command()
def report(
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
) -> None:
    """
    Answer the pet shop report questions.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    print_report(asyncio.run(_report(dsn)))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
