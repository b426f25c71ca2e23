"""
Data generation and loading script for the Pet Store query service.

Implements deterministic pseudo-random pet generation, CSV emission, and Postgres
COPY loading into `public.pets`.
"""

from __future__ import annotations

import csv
import random
import sys
import tempfile
import time
from datetime import UTC, datetime, timedelta
from pathlib import Path

import typer

from src.domain.models import PetType
from src.infrastructure.db_factory import build_dsn, get_sync_connection

app = typer.Typer(help="Generate synthetic pets and load into Postgres (CSV + COPY).")

CSV_HEADER = ["type", "name", "age", "cost", "created_at", "updated_at"]

_NAMES = [
    "Biscuit", "Luna", "Milo", "Pepper", "Rex", "Kiwi", "Shadow", "Nala",
    "Ziggy", "Coco", "Oscar", "Maple", "Rocky", "Pip", "Hazel", "Tango",
]


def _build_dsn(dsn_override: str | None) -> str:
    if dsn_override:
        return dsn_override
    return build_dsn()


def _generate_rows_csv(csv_path: Path, rows: int, batch_size: int, seed: int) -> None:
    rng = random.Random(seed)
    types = [pet_type.value for pet_type in PetType]
    now = datetime.now(UTC)

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)

        buffer: list[list[str]] = []
        for _ in range(rows):
            created_at = now - timedelta(days=rng.randint(30, 365), seconds=rng.randint(0, 86_399))
            updated_at = created_at + timedelta(seconds=rng.randint(0, 30 * 86_400))
            buffer.append(
                [
                    rng.choice(types),
                    rng.choice(_NAMES),
                    str(rng.randint(0, 15)),
                    str(rng.randint(500, 50_000)),
                    created_at.isoformat(),
                    updated_at.isoformat(),
                ]
            )
            if len(buffer) >= batch_size:
                writer.writerows(buffer)
                buffer.clear()
        if buffer:
            writer.writerows(buffer)


def _copy_into_db(dsn: str, csv_path: Path) -> int:
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            with cur.copy(
                """
                COPY public.pets (type, name, age, cost, created_at, updated_at)
                FROM STDIN WITH (FORMAT csv, HEADER TRUE)
                """
            ) as copy:
                with csv_path.open("r", encoding="utf-8") as f:
                    for line in f:
                        copy.write(line)
            conn.commit()
    return 0


@app.command()
def main(
    rows: int = typer.Option(
        200,
        "--rows",
        "-r",
        help="Number of pets to generate.",
    ),
    batch_size: int = typer.Option(
        1_000,
        "--batch-size",
        "-b",
        help="Batch size for CSV buffering during generation.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional CSV output path (if omitted, a temp file will be used).",
    ),
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only generate CSV; skip loading into Postgres.",
    ),
) -> None:
    """
    Generate synthetic pets and optionally load them into Postgres using COPY.
    """
    start = time.perf_counter()
    if output:
        csv_path = output
        csv_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        tmpdir = Path(tempfile.mkdtemp(prefix="pet_store_csv_"))
        csv_path = tmpdir / "pets.csv"

    typer.echo(f"Generating {rows:,} pets -> {csv_path} (batch={batch_size}, seed={seed})")
    _generate_rows_csv(csv_path, rows=rows, batch_size=batch_size, seed=seed)
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    load_start = time.perf_counter()
    typer.echo("Loading CSV into Postgres via COPY...")
    _copy_into_db(_build_dsn(dsn), csv_path)
    typer.echo(f"Load completed in {time.perf_counter() - load_start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
