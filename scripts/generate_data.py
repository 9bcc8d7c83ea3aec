"""
Synthetic upstream data for the rental reports job.

Builds a small, deterministic dvdrental-shaped dataset (categories, films,
film_category, inventory and rentals) around a given day and optionally
loads it into a scratch Postgres database with COPY. The upstream tables are
created only if missing; do not point this at a real dvdrental database.
"""

from __future__ import annotations

import random
import sys
import time
from datetime import date, datetime, timedelta
from decimal import Decimal

import psycopg
import typer

from rental_reports.domain.models import Category, Film, FilmCategory, InventoryItem, Rental
from rental_reports.infrastructure.db_factory import build_dsn
from rental_reports.sources.in_memory import InMemoryRentalSource

app = typer.Typer(help="Generate synthetic dvdrental data and load into Postgres (COPY).")

CATEGORY_NAMES = [
    "Action", "Animation", "Children", "Classics", "Comedy", "Documentary",
    "Drama", "Family", "Foreign", "Games", "Horror", "Music", "New",
    "Sci-Fi", "Sports", "Travel",
]
RATINGS = ["G", "PG", "PG-13", "R", "NC-17"]
RENTAL_RATES = [Decimal("0.99"), Decimal("2.99"), Decimal("4.99")]

CREATE_UPSTREAM_SQL = [
    "CREATE TABLE IF NOT EXISTS category (category_id INT PRIMARY KEY, name VARCHAR(25) NOT NULL);",
    """
    CREATE TABLE IF NOT EXISTS film (
        film_id INT PRIMARY KEY,
        title VARCHAR(255) NOT NULL,
        rating TEXT,
        rental_rate NUMERIC(4, 2) NOT NULL
    );
    """,
    "CREATE TABLE IF NOT EXISTS film_category (film_id INT NOT NULL, category_id INT NOT NULL);",
    "CREATE TABLE IF NOT EXISTS inventory (inventory_id INT PRIMARY KEY, film_id INT NOT NULL);",
    """
    CREATE TABLE IF NOT EXISTS rental (
        rental_id INT PRIMARY KEY,
        rental_date TIMESTAMP NOT NULL,
        inventory_id INT NOT NULL
    );
    """,
]


def _build_dsn(dsn_override: str | None) -> str:
    if dsn_override:
        return dsn_override
    return build_dsn()


def _generate_source(
    day: date, rentals: int, films: int = 50, copies: int = 3, seed: int = 42
) -> InMemoryRentalSource:
    """
    Build upstream rows with `rentals` rentals on `day`.

    A tenth as many rentals again are spread over the previous and next day so
    that window filtering has something to exclude.
    """
    rng = random.Random(seed)
    categories = [Category(category_id=i + 1, name=name) for i, name in enumerate(CATEGORY_NAMES)]
    film_rows = [
        Film(
            film_id=i,
            title=f"Sample Film {i:04d}",
            rating=rng.choice(RATINGS),
            rental_rate=rng.choice(RENTAL_RATES),
        )
        for i in range(1, films + 1)
    ]
    links = [
        FilmCategory(film_id=film.film_id, category_id=rng.choice(categories).category_id)
        for film in film_rows
    ]
    inventory = [
        InventoryItem(inventory_id=(film.film_id - 1) * copies + n + 1, film_id=film.film_id)
        for film in film_rows
        for n in range(copies)
    ]

    start = datetime.combine(day, datetime.min.time())
    days = [start] * rentals + [
        start + timedelta(days=rng.choice([-1, 1])) for _ in range(max(rentals // 10, 1))
    ]
    rental_rows = [
        Rental(
            rental_id=rental_id,
            inventory_id=rng.choice(inventory).inventory_id,
            rental_date=midnight + timedelta(seconds=rng.randrange(24 * 60 * 60)),
        )
        for rental_id, midnight in enumerate(days, start=1)
    ]
    return InMemoryRentalSource(
        rentals=rental_rows,
        inventory=inventory,
        films=film_rows,
        film_categories=links,
        categories=categories,
    )


def _copy_into_db(dsn: str, source: InMemoryRentalSource) -> int:
    """Create missing upstream tables and COPY the generated rows in. Returns rows loaded."""
    relations = [
        ("category", ("category_id", "name"), source.category_rows),
        ("film", ("film_id", "title", "rating", "rental_rate"), source.film_rows),
        ("film_category", ("film_id", "category_id"), source.film_category_rows),
        ("inventory", ("inventory_id", "film_id"), source.inventory_rows),
        ("rental", ("rental_id", "rental_date", "inventory_id"), source.rental_rows),
    ]
    loaded = 0
    with psycopg.connect(dsn) as conn:
        with conn.cursor() as cur:
            for statement in CREATE_UPSTREAM_SQL:
                cur.execute(statement)
            for table, columns, rows in relations:
                with cur.copy(f"COPY {table} ({', '.join(columns)}) FROM STDIN") as copy:
                    for row in rows:
                        copy.write_row([getattr(row, column) for column in columns])
                loaded += len(rows)
        conn.commit()
    return loaded


@app.command()
def main(
    day: datetime = typer.Option(
        "2005-05-30",
        "--day",
        "-d",
        formats=["%Y-%m-%d"],
        help="Business day the rentals fall on.",
    ),
    rentals: int = typer.Option(
        1_000,
        "--rentals",
        "-r",
        help="Number of rentals to generate on the day.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only generate rows; skip loading into Postgres.",
    ),
) -> None:
    """
    Generate synthetic upstream rows and optionally load them into Postgres using COPY.
    """
    start = time.perf_counter()
    source = _generate_source(day.date(), rentals=rentals, seed=seed)
    typer.echo(
        f"Generated {len(source.rental_rows):,} rentals around {day.date()} "
        f"({len(source.film_rows)} films, {len(source.inventory_rows)} inventory items)"
    )

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    loaded = _copy_into_db(_build_dsn(dsn), source)
    typer.echo(f"Loaded {loaded:,} rows in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
