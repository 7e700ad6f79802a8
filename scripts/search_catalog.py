#!/usr/bin/env python
"""Search the catalog from the terminal with stored favorites overlaid."""

from __future__ import annotations

import argparse
import asyncio

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from movietrack.catalog.client import CatalogClient
from movietrack.db.connection import dispose_engine, get_engine, get_session_factory, init_models
from movietrack.schemas.movie import Movie
from movietrack.services.favorites import FavoritesStore
from movietrack.services.merge import LoadKind
from movietrack.services.movie_repository import MovieRepository
from movietrack.settings import get_settings

# Load environment variables
load_dotenv()

console = Console()


def build_table(term: str, movies: list[Movie]) -> Table:
    table = Table(title=f"Results for {term!r} ({len(movies)})")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Genre")
    table.add_column("Price", justify="right")
    table.add_column("★", justify="center")

    for movie in movies:
        table.add_row(
            str(movie.id),
            movie.title,
            movie.genre,
            f"{movie.price:.2f}",
            "★" if movie.is_favorite else "",
        )
    return table


async def search_catalog(term: str, *, initial: bool = False) -> list[Movie]:
    """Run one merged search against the configured catalog and database."""

    await init_models(get_engine())
    load_kind = LoadKind.INITIAL_LOAD if initial else LoadKind.USER_SEARCH

    async with CatalogClient.from_settings(get_settings()) as catalog:
        repository = MovieRepository(
            catalog=catalog,
            favorites=FavoritesStore(get_session_factory()),
        )
        result = await repository.search(term, load_kind)

    await dispose_engine()

    if result.remote_error is not None:
        console.print(f"[yellow]![/yellow] Catalog unavailable: {result.remote_error}")
    console.print(build_table(term, result.movies))
    return result.movies


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Search the movie catalog")
    parser.add_argument("term", nargs="?", default=None, help="Search term")
    parser.add_argument(
        "--initial",
        action="store_true",
        help="Treat the search as the startup load (show favorites when empty)",
    )
    args = parser.parse_args()

    term = args.term or get_settings().default_search_term
    await search_catalog(term, initial=args.initial)


if __name__ == "__main__":
    asyncio.run(main())
