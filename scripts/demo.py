#!/usr/bin/env python3
"""
Demo script for the poster cache.

This script walks through a recommendation session against the live TMDB
API: candidates are filtered by a watched list, the next poster is
prefetched in the background, and showing it afterwards is a cache hit.

Requires TMDB_API_KEY. The watched list is kept in memory, so Redis is
not needed.
"""

import asyncio
import time

from poster_cache.config import settings
from poster_cache.log_config import configure_logging
from poster_cache.repositories import ContentCache, HttpFetcher, MemoryIdStore, PosterDecoder, TmdbClient
from poster_cache.services import PosterService, RecommendationSession, WatchedSet


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_genres(tmdb: TmdbClient) -> list[int]:
    """List genres and pick the first two."""
    print_section("Genres")

    genres = await tmdb.genres()
    for genre in genres[:10]:
        print(f"  {genre.id:>6}  {genre.name}")

    selected = [g.id for g in genres[:2]]
    print(f"\n  Selected: {selected}")
    return selected


async def demo_session(tmdb: TmdbClient, posters: PosterService, genre_ids: list[int]) -> None:
    """Rotate through a few recommendations."""
    print_section("Recommendation Session")

    watched = WatchedSet(store=MemoryIdStore())
    session = RecommendationSession(watched=watched, prefetcher=posters.prefetcher)

    current = await session.start(await tmdb.candidates(genre_ids))
    if current is None:
        print("  No candidates with posters.")
        return

    for step in range(4):
        url = current.poster_url(settings.tmdb_image_base_url)
        started = time.perf_counter()
        poster = await posters.load(url)
        elapsed_ms = (time.perf_counter() - started) * 1000

        size = f"{len(poster.data):,} bytes {poster.media_type}" if poster else "unavailable"
        print(f"\n  [{step}] {current.title} (id={current.id})")
        print(f"      poster: {size} in {elapsed_ms:.1f} ms")
        if session.preloaded is not None:
            print(f"      next:   {session.preloaded.title} (prefetching)")

        # Give the prefetch a head start, like a user reading the card
        await posters.prefetcher.wait_idle()

        if step % 2 == 0:
            current = await session.mark_watched()
        else:
            current = await session.skip()
        if current is None:
            print("\n  Pool exhausted.")
            break

    print(f"\n  Watched: {sorted(await watched.ids())}")


async def demo_details(tmdb: TmdbClient, movie_id: int) -> None:
    """Show details for one movie."""
    print_section("Movie Details")

    detail = await tmdb.movie_details(movie_id)
    if detail is None:
        print("  Details unavailable.")
        return

    print(f"  {detail.title} ({detail.release_date}, {detail.runtime} min)")
    if detail.tagline:
        print(f"  \"{detail.tagline}\"")
    print(f"  Countries: {', '.join(detail.production_countries)}")
    for member in detail.cast[:5]:
        print(f"    - {member.name} as {member.character}")


async def run() -> None:
    """Run all demos."""
    tmdb = TmdbClient.create()
    fetcher = HttpFetcher.create()
    posters = PosterService.create(store=ContentCache.create(), fetcher=fetcher, decoder=PosterDecoder())

    try:
        genre_ids = await demo_genres(tmdb)
        await demo_session(tmdb, posters, genre_ids)

        candidates = await tmdb.candidates(genre_ids)
        if candidates:
            await demo_details(tmdb, candidates[0].id)

        print_section("Cache Stats")
        for name, value in posters.get_stats().items():
            print(f"  {name:<20} {value}")
    finally:
        posters.prefetcher.cancel_all()
        await fetcher.close()
        await tmdb.close()


def main() -> None:
    """Entry point."""
    print("\n🎬 Poster Cache Demo")
    print("=" * 70)

    configure_logging()

    try:
        asyncio.run(run())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure TMDB_API_KEY is set to a valid key.")


if __name__ == "__main__":
    main()
