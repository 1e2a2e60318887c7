from __future__ import annotations

import asyncio
from typing import Any, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from content_cache.cache import keys
from content_cache.db.models import (
    Genre,
    Movie,
    MovieGenre,
    MovieOverview,
    MovieProductionCompany,
    Overview,
    ProductionCompany,
    Status,
)
from content_cache.db.repository import Repository, page_window, to_dict

from .store import ContentStore, filter_by_relation, with_relations

PUBLISHED = {"status": Status.PUBLISHED}


async def get_movie_by_slug(store: ContentStore, slug: str) -> Optional[dict[str, Any]]:
    """Movie with genres, production companies and its first overview text.

    Unknown slugs return None and are not cached, so every lookup for a
    missing movie reaches the database.
    """

    async def load() -> Optional[dict[str, Any]]:
        async with store.db.session() as session:
            movie = await Repository(session, Movie).first({"slug": slug})
        if movie is None:
            return None

        genres, overviews, companies = await asyncio.gather(
            store.rows(
                select(Genre.id, Genre.title, Genre.slug)
                .select_from(MovieGenre)
                .outerjoin(Genre, MovieGenre.genre_id == Genre.id)
                .where(MovieGenre.movie_id == movie.id)
            ),
            store.rows(
                select(Overview.id, Overview.content, Overview.language)
                .select_from(MovieOverview)
                .outerjoin(Overview, MovieOverview.overview_id == Overview.id)
                .where(MovieOverview.movie_id == movie.id)
            ),
            store.rows(
                select(
                    ProductionCompany.id,
                    ProductionCompany.name,
                    ProductionCompany.logo,
                    ProductionCompany.slug,
                )
                .select_from(MovieProductionCompany)
                .outerjoin(
                    ProductionCompany,
                    MovieProductionCompany.production_company_id == ProductionCompany.id,
                )
                .where(MovieProductionCompany.movie_id == movie.id)
            ),
        )
        return {
            **to_dict(movie),
            "overview": overviews[0]["content"] if overviews else None,
            "genres": genres,
            "production_companies": companies,
        }

    return await store.cached("movie_by_slug", keys.movie_by_slug(slug), load)


async def get_latest_movies(store: ContentStore, page: int, per_page: int) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        async with store.db.session() as session:
            rows = await Repository(session, Movie).page(
                PUBLISHED,
                order_by=Movie.updated_at.desc(),
                limit=limit,
                offset=offset,
            )
        return [to_dict(row) for row in rows]

    return await store.cached("movies_latest", keys.movies_latest(page, per_page), load)


async def get_related_movies(
    store: ContentStore, current_movie_id: str, genre_id: str, limit: int
) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        in_genre = select(MovieGenre.movie_id).where(MovieGenre.genre_id == genre_id)
        async with store.db.session() as session:
            rows = await Repository(session, Movie).page(
                PUBLISHED,
                Movie.id != current_movie_id,
                Movie.id.in_(in_genre),
                order_by=Movie.updated_at.desc(),
                limit=limit,
                options=[selectinload(Movie.genres)],
            )
        items = [with_relations(row, ["genres"]) for row in rows]
        return filter_by_relation(items, "genres", "genre_id", genre_id)

    return await store.cached(
        "related_movies", keys.related_movies(current_movie_id, genre_id, limit), load
    )


async def get_movies_by_genre_id(
    store: ContentStore, genre_id: str, page: int, per_page: int
) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        in_genre = select(MovieGenre.movie_id).where(MovieGenre.genre_id == genre_id)
        async with store.db.session() as session:
            rows = await Repository(session, Movie).page(
                PUBLISHED,
                Movie.id.in_(in_genre),
                order_by=Movie.updated_at.desc(),
                limit=limit,
                offset=offset,
                options=[selectinload(Movie.genres)],
            )
        items = [with_relations(row, ["genres"]) for row in rows]
        return filter_by_relation(items, "genres", "genre_id", genre_id)

    return await store.cached(
        "movies_by_genre", keys.movies_by_genre(genre_id, page, per_page), load
    )


async def get_movies_by_production_company_id(
    store: ContentStore, production_company_id: str, page: int, per_page: int
) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        by_company = select(MovieProductionCompany.movie_id).where(
            MovieProductionCompany.production_company_id == production_company_id
        )
        async with store.db.session() as session:
            rows = await Repository(session, Movie).page(
                PUBLISHED,
                Movie.id.in_(by_company),
                order_by=Movie.updated_at.desc(),
                limit=limit,
                offset=offset,
                options=[selectinload(Movie.production_companies)],
            )
        items = [with_relations(row, ["production_companies"]) for row in rows]
        return filter_by_relation(
            items, "production_companies", "production_company_id", production_company_id
        )

    return await store.cached(
        "movies_by_production_company",
        keys.movies_by_production_company(production_company_id, page, per_page),
        load,
    )


async def get_movies_sitemap(store: ContentStore, page: int, per_page: int) -> list[dict[str, Any]]:
    async def load() -> list[dict[str, Any]]:
        limit, offset = page_window(page, per_page)
        async with store.db.session() as session:
            return await Repository(session, Movie).columns(
                ["slug", "updated_at"],
                PUBLISHED,
                order_by=Movie.updated_at.desc(),
                limit=limit,
                offset=offset,
            )

    return await store.cached("movies_sitemap", keys.movies_sitemap(page, per_page), load)


async def get_movies_count(store: ContentStore) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Movie).count(PUBLISHED)

    return await store.cached("movies_count", keys.movies_count(), load)


async def get_movies_count_by_genre_id(store: ContentStore, genre_id: str) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Movie).count(
                PUBLISHED, MovieGenre.genre_id == genre_id, join=MovieGenre
            )

    return await store.cached("movies_count_by_genre", keys.movies_count_by_genre(genre_id), load)


async def get_movies_count_by_production_company_id(
    store: ContentStore, production_company_id: str
) -> int:
    async def load() -> int:
        async with store.db.session() as session:
            return await Repository(session, Movie).count(
                PUBLISHED,
                MovieProductionCompany.production_company_id == production_company_id,
                join=MovieProductionCompany,
            )

    return await store.cached(
        "movies_count_by_production_company",
        keys.movies_count_by_production_company(production_company_id),
        load,
    )


async def search_movies(store: ContentStore, search_query: str, limit: int) -> list[dict[str, Any]]:
    """Case-insensitive substring match on title or slug, cached briefly."""

    async def load() -> list[dict[str, Any]]:
        pattern = f"%{search_query}%"
        async with store.db.session() as session:
            rows = await Repository(session, Movie).page(
                PUBLISHED,
                or_(Movie.title.ilike(pattern), Movie.slug.ilike(pattern)),
                order_by=Movie.updated_at.desc(),
                limit=limit,
            )
        return [to_dict(row) for row in rows]

    return await store.cached("movies_search", keys.movies_search(search_query, limit), load)
