"""Movie catalog and room endpoints."""

from fastapi import APIRouter, Depends

from cinereserve.api.deps import get_catalog, require_roles
from cinereserve.schemas import (
    MovieCreated,
    MovieDeleted,
    MoviePayload,
    MovieResponse,
    MovieUpdated,
    PlayingResponse,
    RoomResponse,
    SessionUser,
)
from cinereserve.services.access import CATALOG_EDITOR_ROLES
from cinereserve.services.catalog import CatalogService, parse_query_date

router = APIRouter()

require_editor = require_roles(*CATALOG_EDITOR_ROLES)


@router.post("/movies", response_model=MovieCreated, status_code=201)
async def add_movie(
    payload: MoviePayload,
    _: SessionUser = Depends(require_editor),
    catalog: CatalogService = Depends(get_catalog),
) -> MovieCreated:
    """Create a movie with its screenings in one transaction."""
    return await catalog.create_movie(payload)


@router.get("/movies", response_model=list[MovieResponse])
async def list_movies(catalog: CatalogService = Depends(get_catalog)) -> list[MovieResponse]:
    return await catalog.list_movies()


@router.get("/movies/playing", response_model=PlayingResponse)
async def list_playing_movies(
    date: str | None = None,
    catalog: CatalogService = Depends(get_catalog),
) -> PlayingResponse:
    """
    Movies running on a given day, with that day's show times.

    The ``date`` query parameter must be ``YYYY-MM-DD``; anything else is
    rejected before the database is touched.
    """
    day = parse_query_date(date)
    movies = await catalog.list_playing_on(day)
    return PlayingResponse(date=day, count=len(movies), data=movies)


@router.put("/movies/{movie_id}", response_model=MovieUpdated)
async def update_movie(
    movie_id: str,
    payload: MoviePayload,
    _: SessionUser = Depends(require_editor),
    catalog: CatalogService = Depends(get_catalog),
) -> MovieUpdated:
    """Replace a movie's fields and its full screening set."""
    return await catalog.update_movie(movie_id, payload)


@router.delete("/movies/{movie_id}", response_model=MovieDeleted)
async def delete_movie(
    movie_id: str,
    _: SessionUser = Depends(require_editor),
    catalog: CatalogService = Depends(get_catalog),
) -> MovieDeleted:
    return await catalog.delete_movie(movie_id)


@router.get("/rooms", response_model=list[RoomResponse])
async def list_rooms(catalog: CatalogService = Depends(get_catalog)) -> list[RoomResponse]:
    rooms = await catalog.list_rooms()
    return [RoomResponse.model_validate(room) for room in rooms]
