"""Pydantic schemas for movie data."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MoviePayload(BaseModel):
    """
    Raw movie create/update body.

    Fields are deliberately loose; the catalog service validates them so each
    problem gets its own error message instead of a generic 422.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: str | None = None
    duration: Any = None
    start_date: Any = None
    end_date: Any = None
    room: Any = None
    screenings: Any = None


class MovieFields(BaseModel):
    """Validated movie columns."""

    title: str
    description: str | None = None
    duration: int
    start_date: date
    end_date: date
    room: int | None = None


class MovieResponse(MovieFields):
    """Movie with all of its screening times."""

    id: int
    screenings: list[datetime] = []


class PlayingMovie(MovieFields):
    """Movie playing on a given day with that day's show times."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    screenings: list[str]  # "HH:MM:SS"
    screening_ids: list[int] = Field(alias="screeningIds")


class PlayingResponse(BaseModel):
    success: bool = True
    date: date
    count: int
    data: list[PlayingMovie]


class MovieCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Movie added successfully"
    movie_id: int = Field(alias="movieId")
    screenings_added: int = Field(alias="screeningsAdded")


class MovieUpdated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Movie updated successfully"
    screenings_updated: int = Field(alias="screeningsUpdated")


class MovieDeleted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Movie deleted successfully"
    screenings_deleted: int = Field(alias="screeningsDeleted")
