"""Pydantic schemas for screening data."""

from pydantic import BaseModel, ConfigDict, Field


class ScreeningInfo(BaseModel):
    """A screening joined with its movie."""

    id: int
    movie_id: int
    screening_time: str
    title: str
    duration: int
    formatted_time: str


class ScreeningDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    screening: ScreeningInfo
    reserved_seats: list[str] = Field(alias="reservedSeats")


class ScreeningDetailResponse(BaseModel):
    success: bool = True
    data: ScreeningDetail


class ScreeningStats(BaseModel):
    """Occupancy of one upcoming screening."""

    id: int
    movie_title: str
    duration: int
    screening_time: str
    reserved_seats: int
    total_seats: int
    reserved_seat_numbers: list[str]
    available_seats: int
    occupancy_rate: int  # percent


class ScreeningStatsResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ScreeningStats]
