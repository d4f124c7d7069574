"""Pydantic schemas for room data."""

from pydantic import BaseModel, ConfigDict


class RoomResponse(BaseModel):
    """Room response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
