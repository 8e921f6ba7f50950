from pydantic import Field

from app.schemas.availability import CamelModel


class RoomConfig(CamelModel):
    """Static display metadata of a room; never derived from the feed."""

    room_number: int
    room_name: str
    name: str
    description: str = ""
    max_persons: int = Field(2, ge=1)
    price: int = 0
    images: list[str] = Field(default_factory=list)
