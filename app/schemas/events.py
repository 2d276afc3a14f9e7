from typing import Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


# ---------- Event ----------
class EventIn(CamelModel):
    id: Optional[str] = Field(default=None, max_length=36)
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    date: str = Field(min_length=1, max_length=64)
    location: str = Field(min_length=1, max_length=300)
    image_url: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    active: bool = True

    @field_validator("capacity", mode="before")
    @classmethod
    def blank_capacity_is_unlimited(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class EventStatsOut(CamelModel):
    count: int
    is_sold_out: bool
    spots_left: Optional[int] = None
    is_urgent: bool


class EventOut(CamelModel):
    id: str
    title: str
    description: str
    date: str
    location: str
    image_url: Optional[str] = None
    capacity: Optional[int] = None
    active: bool


class EventWithStatsOut(EventOut):
    stats: EventStatsOut
