from datetime import datetime
from pydantic import BaseModel


class EventBase(BaseModel):
    venue_id: int | None = None
    name: str
    type: str
    capacity: int
    price: float
    description: str
    start_date: datetime
    end_date: datetime


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    venue_id: int | None = None
    name: str | None = None
    type: str | None = None
    capacity: int | None = None
    price: float | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class EventQuery(BaseModel):
    page: int = 1
    size: int = 20
    name: str | None = None
    type: str | None = None
    start_date: datetime | None = None


class AttendanceStatusUpdate(BaseModel):
    user_id: int
    status: str
