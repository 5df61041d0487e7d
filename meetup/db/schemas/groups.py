from pydantic import BaseModel


class GroupBase(BaseModel):
    name: str
    about: str
    type: str
    private: bool
    city: str
    state: str


class GroupCreate(GroupBase):
    pass


class GroupUpdate(BaseModel):
    name: str | None = None
    about: str | None = None
    type: str | None = None
    private: bool | None = None
    city: str | None = None
    state: str | None = None


class VenueBase(BaseModel):
    address: str
    city: str
    state: str
    lat: float
    lng: float


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    lat: float | None = None
    lng: float | None = None


class ImageCreate(BaseModel):
    url: str
    preview: bool = False


class MembershipStatusUpdate(BaseModel):
    member_id: int
    status: str
