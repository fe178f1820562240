
from pydantic import BaseModel, Field


# ---------- Event ----------
class EventFields(BaseModel):
    title: str = Field(min_length=1)
    date: str = Field(min_length=1)
    description: str = ""


class EventOut(BaseModel):
    id: int
    title: str
    description: str
    date: str
    url: str | None = None

    class Config:
        from_attributes = True


class EventUpdatedOut(EventOut):
    message: str = "Event updated"


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str
    details: str | None = None
