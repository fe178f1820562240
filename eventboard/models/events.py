
from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from eventboard.database.db import Base


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[str] = mapped_column(String(32), nullable=False)
    # relative path of the stored image, e.g. "event-image/img_<hex>.png"
    url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self):
        return f"<Event {self.id} {self.title!r}>"
