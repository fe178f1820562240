import logging
from dataclasses import dataclass
from pathlib import PurePath

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from eventboard.models.events import Event
from eventboard.schemas.events import EventFields
from eventboard.services.file_store import FileStore

logger = logging.getLogger(__name__)


class EventNotFoundError(Exception):
    pass


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    data: bytes

    @property
    def extension(self) -> str:
        # only the last suffix counts: "photo.tar.gz" -> "gz"
        return PurePath(self.filename.replace("\\", "/")).suffix.lstrip(".")


def save_image(store: FileStore, image: ImageUpload | None) -> str | None:
    """Store an upload; a failed write degrades to "no image"."""
    if image is None:
        return None
    try:
        return store.store(image.data, image.extension)
    except OSError as e:
        logger.warning("Could not store upload %r: %s", image.filename, e)
        return None


def discard_image(store: FileStore, url: str | None) -> None:
    if url and not store.remove(url):
        logger.debug("Image %s was already gone", url)


def list_events(db: Session) -> list[Event]:
    return list(db.scalars(select(Event).order_by(Event.date, Event.id)))


def get_event(db: Session, event_id: int) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise EventNotFoundError("Event not found")
    return event


def create_event(
    db: Session, store: FileStore, *, fields: EventFields, image: ImageUpload | None = None
) -> Event:
    """
    Store the upload (if any) and insert the row.
    The file is written before the insert; a failed insert leaves the file behind.
    """
    url = save_image(store, image)
    event = Event(title=fields.title, description=fields.description, date=fields.date, url=url)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event %s (image=%s)", event.id, url)
    return event


def update_event(
    db: Session,
    store: FileStore,
    *,
    event_id: int,
    fields: EventFields,
    image: ImageUpload | None = None,
    remove_image: bool = False,
) -> Event:
    """
    Overwrite an event's fields and resolve its image:
    a new upload replaces the old file, otherwise ``remove_image`` drops it,
    otherwise the image is left alone.
    """
    event = get_event(db, event_id)

    new_url = save_image(store, image)
    if new_url:
        discard_image(store, event.url)
        event.url = new_url
    elif remove_image:
        discard_image(store, event.url)
        event.url = None

    event.title = fields.title
    event.description = fields.description
    event.date = fields.date
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s (image=%s)", event.id, event.url)
    return event


def delete_event(db: Session, store: FileStore, event_id: int) -> None:
    """Remove the event's image, then its row. No rollback if the row delete fails."""
    event = db.get(Event, event_id)
    if event:
        discard_image(store, event.url)

    res = db.execute(delete(Event).where(Event.id == event_id))
    db.commit()
    if res.rowcount != 1:  # type: ignore
        raise EventNotFoundError("Event not found")
    logger.info("Deleted event %s", event_id)
