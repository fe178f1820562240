"""
Draft state of the event form.

The page never mutates the draft in place: every user interaction is an
action, and ``reduce`` returns the next state.
"""
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class ImageFile:
    name: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class EventItem:
    id: int
    title: str
    description: str
    date: str
    url: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> "EventItem":
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            date=data.get("date") or "",
            url=data.get("url") or None,
        )


@dataclass(frozen=True)
class EventForm:
    title: str = ""
    description: str = ""
    date: str = ""
    image: ImageFile | None = None  # newly chosen file
    image_url: str | None = None  # image already stored for the edited event


@dataclass(frozen=True)
class DraftState:
    form: EventForm = field(default_factory=EventForm)
    editing_id: int | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


# ---------- Actions ----------
@dataclass(frozen=True)
class FieldChanged:
    name: str
    value: str


@dataclass(frozen=True)
class FileChosen:
    image: ImageFile | None


@dataclass(frozen=True)
class ImageCleared:
    pass


@dataclass(frozen=True)
class EditStarted:
    event: EventItem


@dataclass(frozen=True)
class FormReset:
    pass


Action = FieldChanged | FileChosen | ImageCleared | EditStarted | FormReset

TEXT_FIELDS = ("title", "description", "date")


def reduce(state: DraftState, action: Action) -> DraftState:
    if isinstance(action, FieldChanged):
        if action.name not in TEXT_FIELDS:
            raise ValueError(f"Unknown form field: {action.name}")
        return replace(state, form=replace(state.form, **{action.name: action.value}))

    if isinstance(action, FileChosen):
        # a new upload supersedes whatever was stored before
        if action.image is None:
            return replace(state, form=replace(state.form, image=None))
        return replace(state, form=replace(state.form, image=action.image, image_url=None))

    if isinstance(action, ImageCleared):
        return replace(state, form=replace(state.form, image=None, image_url=None))

    if isinstance(action, EditStarted):
        event = action.event
        return DraftState(
            form=EventForm(
                title=event.title,
                description=event.description,
                date=event.date,
                image_url=event.url,
            ),
            editing_id=event.id,
        )

    if isinstance(action, FormReset):
        return DraftState()

    raise TypeError(f"Unknown action: {action!r}")


def missing_fields(state: DraftState) -> list[str]:
    return [name for name in ("title", "date") if not getattr(state.form, name)]


def build_submission(state: DraftState) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]]]:
    """Multipart fields and files for the POST that saves this draft."""
    form = state.form
    data = {"title": form.title, "description": form.description, "date": form.date}
    files = {}

    if state.is_editing:
        data["id"] = str(state.editing_id)

    if form.image is not None:
        files["image"] = (form.image.name, form.image.content, form.image.content_type)
    elif state.is_editing and form.image_url is None:
        data["remove_image"] = "1"

    return data, files
