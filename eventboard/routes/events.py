from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import FormData, UploadFile

from eventboard.database.db import get_db
from eventboard.schemas.events import ErrorOut, EventFields, EventOut, EventUpdatedOut, MessageOut
from eventboard.services.dispatch import RequestKind, classify_request, parse_id
from eventboard.services.events import (
    EventNotFoundError,
    ImageUpload,
    create_event,
    delete_event,
    get_event,
    list_events,
    update_event,
)
from eventboard.services.file_store import FileStore, get_file_store

router = APIRouter(prefix="/events", tags=["events"])

# Every verb reaches the endpoint so unsupported ones get a JSON 405.
EVENT_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorOut(error=message).model_dump(exclude_none=True))


async def read_image(form: FormData) -> ImageUpload | None:
    upload = form.get("image")
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    return ImageUpload(filename=upload.filename, data=await upload.read())


def read_fields(form: FormData) -> EventFields:
    def text(name: str) -> str:
        value = form.get(name)
        return value if isinstance(value, str) else ""

    return EventFields(title=text("title"), date=text("date"), description=text("description"))


def handle_event_request(
    kind: RequestKind,
    db: Session | None,
    store: FileStore | None,
    *,
    event_id: int | None = None,
    form: FormData | None = None,
    image: ImageUpload | None = None,
) -> Response:
    match kind:
        case RequestKind.PREFLIGHT:
            return Response(status_code=200)

        case RequestKind.LIST:
            return JSONResponse([EventOut.model_validate(e).model_dump() for e in list_events(db)])

        case RequestKind.GET_ONE:
            try:
                event = get_event(db, event_id)
            except EventNotFoundError as e:
                return error_response(404, str(e))
            return JSONResponse(EventOut.model_validate(event).model_dump())

        case RequestKind.CREATE:
            try:
                fields = read_fields(form)
            except ValidationError:
                return error_response(400, "Title and date are required")
            event = create_event(db, store, fields=fields, image=image)
            return JSONResponse(EventOut.model_validate(event).model_dump())

        case RequestKind.UPDATE:
            try:
                fields = read_fields(form)
            except ValidationError:
                return error_response(400, "Title and date are required")
            try:
                event = update_event(
                    db,
                    store,
                    event_id=event_id,
                    fields=fields,
                    image=image,
                    remove_image="remove_image" in form,
                )
            except EventNotFoundError as e:
                return error_response(404, str(e))
            return JSONResponse(EventUpdatedOut.model_validate(event).model_dump())

        case RequestKind.PUT_REJECTED:
            return error_response(405, "Use POST with 'id' for updating")

        case RequestKind.DELETE:
            if not event_id:
                return error_response(400, "ID is required for deletion")
            try:
                delete_event(db, store, event_id)
            except EventNotFoundError as e:
                return error_response(404, str(e))
            return JSONResponse(MessageOut(message="Event deleted").model_dump())

        case _:
            return error_response(405, "Unsupported request method")


@router.api_route("", methods=EVENT_METHODS)
async def events_endpoint(
    request: Request,
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    query_id = parse_id(request.query_params.get("id"))
    if request.method != "POST":
        kind = classify_request(request.method, query_id, None)
        return await run_in_threadpool(handle_event_request, kind, db, store, event_id=query_id)

    form = await request.form()
    try:
        raw_id = form.get("id")
        form_id = parse_id(raw_id if isinstance(raw_id, str) else None)
        image = await read_image(form)
        kind = classify_request(request.method, query_id, form_id)
        return await run_in_threadpool(
            handle_event_request, kind, db, store, event_id=form_id, form=form, image=image
        )
    finally:
        await form.close()
