import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventboard.core.config import IMAGE_DIR, LOG_LEVEL, get_storage_root
from eventboard.database.db import Base, engine
from eventboard.routes import events
from eventboard.schemas.events import ErrorOut
from eventboard.services.dispatch import RequestKind
from eventboard.services.file_store import LocalFileStore

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Eventboard")

# Configure CORS
origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(OperationalError)
async def database_unavailable(request: Request, exc: OperationalError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    content = ErrorOut(error="DB connection failed", details=str(exc.orig or exc))
    return JSONResponse(status_code=500, content=content.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    # verbs the router never hands to the endpoint (HEAD, TRACE, ...)
    if exc.status_code == 405:
        return events.handle_event_request(RequestKind.UNSUPPORTED, None, None)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorOut(error=str(exc.detail)).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


# Create all tables (in production, use migrations such as Alembic)
Base.metadata.create_all(bind=engine)

# Stored urls ("event-image/...") resolve against the API origin
image_store = LocalFileStore(get_storage_root())
image_store.directory.mkdir(parents=True, exist_ok=True)
app.mount(f"/{IMAGE_DIR}", StaticFiles(directory=image_store.directory), name=IMAGE_DIR)

# Include the routers
app.include_router(events.router)
