"""EV Charging Station Management API: FastAPI backend."""
import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from utils.config import ALLOWED_ORIGINS, LOG_LEVEL, PORT

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

from api.auth import router as auth_router
from api.dashboard import router as dashboard_router
from api.errors import register_exception_handlers, unexpected_error_handler
from api.routes import router
from api.stations import router as stations_router
from db import check_connection, run_migrations
from utils.origins import is_allowed_origin

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="EV Charging Station Management API",
    description="Charging station CRUD, auth and dashboard aggregates",
    version="0.1.0",
)


@app.middleware("http")
async def error_envelope(request: Request, call_next):
    """Render uncaught errors as the 500 envelope; registered first so CORSMiddleware wraps it."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await unexpected_error_handler(request, exc)


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def origin_gate(request: Request, call_next):
    """Reject cross-origin requests from origins outside the allow-list before any route runs."""
    origin = request.headers.get("origin")
    if not is_allowed_origin(origin):
        LOG.warning("Rejected request from origin %s", origin)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"message": "Not allowed by CORS"},
        )
    return await call_next(request)


register_exception_handlers(app)

app.include_router(router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(stations_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


@app.on_event("startup")
def startup() -> None:
    """Connect to the database before serving; failure aborts startup. Migrate outside tests."""
    check_connection()
    if os.environ.get("TESTING") != "true":
        run_migrations()


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness string."""
    return "EV Charging Station Management API"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
