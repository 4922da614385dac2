import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.responses import envelope, error_envelope
from .api.routes import router
from .core.config import settings
from .core.errors import AllowanceError
from .db.base import Base
from .db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Allowance API", version="1.0.0")


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)


def _error_response(status_code: int, error, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_envelope(error, status_code)),
        headers=headers,
    )


@app.exception_handler(AllowanceError)
def allowance_error_handler(request: Request, exc: AllowanceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    # echoed input may hold NaN, which JSON cannot carry
    errors = [{k: v for k, v in e.items() if k != "input"} for e in exc.errors()]
    return _error_response(400, errors)


@app.get("/health", tags=["Health"])
def health():
    return envelope({"healthy": True})


app.include_router(router)
