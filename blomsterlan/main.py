# blomsterlan/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from blomsterlan.api.balances import router as balances_router
from blomsterlan.api.customers import router as customers_router
from blomsterlan.api.items import router as items_router
from blomsterlan.api.transactions import router as transactions_router
from blomsterlan.config import get_settings
from blomsterlan.db.engine import get_engine
from blomsterlan.db.schema import metadata
from blomsterlan.errors import NotFoundError, ReferentialIntegrityError, ValidationError
from blomsterlan.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    metadata.create_all(get_engine())
    logger.info("Schema ready on %s", settings.database_url)
    yield


app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    lifespan=lifespan,
)


@app.get("/health")
def health_check():
    return {"status": "ok"}


# ---- Error mapping ----

@app.exception_handler(ValidationError)
def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "fields": [e.as_dict() for e in exc.errors]},
    )


@app.exception_handler(ReferentialIntegrityError)
def handle_reference_error(request: Request, exc: ReferentialIntegrityError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "fields": [e.as_dict() for e in exc.errors]},
    )


@app.exception_handler(RequestValidationError)
def handle_request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or a non-integer id in the path.
    fields = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Ogiltig förfrågan", "fields": fields},
    )


@app.exception_handler(NotFoundError)
def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": exc.message})


@app.exception_handler(SQLAlchemyError)
def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Ett fel uppstod"})


app.include_router(customers_router, prefix="/api")
app.include_router(items_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")
app.include_router(balances_router, prefix="/api")
