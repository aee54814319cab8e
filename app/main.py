from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app import config
from app.errors import ReportError
from app.routes import reports
import logging

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    redirect_slashes=False,
    title="Classroom Reports API",
    description="API for student reports, scoped by classroom",
    version="1.0.0",
    openapi_tags=[
        {
            "name": "Reports",
            "description": "Listing, creating and analyzing student reports",
        },
    ],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _field_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for error in exc.errors():
        # loc is ("body" | "query" | ..., field, ...)
        location = [str(part) for part in error["loc"][1:]] or [str(error["loc"][0])]
        errors.setdefault(".".join(location), []).append(error["msg"])
    return errors


@app.exception_handler(ReportError)
async def report_error_handler(request: Request, exc: ReportError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = _field_errors(exc)
    logger.warning(f"{request.method} {request.url.path} invalid request: {errors}")
    return JSONResponse(status_code=422, content={"message": "validation error", "errors": errors})


@app.exception_handler(APIError)
async def database_error_handler(request: Request, exc: APIError):
    logger.error(
        f"{request.method} {request.url.path} database error {exc.code}: {exc.message}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": "database error"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Include routers
app.include_router(reports.router, prefix="/reports", tags=["Reports"])
